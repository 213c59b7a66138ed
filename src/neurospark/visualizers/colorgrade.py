"""
Color conversion and background compositing.

Pulses are specified in HSL and drawn dim and additive; these helpers
turn HSL into RGBA tuples and composite the finished pulse layer over a
background image without clipping highlights to flat white.
"""

import colorsys
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps


def hsla(
    hue: float,
    saturation: float,
    lightness: float,
    alpha: float = 1.0,
) -> tuple[int, int, int, int]:
    """
    Convert CSS-style HSLA to an 8-bit RGBA tuple.

    Args:
        hue: Hue in degrees (wraps at 360).
        saturation: Saturation (0-1).
        lightness: Lightness (0-1).
        alpha: Opacity (0-1), clamped.

    Returns:
        (r, g, b, a) with each channel in 0-255.
    """
    r, g, b = colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)
    a = min(1.0, max(0.0, alpha))
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))


def screen_blend(base: np.ndarray, layer: np.ndarray) -> np.ndarray:
    """
    Screen-blend layer over base: result = 1 - (1-a)(1-b).

    Args:
        base: (H, W, 3) uint8 RGB array.
        layer: (H, W, 3) uint8 RGB array of the same shape.

    Returns:
        (H, W, 3) uint8 RGB array.
    """
    if base.shape != layer.shape:
        raise ValueError(f"Shape mismatch: {base.shape} vs {layer.shape}")
    a = base.astype(np.float32) / 255.0
    b = layer.astype(np.float32) / 255.0
    screen = 1.0 - (1.0 - a) * (1.0 - b)
    return (screen * 255).astype(np.uint8)


def tone_map_soft(
    frame: np.ndarray,
    shoulder: float = 0.78,
) -> np.ndarray:
    """
    Soft-knee tone mapping to compress highlights without hard clipping.

    Pixels below ``shoulder`` (as a fraction of 255) pass through unchanged.
    Highlights above it follow a Reinhard-style curve toward 255.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        shoulder: Brightness fraction (0-1) where compression begins.

    Returns:
        (H, W, 3) uint8 RGB array with compressed highlights.
    """
    threshold = shoulder * 255.0
    headroom = 255.0 - threshold

    f = frame.astype(np.float32)
    above = np.maximum(f - threshold, 0.0)
    compressed = threshold + above * headroom / (above + headroom)

    mask = f > threshold
    result = np.where(mask, compressed, f)

    return result.astype(np.uint8)


def load_background(path: Path, width: int, height: int) -> np.ndarray:
    """
    Load an image and cover-fit it to width x height.

    Returns:
        (H, W, 3) uint8 RGB array.
    """
    with Image.open(path) as img:
        fitted = ImageOps.fit(img.convert("RGB"), (width, height), Image.BILINEAR)
        return np.asarray(fitted, dtype=np.uint8).copy()
