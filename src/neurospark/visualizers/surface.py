"""
Drawing surfaces.

The renderer only talks to the DrawingSurface protocol, so the
simulation can be driven against a pygame canvas, an offscreen export
buffer or a recording stub in tests.
"""

import math
from typing import Optional, Protocol, Sequence

import numpy as np
import pygame

RGBA = tuple[int, int, int, int]
Stops = Sequence[tuple[float, RGBA]]


class DrawingSurface(Protocol):
    """Minimal 2D canvas the frame renderer draws onto."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def resize(self, width: int, height: int) -> None: ...

    def fill_rect(self, color: RGBA) -> None:
        """Fill the whole surface with a (possibly translucent) color."""

    def stroke_polyline(self, points: Sequence[tuple[float, float]], color: RGBA, width: float) -> None:
        """Stroke an open path with round caps and joins."""

    def fill_radial_gradient(self, center: tuple[float, float], radius: float, stops: Stops) -> None:
        """Fill a disc whose color follows stops from center (0) to rim (1)."""


def _lerp_color(c1: RGBA, c2: RGBA, t: float) -> RGBA:
    return tuple(int(round(a + (b - a) * t)) for a, b in zip(c1, c2))


def gradient_color(stops: Stops, t: float) -> RGBA:
    """Color at offset t along sorted gradient stops."""
    if t <= stops[0][0]:
        return stops[0][1]
    for (o1, c1), (o2, c2) in zip(stops, stops[1:]):
        if t <= o2:
            span = o2 - o1
            return _lerp_color(c1, c2, (t - o1) / span if span > 0 else 1.0)
    return stops[-1][1]


class PygameSurface:
    """
    DrawingSurface backed by a persistent pygame.Surface.

    Translucent primitives are drawn onto small SRCALPHA layers and then
    blitted, so each stroke blends with what is already on the canvas.
    """

    def __init__(self, width: int, height: int, background: tuple[int, int, int] = (0, 0, 0)):
        self.background = background
        self.surface = pygame.Surface((max(0, width), max(0, height)))
        self.surface.fill(background)
        self._fade_layer: Optional[pygame.Surface] = None
        self._fade_key = None

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def _is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def resize(self, width: int, height: int):
        resized = pygame.Surface((max(0, width), max(0, height)))
        resized.fill(self.background)
        resized.blit(self.surface, (0, 0))
        self.surface = resized

    def fill_rect(self, color: RGBA):
        if self._is_empty():
            return
        r, g, b, a = color
        if a >= 255:
            self.surface.fill((r, g, b))
            return
        # Reuse the fade layer while size and color are unchanged
        key = (self.surface.get_size(), color)
        if self._fade_key != key:
            self._fade_layer = pygame.Surface(self.surface.get_size())
            self._fade_layer.fill((r, g, b))
            self._fade_layer.set_alpha(a)
            self._fade_key = key
        self.surface.blit(self._fade_layer, (0, 0))

    def stroke_polyline(self, points, color: RGBA, width: float):
        if self._is_empty() or len(points) < 2 or color[3] <= 0:
            return
        line_width = max(1, int(round(width)))
        pad = line_width + 1
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        left = math.floor(min(xs)) - pad
        top = math.floor(min(ys)) - pad
        size = (math.ceil(max(xs)) + pad - left + 1, math.ceil(max(ys)) + pad - top + 1)

        layer = pygame.Surface(size, pygame.SRCALPHA)
        local = [(x - left, y - top) for x, y in points]
        pygame.draw.lines(layer, color, False, local, line_width)
        if line_width > 2:
            # Round caps and joins
            for x, y in local:
                pygame.draw.circle(layer, color, (x, y), line_width / 2)
        self.surface.blit(layer, (left, top))

    def fill_radial_gradient(self, center, radius: float, stops: Stops):
        if self._is_empty() or radius <= 0 or not stops:
            return
        r_int = int(math.ceil(radius))
        size = 2 * r_int + 2
        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        mid = size / 2

        # Outer rings first, each inner disc overwrites the one beneath.
        # The last pass (t=0) paints the center pixel with the first stop.
        steps = max(r_int * 2, 1)
        for i in range(steps, -1, -1):
            t = i / steps
            color = gradient_color(stops, t)
            if color[3] > 0:
                pygame.draw.circle(layer, color, (mid, mid), max(1.0, radius * t))
        self.surface.blit(layer, (center[0] - mid, center[1] - mid))

    def to_array(self) -> np.ndarray:
        """Convert to an (H, W, 3) uint8 array for compositing and encoding."""
        if self._is_empty():
            return np.zeros((self.height, self.width, 3), dtype=np.uint8)
        # pygame uses (width, height) but numpy expects (height, width)
        arr = pygame.surfarray.array3d(self.surface)
        return np.transpose(arr, (1, 0, 2))
