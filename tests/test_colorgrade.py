"""Tests for color conversion and compositing."""

import numpy as np
import pytest
from PIL import Image

from neurospark.visualizers.colorgrade import hsla, load_background, screen_blend, tone_map_soft


class TestHsla:
    def test_primaries(self):
        assert hsla(0, 1.0, 0.5) == (255, 0, 0, 255)
        assert hsla(120, 1.0, 0.5, 0.5) == (0, 255, 0, 128)
        assert hsla(240, 1.0, 0.5, 0.0) == (0, 0, 255, 0)

    def test_hue_wraps(self):
        assert hsla(360, 1.0, 0.5) == hsla(0, 1.0, 0.5)

    def test_alpha_clamped(self):
        assert hsla(290, 0.8, 0.7, 1.7)[3] == 255
        assert hsla(290, 0.8, 0.7, -0.2)[3] == 0

    def test_pulse_range_is_purple_to_pink(self):
        for hue in (270, 290, 310):
            r, g, b, _ = hsla(hue, 0.8, 0.7)
            assert r > g and b > g


class TestScreenBlend:
    def test_black_layer_passthrough(self):
        base = np.random.randint(0, 255, (20, 30, 3), dtype=np.uint8)
        result = screen_blend(base, np.zeros_like(base))
        assert np.abs(result.astype(int) - base.astype(int)).max() <= 1

    def test_never_darkens(self):
        base = np.random.randint(0, 255, (20, 30, 3), dtype=np.uint8)
        layer = np.random.randint(0, 255, (20, 30, 3), dtype=np.uint8)
        result = screen_blend(base, layer)
        assert np.all(result.astype(int) >= np.maximum(base, layer).astype(int) - 1)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            screen_blend(np.zeros((2, 2, 3), np.uint8), np.zeros((3, 3, 3), np.uint8))


class TestToneMapSoft:
    def test_darks_unchanged(self):
        frame = np.full((10, 10, 3), 100, dtype=np.uint8)
        np.testing.assert_array_equal(tone_map_soft(frame), frame)

    def test_highlights_compressed(self):
        frame = np.full((10, 10, 3), 255, dtype=np.uint8)
        assert tone_map_soft(frame).max() < 255


class TestLoadBackground:
    def test_cover_fit(self, tmp_path):
        path = tmp_path / "bg.png"
        Image.new("RGB", (100, 50), (10, 200, 30)).save(path)
        arr = load_background(path, 40, 40)
        assert arr.shape == (40, 40, 3)
        assert arr.dtype == np.uint8
        assert tuple(arr[20, 20]) == (10, 200, 30)

    def test_converts_mode(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new("L", (8, 8), 128).save(path)
        arr = load_background(path, 4, 4)
        assert arr.shape == (4, 4, 3)
