"""Tests for the pygame-backed drawing surface."""

import numpy as np
import pytest

from neurospark.visualizers.surface import PygameSurface, gradient_color


def _pixel(surface, x, y):
    return tuple(surface.surface.get_at((x, y)))[:3]


class TestPygameSurface:
    def test_dimensions(self):
        surface = PygameSurface(64, 48)
        assert (surface.width, surface.height) == (64, 48)

    def test_opaque_fill(self):
        surface = PygameSurface(16, 16)
        surface.fill_rect((10, 20, 30, 255))
        assert _pixel(surface, 5, 5) == (10, 20, 30)

    def test_translucent_fill_dims_previous_frame(self):
        surface = PygameSurface(16, 16)
        surface.fill_rect((255, 255, 255, 255))
        surface.fill_rect((0, 0, 0, 102))
        r, g, b = _pixel(surface, 8, 8)
        assert r == pytest.approx(153, abs=3)
        assert r == g == b

    def test_repeated_fade_converges_to_background(self):
        surface = PygameSurface(8, 8)
        surface.fill_rect((255, 255, 255, 255))
        for _ in range(30):
            surface.fill_rect((6, 2, 14, 102))
        r, g, b = _pixel(surface, 4, 4)
        assert r < 20 and b < 30

    def test_stroke_polyline(self):
        surface = PygameSurface(80, 40)
        surface.stroke_polyline([(10, 20), (60, 20)], (255, 0, 0, 255), 1.0)
        assert _pixel(surface, 30, 20)[0] > 200
        assert _pixel(surface, 30, 5) == (0, 0, 0)

    def test_stroke_blends_alpha(self):
        surface = PygameSurface(80, 40)
        surface.stroke_polyline([(10, 20), (60, 20)], (200, 200, 200, 128), 3.0)
        r, _, _ = _pixel(surface, 30, 20)
        assert 80 < r < 120

    def test_stroke_partially_offscreen(self):
        surface = PygameSurface(40, 40)
        surface.stroke_polyline([(-100, 20), (20, 20)], (0, 255, 0, 255), 2.0)
        assert _pixel(surface, 10, 20)[1] > 200

    def test_radial_gradient(self):
        surface = PygameSurface(40, 40)
        stops = [(0.0, (255, 255, 255, 255)), (1.0, (255, 255, 255, 0))]
        surface.fill_radial_gradient((20, 20), 8.0, stops)
        center = _pixel(surface, 20, 20)[0]
        edge = _pixel(surface, 26, 20)[0]
        outside = _pixel(surface, 35, 20)[0]
        assert center > edge > outside
        assert outside == 0

    def test_radial_gradient_center_uses_first_stop(self):
        surface = PygameSurface(40, 40)
        stops = [
            (0.0, (255, 255, 255, 230)),
            (0.4, (255, 255, 255, 102)),
            (1.0, (255, 255, 255, 0)),
        ]
        surface.fill_radial_gradient((20, 20), 8.0, stops)
        assert _pixel(surface, 20, 20)[0] == pytest.approx(230, abs=3)

    def test_zero_size_is_noop(self):
        surface = PygameSurface(0, 0)
        surface.fill_rect((0, 0, 0, 102))
        surface.stroke_polyline([(0, 0), (5, 5)], (255, 0, 0, 255), 1.0)
        surface.fill_radial_gradient((0, 0), 8.0, [(0.0, (255, 0, 0, 255)), (1.0, (0, 0, 0, 0))])
        assert surface.to_array().size == 0

    def test_resize_keeps_content(self):
        surface = PygameSurface(10, 10, background=(0, 0, 0))
        surface.fill_rect((50, 60, 70, 255))
        surface.resize(20, 5)
        assert (surface.width, surface.height) == (20, 5)
        assert _pixel(surface, 2, 2) == (50, 60, 70)
        assert _pixel(surface, 15, 2) == (0, 0, 0)

    def test_to_array(self):
        surface = PygameSurface(32, 24)
        surface.fill_rect((1, 2, 3, 255))
        arr = surface.to_array()
        assert arr.shape == (24, 32, 3)
        assert arr.dtype == np.uint8
        assert tuple(arr[0, 0]) == (1, 2, 3)


class TestGradientColor:
    STOPS = [(0.0, (0, 0, 0, 255)), (0.5, (100, 100, 100, 100)), (1.0, (200, 200, 200, 0))]

    def test_endpoints(self):
        assert gradient_color(self.STOPS, 0.0) == (0, 0, 0, 255)
        assert gradient_color(self.STOPS, 1.0) == (200, 200, 200, 0)

    def test_interpolates(self):
        assert gradient_color(self.STOPS, 0.25) == (50, 50, 50, 178)
        assert gradient_color(self.STOPS, 0.75) == (150, 150, 150, 50)
