"""Pytest configuration and shared fixtures."""

import itertools
import os

import pytest

# Headless pygame for every test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from neurospark.config import SignalConfig  # noqa: E402


class SequenceRandom:
    """
    Stand-in for random.Random that cycles through fixed values.

    The simulation only calls random() and uniform().
    """

    def __init__(self, values=(0.5,)):
        self._values = itertools.cycle(values)

    def random(self):
        return next(self._values)

    def uniform(self, a, b):
        return a + (b - a) * self.random()


class RecordingSurface:
    """DrawingSurface that records drawing commands instead of drawing."""

    def __init__(self, width: int = 800, height: int = 600):
        self._width = width
        self._height = height
        self.commands = []

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    def resize(self, width, height):
        self._width = width
        self._height = height
        self.commands.append(("resize", width, height))

    def fill_rect(self, color):
        self.commands.append(("fill_rect", color))

    def stroke_polyline(self, points, color, width):
        self.commands.append(("stroke_polyline", list(points), color, width))

    def fill_radial_gradient(self, center, radius, stops):
        self.commands.append(("fill_radial_gradient", center, radius, list(stops)))

    def of_kind(self, kind):
        return [c for c in self.commands if c[0] == kind]


@pytest.fixture
def config() -> SignalConfig:
    return SignalConfig(width=800, height=600)


@pytest.fixture
def midpoint_rng() -> SequenceRandom:
    """
    Every draw is 0.5: uniform() returns its midpoint (no jitter) and
    random() never passes a < 0.5 chance test.
    """
    return SequenceRandom([0.5])


@pytest.fixture
def recorder() -> RecordingSurface:
    return RecordingSurface(800, 600)


@pytest.fixture
def sequence_rng():
    """Factory for random stubs cycling through the given values."""
    return SequenceRandom


@pytest.fixture
def make_surface():
    """Factory for recording surfaces of a given size."""
    return RecordingSurface
