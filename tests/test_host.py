"""Tests for the offscreen host."""

import random

import numpy as np
import pytest

from neurospark.config import SignalConfig
from neurospark.host import HeadlessHost


@pytest.fixture
def small_config():
    return SignalConfig(width=64, height=48, fps=30)


class TestHeadlessHost:
    def test_yields_frames(self, small_config):
        host = HeadlessHost(small_config)
        frames = list(host.frames(host.create_scheduler(rng=random.Random()), 12))
        assert len(frames) == 12
        for frame in frames:
            assert frame.shape == (48, 64, 3)
            assert frame.dtype == np.uint8

    def test_scheduler_stopped_afterwards(self, small_config):
        host = HeadlessHost(small_config)
        scheduler = host.create_scheduler()
        list(host.frames(scheduler, 3))
        assert not scheduler.running
        assert scheduler.context.frame_index == 3

    def test_pulses_light_up_frames(self, small_config):
        host = HeadlessHost(small_config)
        frames = list(host.frames(host.create_scheduler(), 40))
        bg = np.array(small_config.background_color)
        assert any(np.abs(f.astype(int) - bg).max() > 10 for f in frames)

    def test_background_composite(self, small_config):
        background = np.full((48, 64, 3), 40, dtype=np.uint8)
        host = HeadlessHost(small_config, background=background)
        frame = next(host.frames(host.create_scheduler(), 1))
        # Screen blend never darkens the background
        assert frame.min() >= 40

    def test_background_shape_mismatch(self, small_config):
        with pytest.raises(ValueError):
            HeadlessHost(small_config, background=np.zeros((10, 10, 3), dtype=np.uint8))

    def test_viewport_matches_config(self, small_config):
        assert HeadlessHost(small_config).viewport() == (64, 48)
