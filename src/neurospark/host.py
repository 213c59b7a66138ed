"""
Hosts that drive the animation scheduler.

PygameHost opens a resizable window and repaints at the configured frame
rate. HeadlessHost renders offscreen and hands back composited frames
for export. Both own the frame queue behind request_frame() and the
background layer the pulse canvas is composited onto.
"""

import logging
from collections import deque
from pathlib import Path
from typing import Iterator, Optional

import numpy as np
import pygame

from neurospark.config import SignalConfig
from neurospark.scheduler import AnimationScheduler, FrameCallback
from neurospark.visualizers.colorgrade import load_background, screen_blend, tone_map_soft
from neurospark.visualizers.surface import PygameSurface

logger = logging.getLogger(__name__)


class _FrameQueue:
    """Callbacks requested for the next repaint."""

    def __init__(self):
        self._pending: deque[FrameCallback] = deque()

    def request_frame(self, callback: FrameCallback):
        self._pending.append(callback)

    def run_pending(self) -> int:
        # Callbacks queued while running belong to the following frame
        batch = list(self._pending)
        self._pending.clear()
        for callback in batch:
            callback()
        return len(batch)

    def __bool__(self) -> bool:
        return bool(self._pending)


class PygameHost:
    """Live, resizable pygame window."""

    def __init__(
        self,
        config: Optional[SignalConfig] = None,
        background_path: Optional[Path] = None,
        max_frames: Optional[int] = None,
        caption: str = "neurospark",
    ):
        self.cfg = config or SignalConfig()
        self.background_path = background_path
        self.max_frames = max_frames

        pygame.init()
        self.screen = pygame.display.set_mode((self.cfg.width, self.cfg.height), pygame.RESIZABLE)
        pygame.display.set_caption(caption)
        self.clock = pygame.time.Clock()

        self.canvas = PygameSurface(self.cfg.width, self.cfg.height, self.cfg.background_color)
        self.queue = _FrameQueue()
        self._background: Optional[pygame.Surface] = None
        self.running = False

        logger.info(f"PygameHost initialized ({self.cfg.width}x{self.cfg.height} @ {self.cfg.fps}fps).")

    def request_frame(self, callback: FrameCallback):
        self.queue.request_frame(callback)

    def viewport(self) -> tuple[int, int]:
        return self.screen.get_size()

    def _background_for(self, size: tuple[int, int]) -> Optional[pygame.Surface]:
        if self.background_path is None or size[0] <= 0 or size[1] <= 0:
            return None
        if self._background is None or self._background.get_size() != size:
            arr = load_background(self.background_path, size[0], size[1])
            self._background = pygame.surfarray.make_surface(np.transpose(arr, (1, 0, 2)))
        return self._background

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.get_surface()

    def _present(self):
        background = self._background_for(self.screen.get_size())
        if background is not None:
            self.screen.blit(background, (0, 0))
        else:
            self.screen.fill(self.cfg.background_color)
        # Additive so overlapping sparks brighten the image beneath
        self.screen.blit(self.canvas.surface, (0, 0), special_flags=pygame.BLEND_ADD)
        pygame.display.flip()

    def run(self, scheduler: AnimationScheduler) -> int:
        """
        Run until the window closes, max_frames is reached or the
        scheduler stops asking for frames.

        Returns:
            Number of frames presented.
        """
        frames = 0
        self.running = True
        scheduler.start()
        try:
            while self.running and self.queue:
                self._handle_events()
                if not self.running:
                    break
                self.queue.run_pending()
                self._present()
                frames += 1
                if self.max_frames is not None and frames >= self.max_frames:
                    logger.info(f"Reached max_frames ({self.max_frames}). Stopping.")
                    break
                self.clock.tick(self.cfg.fps)
        finally:
            scheduler.stop()
            pygame.quit()
        return frames

    def create_scheduler(self, rng=None) -> AnimationScheduler:
        return AnimationScheduler(
            self.canvas,
            self.request_frame,
            viewport=self.viewport,
            config=self.cfg,
            rng=rng,
        )


class HeadlessHost:
    """Offscreen host yielding composited RGB frames."""

    def __init__(
        self,
        config: Optional[SignalConfig] = None,
        background: Optional[np.ndarray] = None,
    ):
        self.cfg = config or SignalConfig()
        if background is not None and background.shape != (self.cfg.height, self.cfg.width, 3):
            raise ValueError(
                f"Background shape {background.shape} does not match "
                f"{self.cfg.width}x{self.cfg.height}"
            )
        self.background = background
        self.canvas = PygameSurface(self.cfg.width, self.cfg.height, self.cfg.background_color)
        self.queue = _FrameQueue()

    def request_frame(self, callback: FrameCallback):
        self.queue.request_frame(callback)

    def viewport(self) -> tuple[int, int]:
        return (self.cfg.width, self.cfg.height)

    def create_scheduler(self, rng=None) -> AnimationScheduler:
        return AnimationScheduler(
            self.canvas,
            self.request_frame,
            viewport=self.viewport,
            config=self.cfg,
            rng=rng,
        )

    def composite(self) -> np.ndarray:
        layer = self.canvas.to_array()
        if self.background is None:
            return layer
        return tone_map_soft(screen_blend(self.background, layer))

    def frames(self, scheduler: AnimationScheduler, total: int) -> Iterator[np.ndarray]:
        """Start the scheduler and yield up to total frames."""
        scheduler.start()
        try:
            for _ in range(total):
                if not self.queue:
                    break
                self.queue.run_pending()
                yield self.composite()
        finally:
            scheduler.stop()
