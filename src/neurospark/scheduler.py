"""
Animation scheduler.

A single-threaded cooperative loop driven by the host's per-frame
callback. Each frame it picks up viewport changes, advances the
population, draws it and asks the host for the next frame. The host
decides when that next frame runs; stopping simply means not asking.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from neurospark.config import SignalConfig
from neurospark.core.population import PopulationManager
from neurospark.visualizers.renderer import FrameRenderer
from neurospark.visualizers.surface import DrawingSurface

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


@dataclass
class SimulationContext:
    """Everything a frame reads or writes, owned by one scheduler."""
    width: int
    height: int
    population: PopulationManager
    frame_index: int = 0
    skipped_frames: int = 0
    last_error: Optional[BaseException] = field(default=None, repr=False)


class AnimationScheduler:
    """
    Runs the update/draw cycle once per host frame.

    Args:
        surface: Canvas to draw on; owned by the host.
        request_frame: Host primitive that invokes a callback before the
            next repaint.
        viewport: Optional query returning the current (width, height).
        config: Simulation settings.
        rng: Source of randomness shared by spawning and motion.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        request_frame: Callable[[FrameCallback], None],
        viewport: Optional[Callable[[], Tuple[int, int]]] = None,
        config: Optional[SignalConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.cfg = config or SignalConfig()
        self.surface = surface
        self.request_frame = request_frame
        self.viewport = viewport
        self.rng = rng or random.Random()
        self.renderer = FrameRenderer(self.cfg)
        self.context = SimulationContext(
            width=surface.width,
            height=surface.height,
            population=PopulationManager(surface.width, surface.height, self.cfg, self.rng),
        )
        self.running = False

    @property
    def population(self) -> PopulationManager:
        return self.context.population

    def start(self):
        """Spawn the initial population and begin the loop."""
        self.population.initialize(self.cfg.initial_pulses)
        self.running = True
        logger.info(
            f"Animation started on {self.context.width}x{self.context.height} "
            f"surface with {len(self.population)} pulses."
        )
        self.request_frame(self.frame)

    def stop(self):
        """Stop rescheduling. The current frame, if any, still completes."""
        if self.running:
            logger.info(f"Animation stopped after {self.context.frame_index} frames.")
        self.running = False

    def _sync_viewport(self):
        if self.viewport is None:
            return
        width, height = self.viewport()
        ctx = self.context
        if (width, height) == (ctx.width, ctx.height):
            return
        logger.info(f"Viewport resized: {ctx.width}x{ctx.height} -> {width}x{height}")
        self.surface.resize(width, height)
        ctx.width, ctx.height = width, height
        self.population.resize(width, height)

    def step(self) -> bool:
        """
        Advance and draw one frame.

        Returns:
            Whether anything was drawn.
        """
        ctx = self.context
        self._sync_viewport()
        if ctx.width <= 0 or ctx.height <= 0:
            return False

        respawned = self.population.tick()
        self.population.maybe_spawn()
        drawn = self.renderer.draw(self.surface, self.population.pulses)

        ctx.frame_index += 1
        if respawned:
            logger.debug(f"Frame {ctx.frame_index}: respawned {respawned} pulse(s).")
        if ctx.frame_index % self.cfg.log_throttle_frames == 0:
            logger.debug(
                f"Frame {ctx.frame_index} | pulses: {len(self.population)} | "
                f"spawned: {self.population.total_spawned} | skipped: {ctx.skipped_frames}"
            )
        return drawn

    def frame(self):
        """Per-frame host callback."""
        if not self.running:
            return
        try:
            self.step()
        except Exception as exc:
            # A decorative animation must never stop over one bad frame
            self.context.skipped_frames += 1
            self.context.last_error = exc
            logger.warning(f"Frame {self.context.frame_index} skipped", exc_info=True)
        if self.running:
            self.request_frame(self.frame)
