"""
Signal pulses and their branches.

A pulse enters from one of the surface edges and random-walks across it,
dragging a short fading trail. Now and then it forks a branch: a dimmer,
slower trajectory that burns out on its own after a fixed number of frames.
A pulse only starts losing life once it has wandered past the edge margin.
"""

import math
import random
from dataclasses import dataclass, field
from typing import List

from neurospark.config import SignalConfig
from neurospark.core.trail import Trail

# Decayed life this close to zero is treated as exactly zero
LIFE_EPSILON = 1e-9

# Inward heading for each spawn edge: top, right, bottom, left
EDGE_HEADINGS = (math.pi / 2, math.pi, -math.pi / 2, 0.0)


def _decay(life: float, step: float) -> float:
    life -= step
    return 0.0 if life <= LIFE_EPSILON else life


@dataclass
class Branch:
    """Short-lived fork of a pulse. Never branches itself."""
    x: float
    y: float
    heading: float
    speed: float
    life: float
    trail: Trail

    def update(self, rng: random.Random, cfg: SignalConfig) -> bool:
        jitter = cfg.branch_jitter
        self.heading += rng.uniform(-jitter, jitter)
        self.x += math.cos(self.heading) * self.speed
        self.y += math.sin(self.heading) * self.speed
        self.trail.append(self.x, self.y)
        self.life = _decay(self.life, cfg.branch_decay)
        return self.life > 0


@dataclass
class SignalPulse:
    """A primary signal travelling across the surface."""
    x: float
    y: float
    heading: float
    speed: float
    hue: float
    thickness: float
    trail: Trail
    branch_chance: float
    rng: random.Random = field(repr=False, compare=False)
    cfg: SignalConfig = field(repr=False, compare=False)
    life: float = 1.0
    branches: List[Branch] = field(default_factory=list)

    @property
    def max_trail(self) -> int:
        return self.trail.capacity

    def _spawn_branch(self):
        cfg = self.cfg
        spread = cfg.branch_spread
        self.branches.append(Branch(
            x=self.x, y=self.y,
            heading=self.heading + self.rng.uniform(-spread, spread),
            speed=self.speed * cfg.branch_speed_ratio,
            life=cfg.branch_life,
            trail=Trail(cfg.branch_trail),
        ))

    def in_bounds(self, width: float, height: float) -> bool:
        """True while inside the surface extended by the boundary margin."""
        m = self.cfg.boundary_margin
        return -m <= self.x <= width + m and -m <= self.y <= height + m

    def update(self, width: float, height: float) -> bool:
        """
        Advance one frame.

        Returns:
            False once life is exhausted and the pulse should be destroyed.
        """
        cfg = self.cfg
        rng = self.rng

        # Random-walk turning, then move
        self.heading += rng.uniform(-cfg.heading_jitter, cfg.heading_jitter)
        self.x += math.cos(self.heading) * self.speed
        self.y += math.sin(self.heading) * self.speed

        self.trail.append(self.x, self.y)
        self.trail.refresh_alpha(self.life)

        if rng.random() < self.branch_chance and len(self.branches) < cfg.max_branches:
            self._spawn_branch()

        self.branches = [b for b in self.branches if b.update(rng, cfg)]

        if not self.in_bounds(width, height):
            self.life = _decay(self.life, cfg.out_of_bounds_decay)

        return self.life > 0


def spawn_pulse(
    width: float,
    height: float,
    rng: random.Random,
    cfg: SignalConfig,
) -> SignalPulse:
    """Create a pulse on a random edge, heading roughly inward."""
    edge = min(int(rng.random() * 4), 3)
    if edge == 0:
        x, y = rng.random() * width, 0.0
    elif edge == 1:
        x, y = float(width), rng.random() * height
    elif edge == 2:
        x, y = rng.random() * width, float(height)
    else:
        x, y = 0.0, rng.random() * height

    heading = EDGE_HEADINGS[edge] + rng.uniform(-cfg.spawn_spread, cfg.spawn_spread)
    capacity = min(cfg.trail_min + int(rng.random() * (cfg.trail_max - cfg.trail_min + 1)), cfg.trail_max)

    return SignalPulse(
        x=x, y=y,
        heading=heading,
        speed=rng.uniform(cfg.speed_min, cfg.speed_max),
        hue=rng.uniform(cfg.hue_min, cfg.hue_max),
        thickness=rng.uniform(cfg.thickness_min, cfg.thickness_max),
        trail=Trail(capacity),
        branch_chance=cfg.branch_chance,
        rng=rng,
        cfg=cfg,
    )
