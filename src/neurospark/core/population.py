"""
Population maintenance for signal pulses.

Two independent mechanisms keep the live set near its target band:
dead pulses are replaced one-for-one within the same tick, and a
Bernoulli trial each frame grows the set while it is under max_pulses.
When both fire on the same frame the set may briefly hold one extra pulse.
"""

import logging
import random
from typing import Callable, List, Optional

from neurospark.config import SignalConfig
from neurospark.core.pulse import SignalPulse, spawn_pulse

logger = logging.getLogger(__name__)


class PopulationManager:
    """Owns the live pulses and drives their per-frame update."""

    def __init__(
        self,
        width: float,
        height: float,
        config: Optional[SignalConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.cfg = config or SignalConfig()
        self.rng = rng or random.Random()
        self.width = width
        self.height = height
        self.pulses: List[SignalPulse] = []

        # Overridable so tests can place pulses deterministically
        self.spawner: Callable[[], SignalPulse] = self._spawn

        self.total_spawned = 0
        self.total_deaths = 0

    def _spawn(self) -> SignalPulse:
        return spawn_pulse(self.width, self.height, self.rng, self.cfg)

    def _new_pulse(self) -> SignalPulse:
        self.total_spawned += 1
        return self.spawner()

    def resize(self, width: float, height: float):
        # Live pulses keep their coordinates; only new spawns and the
        # boundary check see the new size.
        self.width = width
        self.height = height

    def initialize(self, n: Optional[int] = None):
        """Replace the population with n fresh pulses."""
        n = self.cfg.initial_pulses if n is None else n
        self.pulses = [self._new_pulse() for _ in range(n)]
        logger.debug(f"Population initialized with {n} pulses.")

    def tick(self) -> int:
        """
        Update every pulse, replacing each one that died.

        Returns:
            Number of pulses respawned this tick.
        """
        survivors = []
        respawned = 0
        for pulse in self.pulses:
            if pulse.update(self.width, self.height):
                survivors.append(pulse)
            else:
                survivors.append(self._new_pulse())
                respawned += 1
        self.pulses = survivors
        self.total_deaths += respawned
        return respawned

    def maybe_spawn(self) -> bool:
        """Grow the population by one with spawn_chance while under the cap."""
        if len(self.pulses) < self.cfg.max_pulses and self.rng.random() < self.cfg.spawn_chance:
            self.pulses.append(self._new_pulse())
            return True
        return False

    def __len__(self) -> int:
        return len(self.pulses)

    def __iter__(self):
        return iter(self.pulses)
