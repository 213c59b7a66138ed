"""Pulse simulation: trails, pulses, branches and population upkeep."""

from neurospark.core.population import PopulationManager
from neurospark.core.pulse import Branch, SignalPulse, spawn_pulse
from neurospark.core.trail import Point, Trail

__all__ = [
    "Branch",
    "Point",
    "PopulationManager",
    "SignalPulse",
    "Trail",
    "spawn_pulse",
]
