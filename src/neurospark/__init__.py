"""
neurospark: ambient electric signal pulse animation.

Short-lived pulses random-walk across a surface, fork rare branches and
leave fading trails that blend additively with the image beneath.
"""

__version__ = "0.1.0"

from neurospark.config import SignalConfig, load_config
from neurospark.core import Branch, PopulationManager, SignalPulse, Trail
from neurospark.scheduler import AnimationScheduler, SimulationContext
from neurospark.visualizers import DrawingSurface, FrameRenderer, PygameSurface

__all__ = [
    "AnimationScheduler",
    "Branch",
    "DrawingSurface",
    "FrameRenderer",
    "PopulationManager",
    "PygameSurface",
    "SignalConfig",
    "SignalPulse",
    "SimulationContext",
    "Trail",
    "load_config",
]
