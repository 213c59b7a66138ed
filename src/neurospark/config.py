"""
Configuration for the signal pulse animation.

All tunable constants live on a single dataclass so the simulation,
renderer and hosts share one source of truth. Values can be overridden
from a JSON file or from the command line.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

# Resolution profiles shared by the CLIs
PROFILES = {
    "low": {"width": 1280, "height": 720, "fps": 30, "quality": "fast"},
    "medium": {"width": 1920, "height": 1080, "fps": 60, "quality": "medium"},
    "high": {"width": 3840, "height": 2160, "fps": 60, "quality": "high"},
}


@dataclass
class SignalConfig:
    """Configuration for the pulse simulation and its renderer."""
    width: int = 1920
    height: int = 1080
    fps: int = 60

    # Population
    initial_pulses: int = 4
    max_pulses: int = 6
    spawn_chance: float = 0.025

    # Pulse motion
    speed_min: float = 1.5
    speed_max: float = 3.5
    heading_jitter: float = 0.06
    spawn_spread: float = 0.4  # +/- radians around the inward edge normal
    boundary_margin: float = 50.0
    out_of_bounds_decay: float = 0.05

    # Pulse appearance
    hue_min: float = 270.0  # purple
    hue_max: float = 310.0  # pink
    thickness_min: float = 0.5
    thickness_max: float = 1.5
    trail_min: int = 6
    trail_max: int = 12

    # Branching
    branch_chance: float = 0.015
    max_branches: int = 2
    branch_spread: float = 0.75
    branch_speed_ratio: float = 0.6
    branch_life: float = 0.6
    branch_decay: float = 0.025
    branch_jitter: float = 0.075
    branch_trail: int = 10

    # Rendering
    background_color: Tuple[int, int, int] = (6, 2, 14)
    fade_alpha: float = 0.4
    trail_alpha: float = 0.7
    halo_alpha: float = 0.2
    halo_extra_width: float = 2.0
    head_radius: float = 8.0
    head_core_alpha: float = 0.9
    head_mid_alpha: float = 0.4
    head_mid_stop: float = 0.4
    branch_alpha: float = 0.5
    branch_width_ratio: float = 0.5

    # Diagnostics
    log_throttle_frames: int = 300

    def __post_init__(self):
        # JSON hands us lists
        self.background_color = tuple(int(c) for c in self.background_color)

    def validate(self) -> "SignalConfig":
        """Raise ValueError on settings the simulation cannot honor."""
        ranges = [
            ("speed", self.speed_min, self.speed_max),
            ("hue", self.hue_min, self.hue_max),
            ("thickness", self.thickness_min, self.thickness_max),
            ("trail", self.trail_min, self.trail_max),
        ]
        for name, low, high in ranges:
            if low > high:
                raise ValueError(f"{name}_min ({low}) is greater than {name}_max ({high})")

        if self.trail_min < 2 or self.branch_trail < 2:
            raise ValueError("trail capacities must be at least 2")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"invalid surface size {self.width}x{self.height}")
        if self.log_throttle_frames < 1:
            raise ValueError("log_throttle_frames must be at least 1")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.initial_pulses < 0 or self.max_pulses < 0 or self.max_branches < 0:
            raise ValueError("population and branch limits must not be negative")

        probabilities = {
            "spawn_chance": self.spawn_chance,
            "branch_chance": self.branch_chance,
            "fade_alpha": self.fade_alpha,
        }
        for name, value in probabilities.items():
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

        if len(self.background_color) != 3:
            raise ValueError("background_color must be an RGB triple")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SignalConfig":
        """Build a config from a flat dict of field overrides."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data).validate()


def load_config(path) -> Tuple[SignalConfig, Dict[str, Any]]:
    """
    Load a JSON configuration file.

    The file holds SignalConfig field overrides at the top level and an
    optional "logging" section for setup_logging().

    Returns:
        Tuple of (config, raw_dict).
    """
    path = Path(path)
    logger.info(f"Loading configuration from {path}...")
    try:
        with open(path, "r") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logger.error(f"Error decoding JSON from {path}.")
        raise

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a JSON object")
    if not isinstance(raw.get("logging", {}), dict):
        raise ValueError(f"{path}: \"logging\" must be a JSON object")

    overrides = {k: v for k, v in raw.items() if k != "logging"}
    config = SignalConfig.from_dict(overrides)
    logger.info("Configuration loaded successfully.")
    return config, raw
