"""
Frame renderer for signal pulses.

Each frame first dims the persistent canvas with a translucent
background fill instead of clearing it, then draws every pulse:

- Trail: a thin core stroke plus a wider, fainter halo stroke
- Head: a radial-gradient spark at the newest trail point
- Branches: thin strokes at half the parent's thickness

Everything is drawn dim because the host composites the canvas
additively; bright, long trails would saturate to white.
"""

import logging
from typing import Iterable, Optional

from neurospark.config import SignalConfig
from neurospark.core.pulse import SignalPulse
from neurospark.visualizers.colorgrade import hsla
from neurospark.visualizers.surface import DrawingSurface

logger = logging.getLogger(__name__)


class FrameRenderer:
    """Turns the live population into drawing commands."""

    def __init__(self, config: Optional[SignalConfig] = None):
        self.cfg = config or SignalConfig()

    def fade(self, surface: DrawingSurface):
        r, g, b = self.cfg.background_color
        surface.fill_rect((r, g, b, int(round(self.cfg.fade_alpha * 255))))

    def draw_pulse(self, surface: DrawingSurface, pulse: SignalPulse):
        cfg = self.cfg
        life = pulse.life

        if len(pulse.trail) >= 2:
            points = pulse.trail.coords()
            surface.stroke_polyline(points, hsla(pulse.hue, 0.8, 0.7, life * cfg.trail_alpha), pulse.thickness)
            surface.stroke_polyline(
                points,
                hsla(pulse.hue, 1.0, 0.7, life * cfg.halo_alpha),
                pulse.thickness + cfg.halo_extra_width,
            )

            head = pulse.trail.head
            stops = [
                (0.0, hsla(pulse.hue, 1.0, 0.9, life * cfg.head_core_alpha)),
                (cfg.head_mid_stop, hsla(pulse.hue, 0.9, 0.7, life * cfg.head_mid_alpha)),
                (1.0, hsla(pulse.hue, 0.8, 0.6, 0.0)),
            ]
            surface.fill_radial_gradient((head.x, head.y), cfg.head_radius, stops)

        for branch in pulse.branches:
            if len(branch.trail) < 2:
                continue
            surface.stroke_polyline(
                branch.trail.coords(),
                hsla(pulse.hue, 0.8, 0.7, branch.life * cfg.branch_alpha),
                pulse.thickness * cfg.branch_width_ratio,
            )

    def draw(self, surface: DrawingSurface, pulses: Iterable[SignalPulse]) -> bool:
        """
        Render one frame.

        Returns:
            False when the surface has no area and nothing was drawn.
        """
        if surface.width <= 0 or surface.height <= 0:
            logger.debug("Skipping draw on unsized surface.")
            return False

        self.fade(surface)
        for pulse in pulses:
            self.draw_pulse(surface, pulse)
        return True
