from neurospark.visualizers.renderer import FrameRenderer
from neurospark.visualizers.surface import DrawingSurface, PygameSurface

__all__ = ["DrawingSurface", "FrameRenderer", "PygameSurface"]
