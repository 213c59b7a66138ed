"""
Bounded position history with per-point opacity.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


@dataclass
class Point:
    """A sampled position. Only alpha changes after it is pushed."""
    x: float
    y: float
    alpha: float = 1.0


class Trail:
    """
    Oldest-first FIFO of recent positions.

    Appending past capacity evicts the oldest point, so len(trail) never
    exceeds capacity.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Trail capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._points: deque[Point] = deque(maxlen=capacity)

    def append(self, x: float, y: float) -> Point:
        point = Point(x, y, 1.0)
        self._points.append(point)
        return point

    def refresh_alpha(self, life: float):
        """
        Fade toward the oldest end: alpha_i = (i / n) * life.

        Point.alpha is exposed state for callers; the renderer strokes each
        trail with one uniform alpha and does not read it.
        """
        n = len(self._points)
        for i, point in enumerate(self._points):
            point.alpha = (i / n) * life

    @property
    def head(self) -> Optional[Point]:
        """Newest point, or None when empty."""
        return self._points[-1] if self._points else None

    def coords(self) -> List[Tuple[float, float]]:
        return [(p.x, p.y) for p in self._points]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]
