# MIT License (see LICENSE)
"""
Play-area bounds.

Bodies that leave the rectangle are culled (probes) or lost (the craft).
The game derives the rectangle from the orthographic camera view plus a
margin; the simulation only needs the resulting box.
"""
from __future__ import annotations
from dataclasses import dataclass

from .constants import BOUNDS_MARGIN


@dataclass(frozen=True)
class Bounds:
    """
    Axis-aligned rectangle [xmin, xmax] × [ymin, ymax].

    Points on the edge count as inside.
    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        if self.xmin > self.xmax or self.ymin > self.ymax:
            raise ValueError(
                f"Degenerate bounds: ({self.xmin}, {self.ymin}) - ({self.xmax}, {self.ymax})"
            )

    @classmethod
    def from_camera(
        cls,
        center: tuple[float, float],
        half_height: float,
        aspect: float,
        margin: float = BOUNDS_MARGIN,
    ) -> "Bounds":
        """
        Camera view rectangle expanded by a margin.

        Args:
            center: Camera center in world space.
            half_height: Orthographic half-height (world units).
            aspect: Width / height of the view.
            margin: Extra space beyond the view before culling.
        """
        half_w = half_height * aspect
        cx, cy = float(center[0]), float(center[1])
        return cls(
            cx - half_w - margin,
            cy - half_height - margin,
            cx + half_w + margin,
            cy + half_height + margin,
        )

    def contains(self, p) -> bool:
        return self.xmin <= p[0] <= self.xmax and self.ymin <= p[1] <= self.ymax


@dataclass(frozen=True)
class GoalRegion:
    """Circular finish zone; the craft wins by entering it."""
    position: tuple[float, float]
    radius: float

    def contains(self, p) -> bool:
        dx = p[0] - self.position[0]
        dy = p[1] - self.position[1]
        return dx * dx + dy * dy <= self.radius * self.radius
