# MIT License (see LICENSE)
"""
Core type definitions shared by the craft, the probes and the predictor.

Defines:
- MovingBody: point body with position, velocity and the two integration
  parameters (speed clamp and linear drag).
- ProbeType: which field source a docked probe turns into.

Bodies are unit-mass points: the field sum is an acceleration, so there is
no force accumulator and no inertia.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .util import f64, norm


@dataclass(eq=False)
class MovingBody:
    """
    A point body advanced by the shared semi-implicit Euler step.

    Attributes:
        position: Position [x, y] in world units.
        velocity: Velocity [vx, vy] in u/s.
        max_speed: Speed clamp applied after every acceleration update.
        linear_drag: Drag coefficient k; each step scales the velocity
                     by 1 / (1 + k dt).

    Invariant:
        After every step, |velocity| <= max_speed. The clamp enforces it;
        nothing prevents a caller from assigning a faster velocity between
        steps.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    max_speed: float = 12.0
    linear_drag: float = 0.0

    def __post_init__(self) -> None:
        """Convert position/velocity to float64 arrays for consistent numerics."""
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)

    @property
    def speed(self) -> float:
        return norm(self.velocity)

    def halt(self) -> None:
        """Zero the velocity in place."""
        self.velocity[:] = 0.0


class ProbeType(Enum):
    """Probe payloads; each one deploys a different field source on docking."""
    STABILIZER = "stabilizer"
    REPULSOR = "repulsor"
    JETSTREAM = "jetstream"
    VORTEX = "vortex"

    def next(self) -> "ProbeType":
        """Cycle to the following type (wraps around), as the swap button does."""
        members = list(ProbeType)
        return members[(members.index(self) + 1) % len(members)]
