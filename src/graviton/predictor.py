# MIT License (see LICENSE)
"""
Trajectory preview for the planning screen.

Re-runs the live loop (registry sample + semi_implicit_euler) from a
hypothetical launch and records the positions. Because it calls the same
integrator with the same body parameters, the preview matches what a
probe launched with the same velocity will do, as long as the registry
does not change in between.

The predictor only reads the registry; it never registers sources and
never touches a real body.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .core.integrators import semi_implicit_euler
from .core.registry import FieldRegistry
from .probe import ProbeConfig
from .util import f64, norm2, zero2


@dataclass(frozen=True)
class PredictorConfig:
    """
    Preview tuning.

    Attributes:
        max_points: Maximum number of points in the path.
        point_step: Simulated seconds between points (integration dt).
        fade_after: Stop after this much simulated time.
        use_physics: Sample the registry; False draws the inertial path.
        speed_floor: Launch speeds below this draw nothing.
        max_speed: Body speed clamp (match the bodies being previewed).
        linear_drag: Body drag (match the bodies being previewed).
    """
    max_points: int = 120
    point_step: float = 0.02
    fade_after: float = 2.0
    use_physics: bool = True
    speed_floor: float = 0.05
    max_speed: float = ProbeConfig.max_speed
    linear_drag: float = ProbeConfig.linear_drag

    @classmethod
    def for_probe(cls, probe_config: ProbeConfig, **kwargs) -> "PredictorConfig":
        """Config whose body parameters match a probe config."""
        return cls(max_speed=probe_config.max_speed, linear_drag=probe_config.linear_drag, **kwargs)


class TrajectoryPredictor:
    """
    Forward simulation of a launch, for drawing a preview line.

    Usage:
        predictor = TrajectoryPredictor(session.registry)
        predictor.show()
        path = predictor.draw(origin, v0)   # (N, 2) array
        predictor.clear()
    """

    def __init__(self, registry: FieldRegistry | None, config: PredictorConfig | None = None) -> None:
        self.registry = registry
        self.config = config or PredictorConfig()
        self.points = np.empty((0, 2), dtype=np.float64)
        self.visible = False

    def show(self) -> None:
        self.visible = True

    def clear(self) -> None:
        """Hide the preview and drop the path."""
        self.visible = False
        self.points = np.empty((0, 2), dtype=np.float64)

    def draw(self, origin, v0) -> np.ndarray:
        """
        Simulate a launch and store the resulting path.

        Args:
            origin: Launch position [x, y].
            v0: Launch velocity [vx, vy].

        Returns:
            Array of shape (N, 2), starting with origin. Empty when the
            launch speed is below speed_floor.
        """
        cfg = self.config
        x = f64(origin)
        v = f64(v0)

        if norm2(v) < cfg.speed_floor * cfg.speed_floor:
            self.clear()
            return self.points

        sample = self.registry is not None and cfg.use_physics
        dt = cfg.point_step
        t = 0.0
        path = []
        for _ in range(cfg.max_points):
            path.append(x)
            t += dt
            a = self.registry.acceleration_at(x, v, t) if sample else zero2()
            x, v = semi_implicit_euler(x, v, a, dt, cfg.max_speed, cfg.linear_drag)
            if t > cfg.fade_after:
                break

        self.points = np.array(path, dtype=np.float64)
        self.visible = True
        return self.points
