# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

Low-level 2D helpers shared by the field laws, the integrator and the
bodies. All functions operate on 2D vectors represented as numpy arrays of
shape (2,).
"""
from __future__ import annotations
import math

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def zero2() -> np.ndarray:
    """Fresh zero 2-vector."""
    return np.zeros(2, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def perp(v: np.ndarray) -> np.ndarray:
    """
    Counterclockwise perpendicular: (vx, vy) -> (-vy, vx).

    Same as the z-axis cross product (0, 0, 1) × (vx, vy, 0).
    """
    return np.array([-v[1], v[0]], dtype=np.float64)


def clamp_magnitude(v: np.ndarray, limit: float) -> np.ndarray:
    """
    Rescale v so that |v| <= limit, keeping its direction.

    The whole vector is scaled; components are never truncated one by one.
    A non-positive limit disables the clamp.
    """
    if limit <= 0.0:
        return v
    m2 = norm2(v)
    if m2 > limit * limit:
        return v * (limit / np.sqrt(m2))
    return v


def heading_to_dir(heading_deg: float) -> np.ndarray:
    """Unit forward vector for a heading in degrees. Zero heading is +Y."""
    rad = math.radians(heading_deg)
    return np.array([math.sin(rad), math.cos(rad)], dtype=np.float64)


def wrap_degrees(angle: float) -> float:
    """
    Wrap an angle in degrees into (-180, 180].

    Raises:
        ValueError: If angle is inf or nan.
    """
    if not math.isfinite(angle):
        raise ValueError(f"Angle must be finite, got {angle}")
    a = math.fmod(angle, 360.0)
    if a > 180.0:
        a -= 360.0
    elif a <= -180.0:
        a += 360.0
    return a


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x
