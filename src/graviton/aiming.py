# MIT License (see LICENSE)
"""
Slingshot aiming: map a pull-back drag to a launch velocity.

The planning screen launches probes by dragging back from the cannon. The
drag length (screen pixels) is mapped to a speed with a dead zone, a
clamp and an easing exponent; the direction is the pull-back direction.
"""
from __future__ import annotations

import numpy as np

from .constants import MAX_LAUNCH_SPEED
from .util import f64, norm, clamp, zero2


def drag_power(pixels: float, min_drag: float, max_drag: float, power_curve: float) -> float:
    """
    Normalized launch power in [0, 1].

    Inverse-lerp of the drag length between min_drag and max_drag,
    clamped, then raised to power_curve (0.5 = snappy, 1 = linear,
    >1 = stiff).
    """
    if max_drag <= min_drag:
        t = 1.0 if pixels >= max_drag else 0.0
    else:
        t = (pixels - min_drag) / (max_drag - min_drag)
    t = clamp(t, 0.0, 1.0)
    return float(t ** power_curve)


def drag_to_velocity(
    origin,
    current,
    min_drag: float = 10.0,
    max_drag: float = 300.0,
    max_speed: float = MAX_LAUNCH_SPEED,
    power_curve: float = 0.85,
) -> np.ndarray:
    """
    Launch velocity for a drag from origin to current.

    Args:
        origin: Where the drag started (the cannon), screen space.
        current: Where the pointer is now, screen space.
        min_drag: Dead zone; shorter drags give zero velocity.
        max_drag: Drag length that gives full speed.
        max_speed: Speed at full power (u/s).
        power_curve: Easing exponent applied to the normalized power.

    Returns:
        Velocity [vx, vy] pointing along origin - current. Zero when the
        resulting speed is negligible.

    Note:
        Screen and world axes are assumed parallel (orthographic camera
        without rotation), so the pull-back direction is used directly.
    """
    pull = f64(origin) - f64(current)
    pixels = norm(pull)
    speed = drag_power(pixels, min_drag, max_drag, power_curve) * max_speed
    if speed <= 1e-4:
        return zero2()
    return (pull / pixels) * speed
