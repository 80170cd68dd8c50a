# MIT License (see LICENSE)
"""
The shared body integrator.

Every moving thing in the game (the craft, each probe, and the trajectory
preview) advances with exactly this rule, in exactly this order:

    1. v ← v + a dt                      (semi-implicit Euler: velocity first)
    2. if |v| > v_max: v ← v · v_max/|v|  (speed clamp, rescales the vector)
    3. v ← v / (1 + k dt)                 (linear drag, stable for any dt)
    4. x ← x + v dt                       (position from the new velocity)

Reordering the steps changes observable trajectories, and the preview is
only trustworthy because it calls the same function as the live bodies.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations

import numpy as np

from ..types import MovingBody
from ..util import norm2


def semi_implicit_euler(
    position: np.ndarray,
    velocity: np.ndarray,
    a: np.ndarray,
    dt: float,
    max_speed: float,
    linear_drag: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Advance a (position, velocity) pair by one fixed step.

    Args:
        position: Current position [x, y].
        velocity: Current velocity [vx, vy].
        a: Acceleration sampled at the current state.
        dt: Timestep in seconds.
        max_speed: Speed clamp.
        linear_drag: Drag coefficient (0 disables drag).

    Returns:
        New (position, velocity) arrays. Inputs are not modified.
    """
    v = velocity + a * dt

    sp2 = norm2(v)
    if sp2 > max_speed * max_speed:
        v = v * (max_speed / np.sqrt(sp2))

    if linear_drag != 0.0:
        v = v * (1.0 / (1.0 + linear_drag * dt))

    x = position + v * dt
    return x, v


def step_body(body: MovingBody, a: np.ndarray, dt: float) -> None:
    """
    Advance a body in place with semi_implicit_euler.

    Args:
        body: Body to integrate (position and velocity replaced).
        a: Net acceleration for this tick.
        dt: Timestep in seconds.
    """
    body.position, body.velocity = semi_implicit_euler(
        body.position, body.velocity, a, dt, body.max_speed, body.linear_drag
    )
