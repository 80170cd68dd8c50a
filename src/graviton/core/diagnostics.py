# MIT License (see LICENSE)
"""
Field and body diagnostics.

Used by tests and level tooling to inspect what the registry produces
without running a body through it: sampling the field on a grid, finding
the peak acceleration, and the kinetic energy of a set of bodies (all
bodies are unit mass).
"""
from __future__ import annotations

import numpy as np

from ..types import MovingBody
from .registry import FieldRegistry


def sample_field_grid(
    registry: FieldRegistry,
    xs: np.ndarray,
    ys: np.ndarray,
    velocity=(0.0, 0.0),
    time: float = 0.0,
) -> np.ndarray:
    """
    Net acceleration on a rectangular grid.

    Args:
        registry: Sources to sample.
        xs: Grid x coordinates, shape (nx,).
        ys: Grid y coordinates, shape (ny,).
        velocity: Sample velocity used at every point (vortices only).
        time: Simulation time passed to the registry.

    Returns:
        Array of shape (ny, nx, 2); out[j, i] is the acceleration at
        (xs[i], ys[j]).
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    out = np.zeros((len(ys), len(xs), 2), dtype=np.float64)
    for j, y in enumerate(ys):
        for i, x in enumerate(xs):
            out[j, i] = registry.acceleration_at((x, y), velocity, time)
    return out


def peak_acceleration(grid: np.ndarray) -> float:
    """Largest acceleration magnitude in a sampled grid."""
    if grid.size == 0:
        return 0.0
    return float(np.max(np.linalg.norm(grid, axis=-1)))


def kinetic_energy(bodies: list[MovingBody]) -> float:
    """
    Total kinetic energy of unit-mass bodies.

    T = Σ 0.5 |v|²
    """
    ke = 0.0
    for b in bodies:
        ke += 0.5 * float(np.dot(b.velocity, b.velocity))
    return ke
