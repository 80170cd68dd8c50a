# MIT License (see LICENSE)
"""
Core simulation components.

This subpackage provides:
    - FieldRegistry: the per-session set of field sources and the summed
      acceleration query.
    - Integrators: the shared semi-implicit Euler step used by every body
      and by the trajectory predictor.
    - Diagnostics: field sampling and energy helpers.

Typical usage:
    from graviton.core import FieldRegistry, step_body

    a = registry.acceleration_at(body.position, body.velocity, t)
    step_body(body, a, dt=0.02)
"""
from .registry import FieldRegistry
from .integrators import semi_implicit_euler, step_body
from .diagnostics import sample_field_grid, peak_acceleration, kinetic_energy

__all__ = [
    # Registry
    "FieldRegistry",
    # Integrators
    "semi_implicit_euler",
    "step_body",
    # Diagnostics
    "sample_field_grid",
    "peak_acceleration",
    "kinetic_energy",
]
