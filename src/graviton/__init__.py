# MIT License (see LICENSE)
"""
graviton - A deterministic 2D vector-field flight simulation.

Field sources (gravity wells, Gaussian stabilizers, uniform jetstreams and
velocity-dependent vortices) are summed by a registry into one
acceleration function. The player craft, the probes and the trajectory
preview all integrate that function with the same semi-implicit Euler
step, so the preview is exactly what a live probe will do.

Main entry points:
    - Session: One level's world and fixed-step loop.
    - FieldRegistry: The set of active field sources.
    - GravityWell, GaussStabilizer, UniformPatch, Vortex: Field sources.
    - Craft, Probe, Dock: The moving bodies and dock targets.
    - TrajectoryPredictor: Launch preview.

Submodules:
    - core: Registry, integrator, diagnostics.
    - io: JSON level files.
    - renderer: Optional visualization adapters.

Example:
    from graviton import Session, GravityWell, ProbeType

    session = Session(spawn=(0, -4))
    session.add_field(GravityWell(position=(0, 2), S=12))
    session.spawn_probe((0, -4), (1.0, 3.0), ProbeType.REPULSOR)
    session.craft.set_thrust(True)
    session.step()
    events = session.drain_events()
"""
from .session import Session
from .core.registry import FieldRegistry
from .fields import GravityWell, GaussStabilizer, UniformPatch, Vortex, field_acceleration
from .types import MovingBody, ProbeType
from .craft import Craft, CraftConfig
from .probe import Probe, ProbeConfig, ProbeStatus
from .docking import Dock, DockNetwork
from .predictor import TrajectoryPredictor, PredictorConfig
from .bounds import Bounds, GoalRegion

__all__ = [
    # Simulation
    "Session",
    "FieldRegistry",
    # Field sources
    "GravityWell",
    "GaussStabilizer",
    "UniformPatch",
    "Vortex",
    "field_acceleration",
    # Bodies
    "MovingBody",
    "Craft",
    "CraftConfig",
    "Probe",
    "ProbeConfig",
    "ProbeStatus",
    "ProbeType",
    # Docking
    "Dock",
    "DockNetwork",
    # Preview
    "TrajectoryPredictor",
    "PredictorConfig",
    # Play area
    "Bounds",
    "GoalRegion",
]
