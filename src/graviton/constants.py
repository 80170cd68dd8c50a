# MIT License (see LICENSE)
"""
Default tuning constants used throughout the simulation.

Units are abstract world units (u) and seconds. Values match the tuning
the game ships with; every one of them can be overridden per instance.
"""
from __future__ import annotations

# Fixed physics timestep (50 Hz).
DEFAULT_DT: float = 0.02

# Soft-core constant for gravity wells: |r|² → |r|² + ε keeps the force
# finite at r = 0.
DEFAULT_WELL_EPS: float = 0.3

# Acceleration clamps (u/s²) per field kind.
WELL_A_MAX: float = 9.0
STABILIZER_A_MAX: float = 5.0
VORTEX_A_MAX: float = 3.0

# Distance within which a positive-strength well destroys the craft.
WELL_CONTACT_RADIUS: float = 0.5

# Margin added around the camera view before bodies count as out of bounds.
BOUNDS_MARGIN: float = 2.0

# Launch speed ceiling shared by the aiming map and the probe clamp.
MAX_LAUNCH_SPEED: float = 12.0
