# MIT License (see LICENSE)
"""
Field sources: the four acceleration laws of the simulation.

Every source maps a sample point x (and, for the vortex, a sample velocity
v) to an acceleration vector. Sources never hold references to bodies; the
registry sums them and the bodies integrate the result.

Laws (r = source.position - x):
  - GravityWell:     a = S r / (|r|² + ε)^1.5                 (clamped)
  - GaussStabilizer: a = (2 U0 / R²) exp(-|r|²/R²) r           (clamped)
  - UniformPatch:    a = E exp(-|r|²/R²)  or  E inside a disk  (unclamped)
  - Vortex:          a = ±ω exp(-|r|²/R²) perp(v)              (clamped)

The stabilizer is the negative gradient of the Gaussian potential
U(x) = -U0 exp(-|r|²/R²): it pulls toward the center near the well and
fades out far away. The vortex rotates the current velocity instead of
pulling toward a point, so it never changes speed to first order.
"""
from __future__ import annotations
import dataclasses
from dataclasses import dataclass

import numpy as np

from .constants import (
    DEFAULT_WELL_EPS,
    STABILIZER_A_MAX,
    VORTEX_A_MAX,
    WELL_A_MAX,
    WELL_CONTACT_RADIUS,
)
from .util import f64, norm2, perp, clamp_magnitude, zero2


# =============================================================================
# Source Definitions
# =============================================================================
# eq=False: sources are identified by object identity, so two wells with
# the same parameters are still two registry entries.

@dataclass(eq=False)
class GravityWell:
    """
    Soft-core inverse-square attractor (S > 0) or repulsor (S < 0).

    Attributes:
        position: Well center [x, y].
        S: Signed strength. Positive attracts, negative repels.
        eps: Soft-core constant added to |r|², prevents the blow-up at r = 0.
        a_max: Acceleration clamp (u/s²).
        contact_radius: Distance at which an attracting well destroys the
                        craft. Has no effect on the field itself.
        enabled: Disabled sources stay registered but are skipped.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    S: float = 12.0
    eps: float = DEFAULT_WELL_EPS
    a_max: float = WELL_A_MAX
    contact_radius: float = WELL_CONTACT_RADIUS
    enabled: bool = True

    def __post_init__(self) -> None:
        self.position = f64(self.position)

    @property
    def is_attractor(self) -> bool:
        return self.S > 0.0


@dataclass(eq=False)
class GaussStabilizer:
    """
    Gaussian potential well of depth U0 and radius R.

    Attributes:
        position: Well center [x, y].
        U0: Depth of the potential.
        R: Radius scale of the Gaussian.
        a_max: Acceleration clamp; values <= 0 disable it.
        enabled: Disabled sources stay registered but are skipped.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    U0: float = 13.0
    R: float = 1.0
    a_max: float = STABILIZER_A_MAX
    enabled: bool = True

    def __post_init__(self) -> None:
        self.position = f64(self.position)


@dataclass(eq=False)
class UniformPatch:
    """
    Constant acceleration E over a circular patch ("jetstream").

    Attributes:
        position: Patch center [x, y].
        E: Acceleration vector applied inside the patch.
        radius: Hard edge radius, used when smooth_edges is False.
        smooth_edges: If True, E is scaled by exp(-|r|²/R²) instead.
        R: Falloff scale for the smooth variant.
        enabled: Disabled sources stay registered but are skipped.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    E: np.ndarray | tuple[float, float] = (0.0, 2.0)
    radius: float = 6.0
    smooth_edges: bool = True
    R: float = 6.0
    enabled: bool = True

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.E = f64(self.E)


@dataclass(eq=False)
class Vortex:
    """
    Velocity-dependent swirl localized by a Gaussian mask.

    Attributes:
        position: Vortex center [x, y].
        omega: Swirl strength (rad/s). Bigger means a tighter curve.
        R: Gaussian radius of influence.
        a_max: Acceleration clamp (u/s²).
        clockwise: Selects the sign: True gives +1, False gives -1.
        enabled: Disabled sources stay registered but are skipped.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    omega: float = 1.6
    R: float = 6.0
    a_max: float = VORTEX_A_MAX
    clockwise: bool = True
    enabled: bool = True

    def __post_init__(self) -> None:
        self.position = f64(self.position)

    @property
    def sign(self) -> float:
        return 1.0 if self.clockwise else -1.0


# Union type for source dispatch
FieldSource = GravityWell | GaussStabilizer | UniformPatch | Vortex

# Fixed bucket order used by the registry
FIELD_KINDS: tuple[type, ...] = (GravityWell, GaussStabilizer, UniformPatch, Vortex)

_VECTOR_PARAMS = {"position", "E"}
_POSITIVE_PARAMS = {"R", "eps"}
_NON_NEGATIVE_PARAMS = {"radius"}


def source_params(cls: type, params: dict, what: str | None = None) -> dict:
    """
    Check and coerce keyword parameters for a source class.

    Vectors become float tuples, flags must be bool and everything else
    becomes a float. R and eps must be positive; a patch radius must be
    non-negative.

    Args:
        cls: One of FIELD_KINDS.
        params: Parameter name -> raw value.
        what: Name used in error messages (defaults to the class name).

    Returns:
        A new dict ready for cls(**out) or dataclasses.replace.

    Raises:
        ValueError: On unknown names, wrongly typed values or values out
                    of range.
    """
    what = what or cls.__name__
    flags = {f.name for f in dataclasses.fields(cls) if isinstance(f.default, bool)}
    allowed = {f.name for f in dataclasses.fields(cls)}
    unknown = set(params) - allowed
    if unknown:
        raise ValueError(f"Unknown parameter(s) for {what}: {sorted(unknown)}")

    out = {}
    for k, v in params.items():
        if k in flags:
            if not isinstance(v, bool):
                raise ValueError(f"{what} '{k}' must be true or false, got {v!r}")
            out[k] = v
            continue
        try:
            out[k] = tuple(float(c) for c in v) if k in _VECTOR_PARAMS else float(v)
        except (TypeError, ValueError):
            raise ValueError(f"{what} '{k}' must be numeric, got {v!r}") from None
        if k in _VECTOR_PARAMS and len(out[k]) != 2:
            raise ValueError(f"{what} '{k}' must have 2 components, got {v!r}")
        if k in _POSITIVE_PARAMS and not out[k] > 0.0:
            raise ValueError(f"{what} '{k}' must be positive, got {out[k]}")
        if k in _NON_NEGATIVE_PARAMS and not out[k] >= 0.0:
            raise ValueError(f"{what} '{k}' must be non-negative, got {out[k]}")
    return out


# =============================================================================
# Acceleration Laws
# =============================================================================

def well_acceleration(src: GravityWell, x: np.ndarray) -> np.ndarray:
    r = src.position - x
    d2 = norm2(r) + src.eps
    a = src.S * r / (d2 * np.sqrt(d2))
    return clamp_magnitude(a, src.a_max)


def stabilizer_acceleration(src: GaussStabilizer, x: np.ndarray) -> np.ndarray:
    r = src.position - x
    R2 = src.R * src.R
    g = np.exp(-norm2(r) / R2)
    a = (2.0 * src.U0 / R2) * g * r
    return clamp_magnitude(a, src.a_max)


def patch_acceleration(src: UniformPatch, x: np.ndarray) -> np.ndarray:
    r = src.position - x
    r2 = norm2(r)
    if src.smooth_edges:
        # soft "wind tunnel"
        return src.E * np.exp(-r2 / (src.R * src.R))
    if r2 <= src.radius * src.radius:
        return src.E.copy()
    return zero2()


def vortex_acceleration(src: Vortex, x: np.ndarray, v: np.ndarray) -> np.ndarray:
    r = src.position - x
    g = np.exp(-norm2(r) / (src.R * src.R))
    a = src.sign * src.omega * g * perp(v)
    return clamp_magnitude(a, src.a_max)


def field_acceleration(
    src: FieldSource,
    x: np.ndarray,
    v: np.ndarray | None = None,
) -> np.ndarray:
    """
    Acceleration contributed by a single source at sample point x.

    Args:
        src: Any field source variant.
        x: Sample position [x, y].
        v: Sample velocity [vx, vy]. Only the vortex reads it; None is
           treated as zero velocity.

    Returns:
        Acceleration vector, already clamped where the law clamps.

    Raises:
        TypeError: If src is not one of the four source variants.
    """
    if isinstance(src, GravityWell):
        return well_acceleration(src, x)
    if isinstance(src, GaussStabilizer):
        return stabilizer_acceleration(src, x)
    if isinstance(src, UniformPatch):
        return patch_acceleration(src, x)
    if isinstance(src, Vortex):
        return vortex_acceleration(src, x, zero2() if v is None else v)

    raise TypeError(f"Unknown field source type: {type(src)}")
