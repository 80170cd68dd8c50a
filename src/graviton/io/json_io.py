# MIT License (see LICENSE)
"""
JSON serialization and deserialization for levels.

A level file describes everything a Session needs: timestep, spawn point,
play area, goal, par, tuning overrides, placed field sources and docks.

JSON Schema Overview:
---------------------
{
  "dt": float,                       # Default: 0.02
  "spawn": [x, y],                   # Default: [0, 0]
  "par": int,                        # Default: 0
  "auto_restart": bool,              # Default: true
  "bounds": {                        # Optional, one of:
    "xmin": float, "ymin": float, "xmax": float, "ymax": float
  } | {
    "camera": {"center": [x, y], "half_height": float,
               "aspect": float, "margin": float}
  },
  "goal": {"position": [x, y], "radius": float},        # Optional
  "craft": {...},                    # Optional CraftConfig fields
  "probe": {...},                    # Optional ProbeConfig fields
  "predictor": {...},                # Optional PredictorConfig fields
  "fields": [
    {
      "type": "well" | "stabilizer" | "patch" | "vortex",
      "position": [x, y],
      ...                            # Source parameters (S, eps, U0, R, E, ...)
      "enabled": bool                # Default: true
    }
  ],
  "docks": [
    {
      "position": [x, y],
      "snap_radius": float,          # Default: 0.5
      "accepts": ["stabilizer", "repulsor", "jetstream", "vortex"],
      "overrides": {"repulsor": {"S": -10.0}, ...}
    }
  ]
}
"""
from __future__ import annotations
import dataclasses
import json
import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from ..bounds import Bounds, GoalRegion
from ..craft import CraftConfig
from ..docking import Dock
from ..fields import FieldSource, GaussStabilizer, GravityWell, UniformPatch, Vortex, source_params
from ..predictor import PredictorConfig
from ..probe import ProbeConfig
from ..types import ProbeType

if TYPE_CHECKING:
    from ..session import Session

log = logging.getLogger(__name__)

FIELD_TYPE_NAMES: dict[str, type] = {
    "well": GravityWell,
    "stabilizer": GaussStabilizer,
    "patch": UniformPatch,
    "vortex": Vortex,
}
_FIELD_NAMES_BY_TYPE = {cls: name for name, cls in FIELD_TYPE_NAMES.items()}


def load_level_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a level file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_level(path: str) -> "Session":
    """
    Load and construct a ready-to-run Session from a JSON level file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If a field, dock or config entry is malformed.
    """
    session = level_from_json(load_level_raw(path))
    log.info(
        "loaded level %s: %d fields, %d docks, par %d",
        path, len(session.placed), len(session.docks), session.par,
    )
    return session


def level_from_json(data: dict[str, Any]) -> "Session":
    """Build a Session from an already-parsed level dictionary."""
    # Import locally to avoid circular import (Session is the top-level type)
    from ..session import Session

    predictor_cfg = None
    if "predictor" in data:
        predictor_cfg = _config_from_json(PredictorConfig, data["predictor"])

    session = Session(
        dt=float(data.get("dt", 0.02)),
        spawn=tuple(float(c) for c in data.get("spawn", [0.0, 0.0])),
        bounds=bounds_from_json(data["bounds"]) if "bounds" in data else None,
        goal=goal_from_json(data["goal"]) if "goal" in data else None,
        par=int(data.get("par", 0)),
        auto_restart=bool(data.get("auto_restart", True)),
        craft_config=_config_from_json(CraftConfig, data.get("craft", {})),
        probe_config=_config_from_json(ProbeConfig, data.get("probe", {})),
        predictor_config=predictor_cfg,
    )
    if session.dt <= 0:
        raise ValueError(f"Timestep must be positive, got {session.dt}")

    for field_data in data.get("fields", []):
        session.add_field(field_from_json(field_data))
    for dock_data in data.get("docks", []):
        session.add_dock(dock_from_json(dock_data))
    return session


# =============================================================================
# Field sources
# =============================================================================

def field_from_json(d: dict[str, Any]) -> FieldSource:
    """
    Parse a single field source definition.

    Raises:
        ValueError: On a missing/unknown type, unknown parameters or
                    parameter values out of range.
    """
    if "type" not in d:
        raise ValueError("Field definition missing required 'type' field.")
    kind = d["type"]
    cls = FIELD_TYPE_NAMES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown field type: '{kind}'")

    params = {k: v for k, v in d.items() if k != "type"}
    return cls(**source_params(cls, params, f"field '{kind}'"))


def field_to_json(src: FieldSource) -> dict[str, Any]:
    """Serialize a field source (round-trip compatible)."""
    name = _FIELD_NAMES_BY_TYPE.get(type(src))
    if name is None:
        raise TypeError(f"Cannot serialize unknown field source type: {type(src)}")
    out: dict[str, Any] = {"type": name}
    for f in dataclasses.fields(src):
        out[f.name] = _to_json_value(getattr(src, f.name))
    return out


# =============================================================================
# Docks
# =============================================================================

def dock_from_json(d: dict[str, Any]) -> Dock:
    """Parse a dock definition; probe types are given by name."""
    if "position" not in d:
        raise ValueError("Dock definition missing required 'position' field.")
    accepted = frozenset(_probe_type(n) for n in d.get("accepts", [t.value for t in ProbeType]))
    overrides = {
        _probe_type(name): dict(params)
        for name, params in d.get("overrides", {}).items()
    }
    radius = float(d.get("snap_radius", 0.5))
    if radius < 0:
        raise ValueError(f"Dock snap_radius must be non-negative, got {radius}")
    return Dock(
        position=tuple(d["position"]),
        snap_radius=radius,
        accepted=accepted,
        overrides=overrides,
    )


def dock_to_json(dock: Dock) -> dict[str, Any]:
    out: dict[str, Any] = {
        "position": _to_list(dock.position),
        "snap_radius": dock.snap_radius,
        "accepts": [t.value for t in ProbeType if t in dock.accepted],
    }
    if dock.overrides:
        out["overrides"] = {
            t.value: {k: _to_json_value(v) for k, v in params.items()}
            for t, params in dock.overrides.items()
        }
    return out


# =============================================================================
# Bounds / goal
# =============================================================================

def bounds_from_json(d: dict[str, Any]) -> Bounds:
    if "camera" in d:
        cam = d["camera"]
        return Bounds.from_camera(
            center=tuple(cam.get("center", [0.0, 0.0])),
            half_height=float(cam["half_height"]),
            aspect=float(cam.get("aspect", 16 / 9)),
            margin=float(cam.get("margin", 2.0)),
        )
    try:
        return Bounds(float(d["xmin"]), float(d["ymin"]), float(d["xmax"]), float(d["ymax"]))
    except KeyError as e:
        raise ValueError(f"Bounds definition missing {e.args[0]!r}") from None


def bounds_to_json(b: Bounds) -> dict[str, float]:
    return {"xmin": b.xmin, "ymin": b.ymin, "xmax": b.xmax, "ymax": b.ymax}


def goal_from_json(d: dict[str, Any]) -> GoalRegion:
    radius = float(d["radius"])
    if radius <= 0:
        raise ValueError(f"Goal radius must be positive, got {radius}")
    return GoalRegion(position=tuple(float(c) for c in d["position"]), radius=radius)


# =============================================================================
# Session
# =============================================================================

def session_to_json(session: "Session") -> dict[str, Any]:
    """
    Serialize a Session's level description.

    Captured: timestep, spawn, par, bounds, goal, non-default tuning,
    placed sources and docks. Runtime state (probes, dock anchors, craft
    motion, scoring counters) is not part of a level.
    """
    result: dict[str, Any] = {
        "dt": session.dt,
        "spawn": _to_list(session.spawn),
        "par": session.par,
        "fields": [field_to_json(s) for s in session.placed],
        "docks": [dock_to_json(d) for d in session.docks],
    }
    if not session.auto_restart:
        result["auto_restart"] = False
    if session.bounds is not None:
        result["bounds"] = bounds_to_json(session.bounds)
    if session.goal is not None:
        result["goal"] = {"position": _to_list(session.goal.position), "radius": session.goal.radius}

    # Tuning (skip if all defaults)
    for key, cfg in (
        ("craft", session.craft_config),
        ("probe", session.probe_config),
        ("predictor", session.predictor_config),
    ):
        if cfg is None:
            continue
        diff = _config_to_json(cfg)
        if diff:
            result[key] = diff
    return result


def save_level(session: "Session", path: str, indent: int = 2) -> None:
    """Save a Session's level description to a JSON file on disk."""
    data = session_to_json(session)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


# =============================================================================
# Helpers
# =============================================================================

def _probe_type(name: str) -> ProbeType:
    try:
        return ProbeType(name)
    except ValueError:
        raise ValueError(f"Unknown probe type: '{name}'") from None


def _config_from_json(cls: type, d: dict[str, Any]):
    allowed = {f.name for f in dataclasses.fields(cls)}
    unknown = set(d) - allowed
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} key(s): {sorted(unknown)}")
    return cls(**d)


def _config_to_json(cfg) -> dict[str, Any]:
    """Only the fields that differ from the config's defaults."""
    out = {}
    for f in dataclasses.fields(cfg):
        value = getattr(cfg, f.name)
        if value != f.default:
            out[f.name] = value
    return out


def _to_json_value(v: Any) -> Any:
    if isinstance(v, (np.ndarray, tuple)):
        return _to_list(v)
    return v


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return [float(c) for c in arr]
