# MIT License (see LICENSE)
"""
Input/Output utilities for levels.

This subpackage provides:
    - JSON level files: load a Session from disk, save one back.
    - Per-entity helpers for field sources and docks.

Typical usage:
    from graviton.io import load_level, save_level

    session = load_level("levels/level_01.json")
    save_level(session, "out.json")
"""
from .json_io import (
    load_level,
    load_level_raw,
    level_from_json,
    save_level,
    session_to_json,
    field_from_json,
    field_to_json,
    dock_from_json,
    dock_to_json,
)

__all__ = [
    # Loading
    "load_level",
    "load_level_raw",
    "level_from_json",
    # Saving
    "save_level",
    # Serialization
    "session_to_json",
    "field_from_json",
    "field_to_json",
    "dock_from_json",
    "dock_to_json",
]
