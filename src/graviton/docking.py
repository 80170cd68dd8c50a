# MIT License (see LICENSE)
"""
Docks: fixed acceptance points that turn a probe into a field source.

When a probe of an accepted type comes within a dock's snap radius, the
dock builds the field source for that probe type at its own position,
registers it, and stays occupied until explicitly cleared. A dock holds at
most one source at a time.

Default sources per probe type:
    STABILIZER → GaussStabilizer()
    REPULSOR   → GravityWell(S=-6, eps=0.1)
    JETSTREAM  → UniformPatch()
    VORTEX     → Vortex()

Per-dock overrides replace any of the source's parameters, e.g.
``{ProbeType.REPULSOR: {"S": -10.0}}``.
"""
from __future__ import annotations
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .core.registry import FieldRegistry
from .fields import FieldSource, GaussStabilizer, GravityWell, UniformPatch, Vortex, source_params
from .types import ProbeType
from .util import f64, norm2

log = logging.getLogger(__name__)

_SOURCE_CLASS: dict[ProbeType, type] = {
    ProbeType.STABILIZER: GaussStabilizer,
    ProbeType.REPULSOR: GravityWell,
    ProbeType.JETSTREAM: UniformPatch,
    ProbeType.VORTEX: Vortex,
}


def anchor_template(probe_type: ProbeType, position) -> FieldSource:
    """Default field source a dock spawns for a probe type."""
    if probe_type is ProbeType.STABILIZER:
        return GaussStabilizer(position=position)
    if probe_type is ProbeType.REPULSOR:
        return GravityWell(position=position, S=-6.0, eps=0.1)
    if probe_type is ProbeType.JETSTREAM:
        return UniformPatch(position=position)
    if probe_type is ProbeType.VORTEX:
        return Vortex(position=position)
    raise TypeError(f"Unknown probe type: {probe_type!r}")


@dataclass(eq=False)
class Dock:
    """
    A snap point that converts docked probes into field sources.

    Attributes:
        position: Dock center [x, y]; spawned sources sit exactly here.
        snap_radius: A probe within this distance docks.
        accepted: Probe types this dock accepts.
        overrides: Per-type parameter overrides applied to the spawned
                   source (keys are source field names).
        anchor: The currently spawned source, or None when free.
        dock_id: Identifier assigned by the DockNetwork; -1 until added.

    Raises:
        ValueError: If an override names an unknown parameter, sets the
                    position, or carries a value the source rejects.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    snap_radius: float = 0.5
    accepted: frozenset[ProbeType] = frozenset(ProbeType)
    overrides: dict[ProbeType, dict[str, Any]] = field(default_factory=dict)
    anchor: FieldSource | None = None
    dock_id: int = -1

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.accepted = frozenset(self.accepted)
        checked = {}
        for probe_type, params in self.overrides.items():
            # position always comes from the dock
            if "position" in params:
                raise ValueError(f"Invalid {probe_type.value} override(s): ['position']")
            checked[probe_type] = source_params(
                _SOURCE_CLASS[probe_type], params, f"{probe_type.value} override"
            )
        self.overrides = checked

    @property
    def occupied(self) -> bool:
        return self.anchor is not None

    def accepts(self, probe_type: ProbeType) -> bool:
        return probe_type in self.accepted

    def in_range(self, position) -> bool:
        d = self.position - position
        return norm2(d) <= self.snap_radius * self.snap_radius

    def spawn_anchor_for(self, probe_type: ProbeType, registry: FieldRegistry) -> FieldSource | None:
        """
        Build, configure and register the source for a probe type.

        Rejected (returns None, no state change) when the type is not
        accepted or the dock is already occupied; an occupied dock must
        be cleared first.
        """
        if not self.accepts(probe_type):
            log.debug("dock at %s rejected %s probe (not accepted)", self.position, probe_type.value)
            return None
        if self.occupied:
            log.debug("dock at %s already occupied, ignoring %s probe", self.position, probe_type.value)
            return None

        source = anchor_template(probe_type, self.position.copy())
        params = self.overrides.get(probe_type)
        if params:
            source = dataclasses.replace(source, **params)
        registry.register(source)
        self.anchor = source
        log.info("dock at %s spawned %s", self.position, type(source).__name__)
        return source

    def clear_anchor(self, registry: FieldRegistry) -> None:
        """Unregister and drop the spawned source, freeing the dock."""
        if self.anchor is None:
            return
        registry.unregister(self.anchor)
        log.info("dock at %s cleared %s", self.position, type(self.anchor).__name__)
        self.anchor = None


@dataclass
class DockNetwork:
    """
    All docks of a level.

    When several free docks accepting the same type are within range,
    the nearest wins; exact ties go to the dock added first.

    Every dock gets a dock_id when it joins the network. Ids are never
    reused, so an id reported by ProbeDocked stays valid after other docks
    are removed.
    """
    docks: list[Dock] = field(default_factory=list)
    next_id: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        for dock in self.docks:
            self._assign_id(dock)

    def add(self, dock: Dock) -> int:
        """Add a dock; returns its dock_id."""
        self.docks.append(dock)
        return self._assign_id(dock)

    def get(self, dock_id: int) -> Dock | None:
        for dock in self.docks:
            if dock.dock_id == dock_id:
                return dock
        return None

    def _assign_id(self, dock: Dock) -> int:
        dock.dock_id = self.next_id
        self.next_id += 1
        return dock.dock_id

    def remove(self, dock: Dock, registry: FieldRegistry) -> None:
        """Clear and remove a dock."""
        if dock in self.docks:
            dock.clear_anchor(registry)
            self.docks.remove(dock)

    def find_dock(self, position, probe_type: ProbeType) -> tuple[int, Dock] | None:
        """
        Nearest free dock accepting probe_type whose snap radius covers position.

        Returns:
            (dock_id, dock), or None when no dock is in range.
        """
        p = f64(position)
        best = None
        best_d2 = 0.0
        for dock in self.docks:
            if dock.occupied or not dock.accepts(probe_type):
                continue
            d2 = norm2(dock.position - p)
            if d2 <= dock.snap_radius * dock.snap_radius and (best is None or d2 < best_d2):
                best, best_d2 = (dock.dock_id, dock), d2
        return best

    def clear_all_docks(self, registry: FieldRegistry) -> None:
        for dock in self.docks:
            dock.clear_anchor(registry)

    def occupied_count(self) -> int:
        return sum(1 for d in self.docks if d.occupied)

    def __iter__(self):
        return iter(self.docks)

    def __len__(self) -> int:
        return len(self.docks)
