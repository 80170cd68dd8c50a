# MIT License (see LICENSE)
"""
Outbound notifications from the simulation core.

The core never calls back into game code. Bodies push small immutable
event records onto an EventQueue during a tick (or during an input call
such as fire_burst), and the caller drains the queue afterwards:

    session.step()
    for ev in session.drain_events():
        if isinstance(ev, CraftLost):
            ...
"""
from __future__ import annotations
from dataclasses import dataclass, field

from .types import ProbeType


@dataclass(frozen=True)
class FuelChanged:
    """Fuel level changed; carries the new level and the tank size."""
    current: float
    maximum: float


@dataclass(frozen=True)
class OutOfFuel:
    """Fuel crossed from positive to zero. Fires once per crossing."""


@dataclass(frozen=True)
class FirstLaunch:
    """The craft left the launch gate. Fires once per flight attempt."""


@dataclass(frozen=True)
class CraftLost:
    """
    The craft was lost and has been halted.

    Attributes:
        reason: "out_of_bounds" or "attractor_contact".
    """
    reason: str


@dataclass(frozen=True)
class ProbeDocked:
    """
    A probe docked and its dock spawned a field source.

    Attributes:
        probe_type: Type of the docked probe.
        dock_id: Stable id of the dock (see DockNetwork.get).
    """
    probe_type: ProbeType
    dock_id: int


@dataclass(frozen=True)
class ProbeExpired:
    """
    A probe was removed without docking.

    Attributes:
        reason: "out_of_bounds" or "stalled".
    """
    probe_type: ProbeType
    reason: str


@dataclass(frozen=True)
class GoalReached:
    """The craft entered the goal region; carries the star rating."""
    stars: int


Event = FuelChanged | OutOfFuel | FirstLaunch | CraftLost | ProbeDocked | ProbeExpired | GoalReached


@dataclass
class EventQueue:
    """FIFO of pending events, drained by the caller after each tick."""
    items: list[Event] = field(default_factory=list)

    def push(self, event: Event) -> None:
        self.items.append(event)

    def extend(self, events: list[Event]) -> None:
        self.items.extend(events)

    def drain(self) -> list[Event]:
        """Return all pending events in emission order and empty the queue."""
        out, self.items = self.items, []
        return out

    def __len__(self) -> int:
        return len(self.items)
