# MIT License (see LICENSE)
"""
Action counting and star rating for a level.

A level's "par" is the minimum number of actions (probe fires plus craft
launches) its designer needed. Every action over par costs stars.
"""
from __future__ import annotations
from dataclasses import dataclass


@dataclass
class ActionLedger:
    """
    Counts player actions for the current level.

    Attributes:
        par: Actions needed for five stars (read-only level config).
        probe_fires: Probes launched this level.
        launches: Flight attempts that actually left the launch gate.
    """
    par: int = 0
    probe_fires: int = 0
    launches: int = 0
    _launch_counted: bool = False

    @property
    def total_actions(self) -> int:
        return self.probe_fires + self.launches

    def reset_for_level(self) -> None:
        self.probe_fires = 0
        self.launches = 0
        self._launch_counted = False

    def restart_flight_gate(self) -> None:
        """Allow the next first launch to be counted (new flight attempt)."""
        self._launch_counted = False

    def count_probe_fire(self) -> None:
        self.probe_fires += 1

    def count_first_launch(self) -> bool:
        """Count a launch once per flight. Returns True if it was counted."""
        if self._launch_counted:
            return False
        self._launch_counted = True
        self.launches += 1
        return True

    def compute_stars(self) -> int:
        """
        Star rating from actions over par.

        over = 0 → 5, 1 → 4, 2-3 → 3, 4-7 → 2, 8+ → 1.
        """
        over = max(0, self.total_actions - max(0, self.par))
        if over == 0:
            return 5
        if over == 1:
            return 4
        if over <= 3:
            return 3
        if over <= 7:
            return 2
        return 1

    def snapshot(self) -> tuple[int, int, int, int]:
        """(total, probes, launches, par)"""
        return self.total_actions, self.probe_fires, self.launches, self.par
