# MIT License (see LICENSE)
"""
The simulation session: one level's world and its fixed-step loop.

The Session owns everything whose lifetime is tied to a level:
- The field registry (placed sources plus dock-spawned ones).
- The docks, the live probes and the craft.
- The action ledger (scoring) and the trajectory predictor.

Each step():
    1. Probes: sample, integrate, dock / cull. A dock spawned this tick
       is registered before the craft moves, but probes that already
       moved this tick do not see it until the next one.
    2. Craft: launch gate, thrust, fuel, integrate, loss checks.
    3. Goal: entering the goal region rates the run and freezes the craft.

Everything happens synchronously on the caller's thread; the registry is
only mutated between body updates, never during an aggregation.
Notifications are collected into one queue; drain it after each step.

Structure:
    - Build a Session (directly or with io.load_level).
    - Place sources with add_field(), docks with add_dock().
    - Feed input to session.craft / spawn_probe().
    - Call step() once per physics tick and drain_events().
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from .bounds import Bounds, GoalRegion
from .constants import DEFAULT_DT
from .core.registry import FieldRegistry
from .craft import Craft, CraftConfig
from .docking import Dock, DockNetwork
from .events import CraftLost, EventQueue, FirstLaunch, GoalReached, ProbeDocked, ProbeExpired
from .fields import FieldSource
from .predictor import PredictorConfig, TrajectoryPredictor
from .probe import Probe, ProbeConfig, ProbeStatus
from .profiler import Profiler, maybe_section
from .scoring import ActionLedger
from .types import ProbeType

log = logging.getLogger(__name__)


@dataclass
class Session:
    """
    One level's simulation world.

    Attributes:
        dt: Fixed physics timestep in seconds (default 0.02, i.e. 50 Hz).
        spawn: Craft spawn point; restart_flight() returns here.
        bounds: Play area shared by craft and probes (None = unbounded).
        goal: Finish zone (None = no goal).
        par: Actions needed for five stars.
        auto_restart: Restart the flight in place when the craft is lost.
        craft_config: Craft tuning.
        probe_config: Probe tuning.
        predictor_config: Preview tuning; defaults to the probe's body
                          parameters so the preview matches live probes.
        profiler: Optional Profiler for phase timings.
    """
    dt: float = DEFAULT_DT
    spawn: tuple[float, float] = (0.0, 0.0)
    bounds: Bounds | None = None
    goal: GoalRegion | None = None
    par: int = 0
    auto_restart: bool = True
    craft_config: CraftConfig = field(default_factory=CraftConfig)
    probe_config: ProbeConfig = field(default_factory=ProbeConfig)
    predictor_config: PredictorConfig | None = None
    profiler: Profiler | None = None

    # Internal state
    registry: FieldRegistry = field(default_factory=FieldRegistry)
    docks: DockNetwork = field(default_factory=DockNetwork)
    probes: list[Probe] = field(default_factory=list)
    placed: list[FieldSource] = field(default_factory=list)
    time: float = 0.0

    def __post_init__(self) -> None:
        self.craft = Craft(position=self.spawn, config=self.craft_config)
        self.ledger = ActionLedger(par=self.par)
        self.predictor = TrajectoryPredictor(
            self.registry,
            self.predictor_config or PredictorConfig.for_probe(self.probe_config),
        )
        self.events = EventQueue()
        self.goal_reached = False
        for src in self.placed:
            self.registry.register(src)

    # ===== Level content =====

    def add_field(self, source: FieldSource) -> None:
        """Place a source directly in the level (survives level restarts)."""
        if not any(s is source for s in self.placed):
            self.placed.append(source)
        self.registry.register(source)

    def remove_field(self, source: FieldSource) -> None:
        self.placed = [s for s in self.placed if s is not source]
        self.registry.unregister(source)

    def add_dock(self, dock: Dock) -> int:
        return self.docks.add(dock)

    # ===== Input boundary =====

    def spawn_probe(self, origin, velocity, probe_type: ProbeType) -> Probe:
        """Launch a probe (counts as one action)."""
        probe = Probe.launch(origin, velocity, probe_type, self.probe_config)
        self.probes.append(probe)
        self.ledger.count_probe_fire()
        return probe

    def preview(self, origin, velocity) -> np.ndarray:
        """Predicted path of a probe launched with these parameters."""
        return self.predictor.draw(origin, velocity)

    def clear_all_docks(self) -> None:
        self.docks.clear_all_docks(self.registry)

    def restart_flight(self) -> None:
        """Retry: craft back to spawn, refueled and locked; anchors stay."""
        self.craft.restart_at(self.spawn, reset_fuel=True, relock=True)
        self.ledger.restart_flight_gate()
        self.goal_reached = False
        self.events.extend(self.craft.drain_events())

    def restart_level(self) -> None:
        """Clear docks and probes, rebuild the registry, reset scoring and the flight."""
        self.clear_all_docks()
        self.registry.clear()
        for src in self.placed:
            self.registry.register(src)
        self.probes.clear()
        self.ledger.reset_for_level()
        self.predictor.clear()
        self.restart_flight()
        log.info("level restarted (%d placed sources, %d docks)", len(self.placed), len(self.docks))

    def drain_events(self) -> list:
        return self.events.drain()

    # ===== Simulation loop =====

    def step(self, dt: float | None = None) -> None:
        """Advance the session by one fixed tick."""
        dt = float(self.dt if dt is None else dt)
        prof = self.profiler

        with maybe_section(prof, "probes"):
            self._step_probes(dt)

        with maybe_section(prof, "craft"):
            self.craft.update(dt, self.registry, self.bounds, self.time)
            self._collect_craft_events()

        with maybe_section(prof, "goal"):
            self._check_goal()

        self.time += dt

    def _step_probes(self, dt: float) -> None:
        for probe in self.probes:
            status = probe.step(dt, self.registry, self.docks, self.bounds, self.time)
            if status is ProbeStatus.DOCKED:
                self.events.push(ProbeDocked(probe.probe_type, probe.dock_id))
            elif status is not ProbeStatus.ACTIVE:
                log.debug("%s probe expired: %s", probe.probe_type.value, status.value)
                self.events.push(ProbeExpired(probe.probe_type, status.value))
        self.probes = [p for p in self.probes if p.alive]

    def _collect_craft_events(self) -> None:
        lost = False
        for ev in self.craft.drain_events():
            if isinstance(ev, FirstLaunch):
                self.ledger.count_first_launch()
            elif isinstance(ev, CraftLost):
                lost = True
            self.events.push(ev)
        if lost and self.auto_restart:
            self.restart_flight()

    def _check_goal(self) -> None:
        craft = self.craft
        if self.goal is None or self.goal_reached or not craft.launched or craft.lost:
            return
        if not self.goal.contains(craft.position):
            return
        self.goal_reached = True
        stars = self.ledger.compute_stars()
        log.info("goal reached: %d stars (%s)", stars, self.ledger.snapshot())
        self.events.push(GoalReached(stars))
        # park in the goal until the next restart
        craft.finish()
