# MIT License (see LICENSE)
"""
Probes: short-lived projectiles that deploy field sources.

Each tick a probe samples the field registry, integrates with the shared
step, then checks (in this order):

    1. Docking: nearest free dock accepting its type within snap radius.
       The probe snaps to the dock, stops, the dock spawns its source,
       and the probe is finished.
    2. Bounds: leaving the play area finishes the probe.
    3. Stall: after a spawn grace period, staying at or below v_eps for
       stationary_timeout seconds finishes the probe. The grace period
       keeps a probe launched almost at rest alive long enough to feel
       the fields.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .bounds import Bounds
from .constants import MAX_LAUNCH_SPEED
from .core.integrators import step_body
from .core.registry import FieldRegistry
from .docking import DockNetwork
from .fields import FieldSource
from .types import MovingBody, ProbeType


@dataclass(frozen=True)
class ProbeConfig:
    """
    Probe tuning.

    Attributes:
        max_speed: Speed clamp for the shared integrator.
        linear_drag: Drag coefficient for the shared integrator.
        v_eps: Speeds at or below this count as stationary.
        stationary_timeout: Stationary time after which the probe dies.
        spawn_grace: Stationary checks are skipped until the probe is
                     older than this.
    """
    max_speed: float = MAX_LAUNCH_SPEED
    linear_drag: float = 0.0
    v_eps: float = 0.05
    stationary_timeout: float = 0.6
    spawn_grace: float = 0.15


class ProbeStatus(Enum):
    ACTIVE = "active"
    DOCKED = "docked"
    OUT_OF_BOUNDS = "out_of_bounds"
    STALLED = "stalled"


@dataclass(eq=False)
class Probe(MovingBody):
    """
    A projectile body carrying a probe payload.

    Attributes:
        probe_type: Payload; decides which source a dock will spawn.
        config: Timeouts and thresholds.
        age: Seconds since spawn.
        stationary_timer: Seconds spent continuously at or below v_eps
                          (only counted after the grace period).
        status: ACTIVE until the probe docks or is culled.
        deployed: Source spawned by the dock this probe docked into.
        dock_id: dock_id of that dock in the network.
    """
    probe_type: ProbeType = ProbeType.STABILIZER
    config: ProbeConfig = field(default_factory=ProbeConfig)
    age: float = 0.0
    stationary_timer: float = 0.0
    status: ProbeStatus = ProbeStatus.ACTIVE
    deployed: FieldSource | None = None
    dock_id: int = -1

    @classmethod
    def launch(
        cls,
        origin,
        velocity,
        probe_type: ProbeType,
        config: ProbeConfig | None = None,
    ) -> "Probe":
        """Create a probe at origin with the given launch velocity."""
        config = config or ProbeConfig()
        return cls(
            position=origin,
            velocity=velocity,
            max_speed=config.max_speed,
            linear_drag=config.linear_drag,
            probe_type=probe_type,
            config=config,
        )

    @property
    def alive(self) -> bool:
        return self.status is ProbeStatus.ACTIVE

    def step(
        self,
        dt: float,
        registry: FieldRegistry,
        docks: DockNetwork | None = None,
        bounds: Bounds | None = None,
        time: float = 0.0,
    ) -> ProbeStatus:
        """
        Advance one tick.

        Args:
            dt: Fixed timestep.
            registry: Field sources to sample.
            docks: Dock targets; None means nothing to dock with.
            bounds: Play area; None disables culling.
            time: Simulation time passed through to the registry.

        Returns:
            The probe's status after the tick. Finished probes are inert
            and return their final status.
        """
        if not self.alive:
            return self.status

        self.age += dt
        a = registry.acceleration_at(self.position, self.velocity, time)
        step_body(self, a, dt)

        if docks is not None and self._try_dock(docks, registry):
            return self.status

        if bounds is not None and not bounds.contains(self.position):
            self.status = ProbeStatus.OUT_OF_BOUNDS
            return self.status

        cfg = self.config
        if self.age > cfg.spawn_grace:
            if self.speed <= cfg.v_eps:
                self.stationary_timer += dt
                if self.stationary_timer >= cfg.stationary_timeout:
                    self.status = ProbeStatus.STALLED
            else:
                self.stationary_timer = 0.0

        return self.status

    def _try_dock(self, docks: DockNetwork, registry: FieldRegistry) -> bool:
        hit = docks.find_dock(self.position, self.probe_type)
        if hit is None:
            return False
        dock_id, dock = hit
        self.position = dock.position.copy()
        self.velocity = np.zeros(2, dtype=np.float64)
        self.deployed = dock.spawn_anchor_for(self.probe_type, registry)
        self.dock_id = dock_id
        self.status = ProbeStatus.DOCKED
        return True
