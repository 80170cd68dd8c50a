# MIT License (see LICENSE)
"""
The player craft: launch gate, thrust, fuel and rate steering.

State machine:
    LOCKED   → the craft sits on its spawn point. Fields are sampled but
               their effect is discarded; position is pinned and velocity
               zeroed every tick. Heading still integrates so the player
               can aim before committing.
    LAUNCHED → fields plus thrust drive the shared integrator.
    FINISHED → finish() parks the craft where it is. Nothing moves it,
               bursts and thrust are refused, launch gating is ignored.

LOCKED → LAUNCHED happens on a burst (instant impulse paid with a fixed
fuel cost) or when thrust is held while fuel exceeds the thrust minimum.
Only restart_at() puts the craft back into LOCKED, and only restart_at()
leaves FINISHED.

Per launched tick:
    a = Σ fields + thrust · heading_dir      (thrust only if held and fuel > min)
    fuel -= burn · dt                         (× multiplier while sustained)
    step_body(craft, a, dt)
    loss checks (bounds, attractor contact)

Steering is a rate control: the filtered tilt (degrees) times a gain gives
a turn rate in deg/s, clamped, integrated into the heading and wrapped to
(-180, 180]. Zero heading faces +Y.

The craft reports to its caller only through its EventQueue.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field

import numpy as np

from .bounds import Bounds
from .core.integrators import step_body
from .core.registry import FieldRegistry
from .events import CraftLost, EventQueue, FirstLaunch, FuelChanged, OutOfFuel
from .types import MovingBody
from .util import f64, heading_to_dir, norm2, clamp, wrap_degrees, zero2

log = logging.getLogger(__name__)

LOSS_OUT_OF_BOUNDS = "out_of_bounds"
LOSS_ATTRACTOR_CONTACT = "attractor_contact"


@dataclass(frozen=True)
class CraftConfig:
    """
    Craft tuning.

    Attributes:
        thrust_accel: Thrust acceleration along the heading (u/s²).
        sustain_boost: Fractional thrust boost while sustained (0.5 = +50%).
        burst_impulse: Instant velocity added by a burst (u/s).
        max_speed: Speed clamp for the shared integrator.
        linear_drag: Drag coefficient for the shared integrator.
        fuel_max: Tank size.
        fuel_burn_rate: Fuel per second while thrusting.
        sustain_burn_multiplier: Burn multiplier while sustained.
        burst_fuel_cost: One-off fuel cost of a burst.
        min_fuel_to_thrust: Thrust needs fuel strictly above this.
        launch_gated: Start LOCKED on the spawn point.
        invert_steer: Flip the steering direction.
        deadzone_deg: Tilt below this magnitude reads as zero.
        turn_rate_per_deg: Turn rate (deg/s) per degree of tilt.
        max_turn_rate: Turn rate cap (deg/s).
        tilt_smooth: Smoothing rate; larger is snappier.
    """
    thrust_accel: float = 10.0
    sustain_boost: float = 0.5
    burst_impulse: float = 6.0
    max_speed: float = 12.0
    linear_drag: float = 0.05
    fuel_max: float = 1.0
    fuel_burn_rate: float = 0.12
    sustain_burn_multiplier: float = 2.0
    burst_fuel_cost: float = 0.15
    min_fuel_to_thrust: float = 0.0
    launch_gated: bool = True
    invert_steer: bool = True
    deadzone_deg: float = 2.0
    turn_rate_per_deg: float = 6.0
    max_turn_rate: float = 720.0
    tilt_smooth: float = 12.0


@dataclass
class SteeringFilter:
    """
    Tilt input conditioning: calibration offset, dead zone, inversion and
    exponential smoothing toward the latest reading.
    """
    deadzone_deg: float = 2.0
    invert: bool = True
    smooth: float = 12.0
    baseline: float = 0.0
    raw: float = 0.0
    target: float = 0.0
    filtered: float = 0.0

    def set_input(self, degrees: float) -> None:
        self.raw = float(degrees)
        t = self.raw - self.baseline
        if abs(t) < self.deadzone_deg:
            t = 0.0
        self.target = -t if self.invert else t

    def calibrate(self) -> None:
        """Treat the current reading as zero tilt."""
        self.baseline = self.raw
        self.target = 0.0
        self.filtered = 0.0

    def reset(self) -> None:
        self.target = 0.0
        self.filtered = 0.0

    def update(self, dt: float) -> float:
        self.filtered += (self.target - self.filtered) * (1.0 - math.exp(-self.smooth * dt))
        return self.filtered


@dataclass(eq=False)
class Craft(MovingBody):
    """
    The player-controlled body.

    Construct with the spawn point as position; max_speed and linear_drag
    are taken from the config. initial_fuel defaults to a full tank; after
    construction fuel is read-only and changes only through thrust,
    bursts and restart_at.

    Example:
        craft = Craft(position=(0, -4), config=CraftConfig())
        craft.set_thrust(True)
        craft.update(0.02, registry)
        events = craft.drain_events()
    """
    config: CraftConfig = field(default_factory=CraftConfig)
    heading: float = 0.0
    initial_fuel: float | None = None
    launched: bool = False
    thrust_active: bool = False
    sustained_active: bool = False
    lost: bool = False
    finished: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        cfg = self.config
        self.max_speed = cfg.max_speed
        self.linear_drag = cfg.linear_drag
        self.spawn = self.position.copy()
        fuel = cfg.fuel_max if self.initial_fuel is None else float(self.initial_fuel)
        self._fuel = clamp(fuel, 0.0, cfg.fuel_max)
        self.launched = self.launched or not cfg.launch_gated
        self.heading = wrap_degrees(self.heading)
        self.steering = SteeringFilter(cfg.deadzone_deg, cfg.invert_steer, cfg.tilt_smooth)
        self.events = EventQueue()
        self._launch_announced = False

    # ===== Input boundary =====

    @property
    def fuel(self) -> float:
        return self._fuel

    @property
    def fuel_max(self) -> float:
        return self.config.fuel_max

    @property
    def locked(self) -> bool:
        return not self.launched

    def set_thrust(self, on: bool) -> None:
        self.thrust_active = bool(on)

    def set_sustained(self, on: bool) -> None:
        self.sustained_active = bool(on)

    def set_steering_input(self, degrees: float) -> None:
        """Raw tilt reading in degrees (relative to the calibrated zero)."""
        self.steering.set_input(degrees)

    def calibrate_steering_zero(self) -> None:
        self.steering.calibrate()

    def fire_burst(self) -> bool:
        """
        Instant impulse along the heading, paid with burst_fuel_cost.

        Launches a locked craft. With too little fuel, or on a lost or
        finished craft, nothing happens.

        Returns:
            True if the burst fired.
        """
        cfg = self.config
        if self.lost or self.finished or self.fuel < cfg.burst_fuel_cost:
            return False
        self._set_fuel(self.fuel - cfg.burst_fuel_cost)
        self.velocity = self.velocity + self.heading_dir() * cfg.burst_impulse
        self._launch()
        return True

    def restart_at(self, position, reset_fuel: bool = True, relock: bool = True) -> None:
        """
        Retry in place: same craft, fresh flight state at a new spawn point.

        Args:
            position: New spawn point.
            reset_fuel: Refill the tank.
            relock: Close the launch gate again and allow a new first
                    launch notification.
        """
        cfg = self.config
        self.spawn = f64(position)
        self.position = self.spawn.copy()
        self.velocity = zero2()
        self.heading = 0.0
        self.steering.reset()
        self.thrust_active = False
        self.sustained_active = False
        self.lost = False
        self.finished = False
        if reset_fuel:
            self._fuel = cfg.fuel_max
        if relock:
            self.launched = not cfg.launch_gated
            self._launch_announced = False
        self.events.push(FuelChanged(self.fuel, cfg.fuel_max))

    def finish(self) -> None:
        """
        Park the craft where it is for the rest of the attempt.

        Velocity and input latches are cleared and fuel is kept. The craft
        stays put whatever the launch gating, and no second first-launch
        notification fires, until restart_at.
        """
        self.halt()
        self.thrust_active = False
        self.sustained_active = False
        self.launched = False
        self.finished = True

    def drain_events(self) -> list:
        return self.events.drain()

    # ===== Physics tick =====

    def heading_dir(self) -> np.ndarray:
        return heading_to_dir(self.heading)

    def thrust_available(self) -> bool:
        if self.finished:
            return False
        return self.thrust_active and self.fuel > self.config.min_fuel_to_thrust

    def update(
        self,
        dt: float,
        registry: FieldRegistry,
        bounds: Bounds | None = None,
        time: float = 0.0,
    ) -> None:
        """
        Advance one fixed tick: motion first, then heading.

        Args:
            dt: Fixed timestep.
            registry: Field sources to sample.
            bounds: Play area; leaving it loses the craft. None disables.
            time: Simulation time passed through to the registry.
        """
        if not (self.lost or self.finished):
            self._advance(dt, registry, bounds, time)
        self._steer(dt)

    def _advance(self, dt: float, registry: FieldRegistry, bounds: Bounds | None, time: float) -> None:
        cfg = self.config
        a = registry.acceleration_at(self.position, self.velocity, time)

        if not self.launched:
            if not self.thrust_available():
                self.position = self.spawn.copy()
                self.velocity = zero2()
                return
            self._launch()

        if self.thrust_available():
            acc = cfg.thrust_accel * (1.0 + cfg.sustain_boost) if self.sustained_active else cfg.thrust_accel
            a = a + self.heading_dir() * acc
            burn = cfg.fuel_burn_rate * (cfg.sustain_burn_multiplier if self.sustained_active else 1.0)
            self._set_fuel(self.fuel - burn * dt)
            self._announce_launch()

        step_body(self, a, dt)
        self._check_loss(registry, bounds)

    def _steer(self, dt: float) -> None:
        cfg = self.config
        tilt = self.steering.update(dt)
        turn_rate = clamp(tilt * cfg.turn_rate_per_deg, -cfg.max_turn_rate, cfg.max_turn_rate)
        self.heading = wrap_degrees(self.heading + turn_rate * dt)

    # ===== Helpers =====

    def _launch(self) -> None:
        self.launched = True
        self._announce_launch()

    def _announce_launch(self) -> None:
        if not self._launch_announced:
            self._launch_announced = True
            self.events.push(FirstLaunch())

    def _set_fuel(self, value: float) -> None:
        new = clamp(value, 0.0, self.config.fuel_max)
        if new == self.fuel:
            return
        was = self.fuel
        self._fuel = new
        self.events.push(FuelChanged(new, self.config.fuel_max))
        if was > 0.0 and new <= 0.0:
            self.events.push(OutOfFuel())

    def _check_loss(self, registry: FieldRegistry, bounds: Bounds | None) -> None:
        if bounds is not None and not bounds.contains(self.position):
            self._lose(LOSS_OUT_OF_BOUNDS)
            return
        for well in registry.attractors():
            r = well.contact_radius
            if norm2(well.position - self.position) <= r * r:
                self._lose(LOSS_ATTRACTOR_CONTACT)
                return

    def _lose(self, reason: str) -> None:
        self.halt()
        self.lost = True
        log.info("craft lost (%s) at %s", reason, self.position)
        self.events.push(CraftLost(reason))
