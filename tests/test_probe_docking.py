import numpy as np
import pytest

from graviton.bounds import Bounds
from graviton.core.registry import FieldRegistry
from graviton.docking import Dock, DockNetwork, anchor_template
from graviton.fields import GaussStabilizer, GravityWell, UniformPatch, Vortex
from graviton.probe import Probe, ProbeConfig, ProbeStatus
from graviton.types import ProbeType

DT = 0.02


def test_probe_docks_and_spawns_source():
    registry = FieldRegistry()
    dock = Dock(position=(1.0, 0.0), snap_radius=0.5)
    docks = DockNetwork([dock])
    probe = Probe.launch((0.6, 0.0), (1.0, 0.0), ProbeType.REPULSOR)

    status = probe.step(DT, registry, docks)

    assert status is ProbeStatus.DOCKED
    assert np.array_equal(probe.position, [1.0, 0.0])
    assert np.array_equal(probe.velocity, [0.0, 0.0])
    assert dock.occupied
    assert probe.deployed is dock.anchor
    assert probe.dock_id == 0
    assert dock.anchor in registry
    assert isinstance(dock.anchor, GravityWell)
    assert dock.anchor.S == -6.0 and dock.anchor.eps == 0.1
    assert np.array_equal(dock.anchor.position, dock.position)


def test_unaccepted_type_passes_through():
    registry = FieldRegistry()
    dock = Dock(position=(1.0, 0.0), accepted={ProbeType.STABILIZER})
    probe = Probe.launch((0.6, 0.0), (1.0, 0.0), ProbeType.REPULSOR)

    assert probe.step(DT, registry, DockNetwork([dock])) is ProbeStatus.ACTIVE
    assert not dock.occupied
    assert len(registry) == 0


def test_occupied_dock_is_unaffected():
    registry = FieldRegistry()
    dock = Dock(position=(1.0, 0.0))
    first = dock.spawn_anchor_for(ProbeType.STABILIZER, registry)
    probe = Probe.launch((0.6, 0.0), (1.0, 0.0), ProbeType.REPULSOR)

    assert probe.step(DT, registry, DockNetwork([dock])) is ProbeStatus.ACTIVE
    assert dock.anchor is first
    assert len(registry) == 1

    # Spawning again is rejected until cleared
    assert dock.spawn_anchor_for(ProbeType.VORTEX, registry) is None
    dock.clear_anchor(registry)
    assert not dock.occupied and len(registry) == 0


def test_nearest_dock_wins():
    docks = DockNetwork()
    docks.add(Dock(position=(1.0, 0.0), snap_radius=1.0))
    docks.add(Dock(position=(0.8, 0.0), snap_radius=1.0))
    probe = Probe.launch((0.5, 0.0), (1.0, 0.0), ProbeType.VORTEX)

    probe.step(DT, FieldRegistry(), docks)
    assert probe.dock_id == 1
    assert docks.occupied_count() == 1


def test_equal_distance_goes_to_first_added():
    docks = DockNetwork()
    docks.add(Dock(position=(1.0, 0.3), snap_radius=0.5))
    docks.add(Dock(position=(1.0, -0.3), snap_radius=0.5))
    hit = docks.find_dock((1.0, 0.0), ProbeType.STABILIZER)
    assert hit is not None and hit[0] == 0


def test_docking_checked_before_bounds():
    dock = Dock(position=(1.05, 0.0), snap_radius=0.5)
    probe = Probe.launch((0.99, 0.0), (5.0, 0.0), ProbeType.JETSTREAM)
    status = probe.step(DT, FieldRegistry(), DockNetwork([dock]), Bounds(-1, -1, 1, 1))
    assert status is ProbeStatus.DOCKED
    assert isinstance(dock.anchor, UniformPatch)


def test_out_of_bounds():
    probe = Probe.launch((0.99, 0.0), (5.0, 0.0), ProbeType.JETSTREAM)
    assert probe.step(DT, FieldRegistry(), None, Bounds(-1, -1, 1, 1)) is ProbeStatus.OUT_OF_BOUNDS
    assert not probe.alive


def test_stall_after_grace_and_timeout():
    """
    Grace 0.15 s then 0.6 s at or below v_eps:
      first counted tick is age 0.16 (tick 8), timeout after ~30 more.
    """
    probe = Probe.launch((0, 0), (0.01, 0.0), ProbeType.STABILIZER)
    registry = FieldRegistry()

    for _ in range(7):
        probe.step(DT, registry)
    assert probe.stationary_timer == 0.0

    stalled_at = None
    for n in range(8, 100):
        if probe.step(DT, registry) is ProbeStatus.STALLED:
            stalled_at = n
            break

    print("stalled at tick", stalled_at, "age", probe.age)
    assert stalled_at is not None
    assert 37 <= stalled_at <= 38
    assert probe.stationary_timer >= 0.6 - 1e-9


def test_stationary_timer_resets_when_moving():
    probe = Probe.launch((0, 0), (0.0, 0.0), ProbeType.STABILIZER)
    registry = FieldRegistry()
    for _ in range(20):
        probe.step(DT, registry)
    assert probe.stationary_timer > 0.0

    probe.velocity = np.array([1.0, 0.0])
    probe.step(DT, registry)
    assert probe.stationary_timer == 0.0
    assert probe.alive


def test_probe_feels_fields():
    registry = FieldRegistry()
    registry.register(GravityWell(position=(0, 5), S=12.0))
    probe = Probe.launch((0, 0), (1.0, 0.0), ProbeType.STABILIZER)
    probe.step(DT, registry)
    assert probe.velocity[1] > 0.0


def test_finished_probe_is_inert():
    dock = Dock(position=(1.0, 0.0))
    probe = Probe.launch((0.6, 0.0), (1.0, 0.0), ProbeType.STABILIZER)
    registry = FieldRegistry()
    registry.register(GravityWell(position=(3, 0), S=12.0))
    probe.step(DT, registry, DockNetwork([dock]))
    age = probe.age

    for _ in range(5):
        assert probe.step(DT, registry, DockNetwork([dock])) is ProbeStatus.DOCKED
    assert probe.age == age
    assert np.array_equal(probe.position, [1.0, 0.0])


def test_probe_uses_config_body_parameters():
    cfg = ProbeConfig(max_speed=3.0, linear_drag=0.5)
    probe = Probe.launch((0, 0), (1.0, 0.0), ProbeType.VORTEX, cfg)
    assert probe.max_speed == 3.0 and probe.linear_drag == 0.5


@pytest.mark.parametrize("probe_type, cls", [
    (ProbeType.STABILIZER, GaussStabilizer),
    (ProbeType.REPULSOR, GravityWell),
    (ProbeType.JETSTREAM, UniformPatch),
    (ProbeType.VORTEX, Vortex),
])
def test_anchor_templates(probe_type, cls):
    src = anchor_template(probe_type, (2.0, 3.0))
    assert isinstance(src, cls)
    assert np.array_equal(src.position, [2.0, 3.0])


def test_dock_overrides():
    registry = FieldRegistry()
    dock = Dock(
        position=(1.0, 1.0),
        overrides={ProbeType.REPULSOR: {"S": -10.0, "eps": 0.2}, ProbeType.STABILIZER: {"a_max": 0.0}},
    )
    well = dock.spawn_anchor_for(ProbeType.REPULSOR, registry)
    assert well.S == -10.0 and well.eps == 0.2
    assert np.array_equal(well.position, [1.0, 1.0])

    dock.clear_anchor(registry)
    stab = dock.spawn_anchor_for(ProbeType.STABILIZER, registry)
    assert stab.a_max == 0.0
    assert stab.U0 == 13.0


def test_invalid_overrides_rejected():
    with pytest.raises(ValueError):
        Dock(overrides={ProbeType.REPULSOR: {"omega": 1.0}})
    with pytest.raises(ValueError):
        Dock(overrides={ProbeType.VORTEX: {"position": (0, 0)}})


@pytest.mark.parametrize("probe_type, params", [
    (ProbeType.REPULSOR, {"S": "abc"}),
    (ProbeType.REPULSOR, {"eps": 0.0}),
    (ProbeType.STABILIZER, {"R": 0.0}),
    (ProbeType.VORTEX, {"R": -1.0}),
    (ProbeType.VORTEX, {"clockwise": "no"}),
    (ProbeType.JETSTREAM, {"radius": -0.5}),
    (ProbeType.JETSTREAM, {"E": [1.0]}),
])
def test_out_of_range_overrides_rejected(probe_type, params):
    with pytest.raises(ValueError):
        Dock(overrides={probe_type: params})


def test_overrides_are_coerced():
    dock = Dock(overrides={ProbeType.JETSTREAM: {"E": [0, 3], "radius": 2, "smooth_edges": False}})
    assert dock.overrides[ProbeType.JETSTREAM] == {"E": (0.0, 3.0), "radius": 2.0, "smooth_edges": False}

    patch = dock.spawn_anchor_for(ProbeType.JETSTREAM, FieldRegistry())
    assert np.array_equal(patch.E, [0.0, 3.0])


def test_network_clear_and_remove():
    registry = FieldRegistry()
    a, b = Dock(position=(0, 0)), Dock(position=(5, 0))
    docks = DockNetwork([a, b])
    a.spawn_anchor_for(ProbeType.STABILIZER, registry)
    b.spawn_anchor_for(ProbeType.VORTEX, registry)
    assert docks.occupied_count() == 2 and len(registry) == 2

    docks.remove(a, registry)
    assert len(docks) == 1 and len(registry) == 1

    docks.clear_all_docks(registry)
    assert docks.occupied_count() == 0
    assert len(registry) == 0


def test_dock_ids_survive_removal():
    registry = FieldRegistry()
    docks = DockNetwork()
    first = Dock(position=(0.0, 0.0))
    assert docks.add(first) == 0
    assert docks.add(Dock(position=(5.0, 0.0))) == 1
    target_id = docks.add(Dock(position=(1.0, 0.0)))
    docks.remove(first, registry)

    probe = Probe.launch((0.6, 0.0), (1.0, 0.0), ProbeType.VORTEX)
    assert probe.step(DT, registry, docks) is ProbeStatus.DOCKED

    assert probe.dock_id == target_id == 2
    assert docks.get(probe.dock_id).anchor is probe.deployed
    assert docks.get(0) is None
    # ids are never reused
    assert docks.add(Dock(position=(9.0, 0.0))) == 3


def test_probe_type_cycles():
    seen = [ProbeType.STABILIZER]
    for _ in range(4):
        seen.append(seen[-1].next())
    assert seen == [
        ProbeType.STABILIZER, ProbeType.REPULSOR, ProbeType.JETSTREAM,
        ProbeType.VORTEX, ProbeType.STABILIZER,
    ]
