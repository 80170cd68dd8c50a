import itertools

import numpy as np
import pytest

from graviton.core.registry import FieldRegistry
from graviton.fields import GravityWell, GaussStabilizer, UniformPatch, Vortex, field_acceleration


def _sources():
    return [
        GravityWell(position=(1.0, 0.5), S=12.0),
        GravityWell(position=(-2.0, 1.0), S=-6.0, eps=0.1),
        GaussStabilizer(position=(0.0, -1.0), U0=5.0, R=1.5),
        UniformPatch(position=(0.0, 0.0), E=(0.5, 1.0), smooth_edges=True, R=3.0),
        Vortex(position=(0.5, 0.5), omega=2.0, R=2.0),
    ]


def test_empty_registry_returns_zero():
    registry = FieldRegistry()
    a = registry.acceleration_at((1.0, 2.0), (3.0, 4.0), 0.0)
    assert np.array_equal(a, [0.0, 0.0])
    assert len(registry) == 0


def test_register_is_idempotent():
    well = GravityWell(position=(0, 0), S=12.0)
    registry = FieldRegistry()
    registry.register(well)
    registry.register(well)
    assert len(registry) == 1
    a = registry.acceleration_at((3.0, 0.0))
    assert np.allclose(a, field_acceleration(well, np.array([3.0, 0.0])))


def test_unregister_is_idempotent():
    well = GravityWell(position=(0, 0))
    registry = FieldRegistry()
    registry.unregister(well)  # never registered
    registry.register(well)
    registry.unregister(well)
    registry.unregister(well)
    assert len(registry) == 0
    assert well not in registry


def test_membership_is_by_identity():
    a = GravityWell(position=(0, 0), S=12.0)
    b = GravityWell(position=(0, 0), S=12.0)
    registry = FieldRegistry()
    registry.register(a)
    registry.register(b)
    assert len(registry) == 2

    single = field_acceleration(a, np.array([2.0, 0.0]))
    assert np.allclose(registry.acceleration_at((2.0, 0.0)), 2 * single)

    registry.unregister(a)
    assert b in registry and a not in registry


def test_disabled_sources_are_skipped_but_stay_registered():
    well = GravityWell(position=(0, 0), S=12.0)
    registry = FieldRegistry()
    registry.register(well)
    well.enabled = False
    assert well in registry
    assert np.array_equal(registry.acceleration_at((2.0, 0.0)), [0.0, 0.0])
    assert registry.attractors() == []

    well.enabled = True
    assert np.linalg.norm(registry.acceleration_at((2.0, 0.0))) > 0


def test_summation_order_does_not_matter():
    """Every registration order gives the same sum (within float tolerance)."""
    sources = _sources()
    x, v = (0.3, -0.2), (1.5, -2.0)

    reference = None
    for perm in itertools.permutations(sources):
        registry = FieldRegistry()
        for s in perm:
            registry.register(s)
        a = registry.acceleration_at(x, v, 0.0)
        if reference is None:
            reference = a
        assert np.allclose(a, reference, rtol=1e-12, atol=1e-12)

    manual = sum(field_acceleration(s, np.array(x), np.array(v)) for s in sources)
    assert np.allclose(reference, manual)


def test_same_contents_give_identical_results():
    sources = _sources()
    r1, r2 = FieldRegistry(), FieldRegistry()
    for s in sources:
        r1.register(s)
        r2.register(s)
    x, v = (0.7, 0.1), (0.0, 3.0)
    assert np.array_equal(r1.acceleration_at(x, v, 0.0), r2.acceleration_at(x, v, 0.0))


def test_time_is_accepted_but_unused():
    registry = FieldRegistry()
    for s in _sources():
        registry.register(s)
    a0 = registry.acceleration_at((0.2, 0.2), (1.0, 0.0), 0.0)
    a1 = registry.acceleration_at((0.2, 0.2), (1.0, 0.0), 123.4)
    assert np.array_equal(a0, a1)


def test_velocity_reaches_vortices_only():
    vortex = Vortex(position=(0, 0), omega=1.0)
    registry = FieldRegistry()
    registry.register(vortex)
    assert np.array_equal(registry.acceleration_at((0, 0)), [0.0, 0.0])
    assert np.allclose(registry.acceleration_at((0, 0), (2.0, 0.0)), [0.0, 2.0])


def test_attractors_and_kind_queries():
    sources = _sources()
    registry = FieldRegistry()
    for s in sources:
        registry.register(s)
    assert registry.attractors() == [sources[0]]
    assert registry.sources(GravityWell) == sources[:2]
    assert len(registry.sources()) == len(sources)

    registry.clear()
    assert len(registry) == 0


def test_register_unknown_type():
    registry = FieldRegistry()
    with pytest.raises(TypeError):
        registry.register(object())
