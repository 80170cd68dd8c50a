# MIT License (see LICENSE)
import numpy as np

from graviton.core.registry import FieldRegistry
from graviton.fields import GravityWell, UniformPatch, Vortex
from graviton.predictor import PredictorConfig, TrajectoryPredictor
from graviton.probe import Probe, ProbeConfig
from graviton.types import ProbeType


def _registry():
    registry = FieldRegistry()
    registry.register(GravityWell(position=(3.0, 2.0), S=12.0))
    registry.register(Vortex(position=(-1.0, 1.0), omega=2.0, R=2.0))
    registry.register(UniformPatch(position=(0.0, 0.0), E=(0.5, 0.0), R=4.0))
    return registry


def test_below_speed_floor_draws_nothing():
    predictor = TrajectoryPredictor(_registry())
    predictor.show()
    path = predictor.draw((0, 0), (0.01, 0.0))
    assert path.shape == (0, 2)
    assert not predictor.visible


def test_preview_matches_live_probe_exactly():
    registry = _registry()
    probe_cfg = ProbeConfig()
    predictor = TrajectoryPredictor(registry, PredictorConfig.for_probe(probe_cfg, max_points=60))

    origin, v0 = (0.0, 0.0), (2.5, 1.0)
    path = predictor.draw(origin, v0)
    assert path.shape == (60, 2)

    probe = Probe.launch(origin, v0, ProbeType.STABILIZER, probe_cfg)
    live = [probe.position.copy()]
    for _ in range(59):
        probe.step(0.02, registry)
        live.append(probe.position.copy())

    assert probe.alive
    assert np.array_equal(path, np.array(live))


def test_preview_does_not_touch_registry():
    registry = _registry()
    before = registry.snapshot()
    positions = [s.position.copy() for s in before]

    TrajectoryPredictor(registry).draw((0, 0), (3.0, 3.0))

    assert registry.snapshot() == before
    for s, p in zip(registry.snapshot(), positions):
        assert np.array_equal(s.position, p)


def test_max_points_and_fade():
    registry = _registry()
    short = TrajectoryPredictor(registry, PredictorConfig(max_points=50))
    assert len(short.draw((0, 0), (1.0, 0.0))) == 50

    # 120 points at 0.02 s would be 2.4 s; fade_after stops it near 2.0 s
    long = TrajectoryPredictor(registry, PredictorConfig(max_points=1000, fade_after=2.0))
    n = len(long.draw((0, 0), (1.0, 0.0)))
    print("fade path length", n)
    assert 100 <= n <= 101


def test_inertial_mode_ignores_fields():
    predictor = TrajectoryPredictor(_registry(), PredictorConfig(use_physics=False, max_points=10))
    path = predictor.draw((1.0, 1.0), (2.0, -1.0))
    expected = np.array([1.0, 1.0]) + np.outer(np.arange(10), [2.0, -1.0]) * 0.02
    assert np.allclose(path, expected)


def test_clear():
    predictor = TrajectoryPredictor(_registry())
    predictor.draw((0, 0), (1.0, 1.0))
    assert predictor.visible and len(predictor.points) > 0
    predictor.clear()
    assert not predictor.visible
    assert predictor.points.shape == (0, 2)
