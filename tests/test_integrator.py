# MIT License (see LICENSE)
import numpy as np
import pytest

from graviton.core.integrators import semi_implicit_euler, step_body
from graviton.core.diagnostics import kinetic_energy
from graviton.types import MovingBody


def test_inertial_motion_is_exact():
    """Zero acceleration, zero drag, under the clamp: x advances by v*dt exactly."""
    x = np.array([1.0, -2.0])
    v = np.array([0.3, 0.7])
    dt = 0.02
    for _ in range(100):
        x_new, v_new = semi_implicit_euler(x, v, np.zeros(2), dt, max_speed=12.0, linear_drag=0.0)
        assert np.array_equal(v_new, v)
        assert np.array_equal(x_new, x + v * dt)
        x, v = x_new, v_new


def test_velocity_updates_before_position():
    x, v = semi_implicit_euler(np.zeros(2), np.zeros(2), np.array([1.0, 0.0]), 0.1, 12.0, 0.0)
    assert v[0] == pytest.approx(0.1)
    # Explicit Euler would leave x at 0 on the first step
    assert x[0] == pytest.approx(0.01)


def test_clamp_runs_before_drag():
    """
    v0 = 20, clamp 10, drag 1, dt 0.1:
      clamp then drag -> 10 / 1.1
      drag then clamp -> 10
    """
    _, v = semi_implicit_euler(np.zeros(2), np.array([20.0, 0.0]), np.zeros(2), 0.1, 10.0, 1.0)
    assert v[0] == pytest.approx(10.0 / 1.1)


def test_drag_factor():
    _, v = semi_implicit_euler(np.zeros(2), np.array([2.0, 0.0]), np.zeros(2), 0.1, 12.0, 0.5)
    assert v[0] == pytest.approx(2.0 / 1.05)


def test_speed_clamp_holds():
    rng = np.random.default_rng(11)
    body = MovingBody(position=(0, 0), velocity=(0, 0), max_speed=5.0, linear_drag=0.0)
    for _ in range(500):
        a = rng.uniform(-200, 200, size=2)
        step_body(body, a, 0.02)
        assert body.speed <= 5.0 + 1e-9


def test_clamp_keeps_direction():
    _, v = semi_implicit_euler(np.zeros(2), np.array([30.0, 40.0]), np.zeros(2), 0.02, 10.0, 0.0)
    assert np.linalg.norm(v) == pytest.approx(10.0)
    assert np.allclose(v / 10.0, [0.6, 0.8])


def test_inputs_are_not_modified():
    x = np.array([1.0, 1.0])
    v = np.array([2.0, 0.0])
    semi_implicit_euler(x, v, np.array([1.0, 1.0]), 0.1, 12.0, 0.1)
    assert np.array_equal(x, [1.0, 1.0])
    assert np.array_equal(v, [2.0, 0.0])


def test_step_body_matches_function():
    body = MovingBody(position=(0.5, 0.5), velocity=(1.0, -1.0), max_speed=3.0, linear_drag=0.05)
    a = np.array([0.4, 2.0])
    x_exp, v_exp = semi_implicit_euler(body.position, body.velocity, a, 0.02, 3.0, 0.05)
    step_body(body, a, 0.02)
    assert np.array_equal(body.position, x_exp)
    assert np.array_equal(body.velocity, v_exp)


def test_drag_bleeds_kinetic_energy():
    bodies = [
        MovingBody(position=(0, 0), velocity=(3.0, 0.0), linear_drag=0.5),
        MovingBody(position=(1, 0), velocity=(0.0, -2.0), linear_drag=0.5),
    ]
    ke0 = kinetic_energy(bodies)
    assert ke0 == pytest.approx(0.5 * 9.0 + 0.5 * 4.0)
    for _ in range(50):
        for b in bodies:
            step_body(b, np.zeros(2), 0.02)
    assert kinetic_energy(bodies) < ke0
