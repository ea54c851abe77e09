import numpy as np
import pytest

from multipole_orbits.physics.state import State
from multipole_orbits.physics.forces import quadrupole_gravity
from multipole_orbits.physics.solver import RK2Solver
from multipole_orbits.physics.utils import specific_energy


def _infall():
    # radial plunge from r=5 toward an attractor of size 1
    solver = RK2Solver(quadrupole_gravity(1.0))
    state = State([5.0, 0.0, 0.0], [-1.0, 0.0, 0.0])
    return state, solver.propagate(state, 201, 0.1, 1.0)


def test_too_few_points_is_an_error():
    solver = RK2Solver(quadrupole_gravity(1.0))
    state = State([5.0, 0.0, 0.0], [0.0, 3.0, 0.0])
    for n in (0, 1):
        res = solver.propagate(state, n, 0.1, 1.0)
        assert res.num == 0
        assert res.error == 1


def test_full_run_without_collision():
    solver = RK2Solver(quadrupole_gravity(1.0))
    state = State([5.0, 0.0, 0.0], [0.0, 3.0, 0.0])
    res = solver.propagate(state, 101, 0.1, 1.0)
    assert res.error == 0
    assert res.num == 100
    assert res.positions.shape == (101, 3)
    assert res.times[-1] == pytest.approx(10.0)
    assert np.all(np.linalg.norm(res.positions, axis=1) > 1.0)


def test_step_matches_midpoint_scheme():
    force = quadrupole_gravity(0.5)
    solver = RK2Solver(force)
    s = State([3.0, 1.0, 0.5], [0.2, 3.0, 1.0])
    dt = 0.1
    nxt = solver.step(s, dt)

    r_half = s.r + 0.5 * dt * s.v
    v_half = s.v + 0.5 * dt * force.acceleration(s)
    assert nxt.r == pytest.approx(s.r + dt * v_half)
    assert nxt.v == pytest.approx(s.v + dt * force.acceleration(State(r_half, v_half)))


def test_propagate_does_not_touch_input_state():
    state, res = _infall()
    assert state.r.tolist() == [5.0, 0.0, 0.0]
    assert state.v.tolist() == [-1.0, 0.0, 0.0]
    assert not np.shares_memory(res.positions, state.r)


def test_collision_freezes_tail():
    _, res = _infall()
    assert res.error == 1
    i = res.num
    assert 2 <= i < 200
    assert np.linalg.norm(res.positions[i]) < 1.0
    assert np.all(np.linalg.norm(res.positions[:i], axis=1) >= 1.0)
    assert np.all(res.positions[i:] == res.positions[i])
    assert np.all(res.velocities[i:] == 0.0)
    assert np.diff(res.times) == pytest.approx(np.full(200, 0.1))


def test_equatorial_orbit_stays_planar():
    for radius in (0.0, 0.5, 2.0):
        solver = RK2Solver(quadrupole_gravity(radius))
        res = solver.propagate(State([5.0, 0.0, 0.0], [0.0, 3.0, 0.0]), 301, 0.1, radius)
        assert res.error == 0
        assert np.all(res.positions[:, 2] == 0.0)
        assert np.all(res.velocities[:, 2] == 0.0)


def test_point_mass_energy_roughly_conserved():
    solver = RK2Solver(quadrupole_gravity(0.0))
    state = State([4.0, 0.0, 0.0], [0.0, 2.0, 3.0])
    res = solver.propagate(state, 201, 0.1, 0.0)
    e0 = specific_energy(state, 0.0)
    drift = [abs(specific_energy(State(r, v), 0.0) - e0) / abs(e0)
             for r, v in zip(res.positions, res.velocities)]
    assert max(drift) < 0.05
    radii = np.linalg.norm(res.positions, axis=1)
    # Kepler ellipse: periapsis ~3.98, apoapsis ~7.74
    assert radii.min() > 3.5
    assert radii.max() < 8.5
