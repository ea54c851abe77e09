# multipole_orbits/physics/solver.py
from typing import NamedTuple

import numpy as np
from multipole_orbits.physics.state import State


class Propagation(NamedTuple):
    times: np.ndarray        # (n,)
    positions: np.ndarray    # (n, 3)
    velocities: np.ndarray   # (n, 3)
    num: int                 # last valid index (collision index if error)
    error: int               # 1 = collision or too few points, 0 = full duration


class RK2Solver:
    """
    Fixed-step midpoint (RK2) solver.
    Positions advance with the half-step velocity; velocities advance with the
    acceleration evaluated at the half-step position.
    """
    def __init__(self, force_model):
        self.force = force_model

    def step(self, state, dt):
        """
        Perform a single RK2 step.
        """
        r_half = state.r + 0.5 * dt * state.v
        v_half = state.v + 0.5 * dt * self.force.acceleration(state)

        r_next = state.r + dt * v_half
        v_next = state.v + dt * self.force.acceleration(State(r_half, v_half))

        return State(r_next, v_next)

    def propagate(self, state, n_points: int, dt: float, attractor_radius: float) -> Propagation:
        """
        Integrate `n_points - 1` fixed steps starting from `state`.

        Buffers are allocated here and returned; the caller's state is never
        mutated. When the body starts a step inside `attractor_radius` the
        loop stops and the rest of the buffers is frozen at that position
        with zero velocity, while time keeps advancing by `dt`.
        """
        n = int(n_points)
        if n <= 1:
            empty = np.zeros((0, 3), dtype=float)
            return Propagation(np.zeros(0, dtype=float), empty, empty.copy(), 0, 1)

        times = np.arange(n, dtype=float) * dt
        positions = np.zeros((n, 3), dtype=float)
        velocities = np.zeros((n, 3), dtype=float)
        positions[0] = state.r
        velocities[0] = state.v

        num = 0
        error = 0
        current = state.copy()
        for i in range(n - 1):
            if current.radius < attractor_radius:
                # struck the attractor: freeze the tail
                positions[i:] = positions[i]
                velocities[i:] = 0.0
                num = i
                error = 1
                break

            current = self.step(current, dt)
            positions[i + 1] = current.r
            velocities[i + 1] = current.v
            num = i + 1

        return Propagation(times, positions, velocities, num, error)
