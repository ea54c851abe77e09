"""
Orbit integrator: trajectory of a test body around an attractor whose potential
is the Kepler potential plus an axisymmetric quadrupole correction.

calculate_orbit never raises. Anything that prevents a usable integration
(bad time span, body at the origin, zero initial speed, numeric faults,
fewer than two integrated points) degrades to a tiny planar circle with
energy 0 so the caller always gets something renderable.
"""
import logging
import math
from typing import Tuple

import numpy as np

from multipole_orbits.config.settings import (
    GM,
    TIME_STEP,
    DEFAULT_ATTRACTOR_RADIUS,
    FALLBACK_SAMPLES,
    FALLBACK_RADIUS,
    FALLBACK_ENERGY,
)
from multipole_orbits.physics.state import State, as_vector3
from multipole_orbits.physics.forces import quadrupole_gravity
from multipole_orbits.physics.solver import RK2Solver
from multipole_orbits.physics.sampler import sample_planar_orbit
from multipole_orbits.physics.utils import specific_energy

log = logging.getLogger(__name__)


def fallback_orbit() -> Tuple[np.ndarray, float]:
    return sample_planar_orbit(FALLBACK_SAMPLES, FALLBACK_RADIUS), FALLBACK_ENERGY


def step_count(final_time: float, dt: float = TIME_STEP) -> int:
    """Number of fixed steps covering |final_time| (round half up)."""
    return int(math.floor(abs(float(final_time)) / dt + 0.5))


def calculate_orbit(
    final_time: float,
    initial_position,
    initial_velocity,
    attractor_radius: float = DEFAULT_ATTRACTOR_RADIUS,
) -> Tuple[np.ndarray, float]:
    """
    Integrate the orbit for |final_time| and return (trajectory, energy).

    trajectory : (n, 3) array, row 0 is the initial position.
    energy     : specific energy of the initial state (negative => bound).
    """
    dt = TIME_STEP
    try:
        if not math.isfinite(float(final_time)) or not math.isfinite(float(attractor_radius)):
            log.warning("Non-finite time or attractor size, using default orbit")
            return fallback_orbit()

        steps = step_count(final_time, dt)
        if steps <= 0 or dt <= 0:
            log.warning("Invalid time parameters, using default orbit")
            return fallback_orbit()

        state = State(as_vector3(initial_position), as_vector3(initial_velocity))
        if not (np.all(np.isfinite(state.r)) and np.all(np.isfinite(state.v))):
            log.warning("Non-finite initial conditions, using default orbit")
            return fallback_orbit()

        r0 = state.radius
        v0 = state.speed
        # TODO: a body released from rest (v0 == 0) is a valid radial infall; decide whether to accept it.
        if r0 <= 0 or v0 <= 0:
            log.warning("Invalid initial conditions, using default orbit")
            return fallback_orbit()

        radius = float(attractor_radius)
        with np.errstate(divide="raise", over="raise", invalid="raise"):
            energy = specific_energy(state, radius, GM)
            solver = RK2Solver(quadrupole_gravity(radius, GM))
            result = solver.propagate(state, steps + 1, dt, radius)

        if result.num < 2:
            log.warning("Orbit calculation failed to produce points, using default orbit")
            return fallback_orbit()

        trajectory = result.positions[: result.num + 1].copy()
        if not np.all(np.isfinite(trajectory)) or not math.isfinite(energy):
            log.warning("Orbit calculation produced non-finite values, using default orbit")
            return fallback_orbit()

        if result.error:
            log.info("Body reached the attractor surface at t=%.2f (step %d)",
                     result.times[result.num], result.num)

        return trajectory, float(energy)

    except Exception:
        log.exception("Error in orbit calculation")
        return fallback_orbit()
