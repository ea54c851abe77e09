# multipole_orbits/physics/utils.py
import numpy as np
from multipole_orbits.config.settings import GM


def potential(position, attractor_radius: float, gm: float = GM) -> float:
    """
    Quadrupole-corrected gravitational potential per unit mass.
    Reduces to -GM/r as attractor_radius -> 0.
    """
    position = np.asarray(position, dtype=float)
    r = np.linalg.norm(position)
    z = position[2]
    k = gm * attractor_radius**2
    phi_newton = -gm / r
    phi_quad = (0.75 * k * z**2) / r**5 - (0.25 * k) / r**3
    return float(phi_newton + phi_quad)


def specific_energy(state, attractor_radius: float, gm: float = GM) -> float:
    """
    Compute specific mechanical energy (kinetic + potential, including the quadrupole term).
    Conserved by the force law, so it is evaluated once from the initial state.
    """
    kinetic = 0.5 * float(np.dot(state.v, state.v))
    return kinetic + potential(state.r, attractor_radius, gm)


def classify_orbit(energy: float) -> str:
    return "bound" if energy < 0.0 else "unbound"
