# multipole_orbits/physics/forces.py
import numpy as np
from multipole_orbits.config.settings import GM


class ForceModel:
    """
    Base force model. Acceleration signature accepts optional time t.
    """
    def acceleration(self, state, t: float = 0.0) -> np.ndarray:
        raise NotImplementedError


class NewtonianGravity(ForceModel):
    def __init__(self, gm: float = GM):
        self.gm = float(gm)

    def acceleration(self, state, t: float = 0.0) -> np.ndarray:
        r = state.r
        norm = np.linalg.norm(r)
        return -(self.gm / norm**3) * r


class QuadrupolePerturbation(ForceModel):
    """
    Axisymmetric quadrupole correction of an extended attractor of lengthscale `radius`.
    The symmetry axis is z; only the z component picks up the extra 1.5 term.
    """
    def __init__(self, radius: float, gm: float = GM):
        self.radius = float(radius)
        self.gm = float(gm)

    def acceleration(self, state, t: float = 0.0) -> np.ndarray:
        r = state.r
        norm = np.linalg.norm(r)
        x, y, z = r
        k = self.gm * self.radius**2
        o = -3.75 * (k / norm**7) * z**2
        p = 0.75 * (k / norm**5)
        q = 1.5 * (k / norm**5)
        return np.array([
            -x * (o + p),
            -y * (o + p),
            -z * (o + p + q),
        ], dtype=float)


class CompositeForce(ForceModel):
    def __init__(self, *models):
        self.models = list(models)

    def acceleration(self, state, t: float = 0.0) -> np.ndarray:
        total_a = np.zeros(3, dtype=float)
        for model in self.models:
            total_a += model.acceleration(state, t)
        return total_a


def quadrupole_gravity(radius: float, gm: float = GM) -> CompositeForce:
    """Point-mass gravity plus the quadrupole correction for an attractor of size `radius`."""
    return CompositeForce(NewtonianGravity(gm), QuadrupolePerturbation(radius, gm))
