# multipole_orbits/physics/sampler.py
import numpy as np
from multipole_orbits.config.settings import PLANAR_SAMPLES


def sample_planar_orbit(samples: int = PLANAR_SAMPLES, radius: float = 1.0) -> np.ndarray:
    """
    Circle of `radius` in the z=0 plane, `samples` points evenly spaced over [0, 2*pi).
    Geometric placeholder only; it is not the result of any integration.
    """
    theta = np.arange(int(samples), dtype=float) / samples * 2.0 * np.pi
    out = np.zeros((len(theta), 3), dtype=float)
    out[:, 0] = radius * np.cos(theta)
    out[:, 1] = radius * np.sin(theta)
    return out
