# multipole_orbits/physics/state.py
import numpy as np


def as_vector3(v):
    """Coerce a 3-element sequence into a float numpy array of shape (3,)."""
    arr = np.array(v, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"Cannot coerce {v!r} to 3D vector")
    return arr


class State:
    """
    State vector for orbital motion in 3D.
    [x, y, z, vx, vy, vz]
    """
    def __init__(self, position, velocity):
        if len(position) != 3 or len(velocity) != 3:
            raise ValueError("Position and velocity must be 3D vectors.")
        self.r = np.array(position, dtype=float)
        self.v = np.array(velocity, dtype=float)

    @property
    def radius(self) -> float:
        return float(np.linalg.norm(self.r))

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.v))

    def copy(self):
        return State(self.r.copy(), self.v.copy())

    def __repr__(self):
        return f"State(r={self.r.tolist()}, v={self.v.tolist()})"
