from typing import Any, Dict

from multipole_orbits.config.settings import TIME_STEP, get_preset
from multipole_orbits.physics.utils import classify_orbit
from multipole_orbits.simulation.orbit import calculate_orbit, step_count


def describe_energy(energy: float) -> str:
    return f"{energy:.4f} ({classify_orbit(energy).capitalize()})"


def run_simulation(params: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Run one orbit integration from a parameter dict:
      {"final_time", "initial_position", "initial_velocity", "attractor_radius"}
    Missing keys are taken from the default preset.

    Returns:
      {
        "params": dict (resolved inputs),
        "trajectory": (n, 3) ndarray,
        "energy": float,
        "classification": "bound" | "unbound",
        "points": int,
        "expected_points": int (collision-free length),
        "complete": bool (full duration integrated),
        "fallback": bool (placeholder orbit returned),
      }
    """
    resolved = get_preset()
    resolved.update(params or {})

    trajectory, energy = calculate_orbit(
        resolved["final_time"],
        resolved["initial_position"],
        resolved["initial_velocity"],
        resolved["attractor_radius"],
    )

    points = len(trajectory)
    expected = step_count(resolved["final_time"], TIME_STEP) + 1
    fallback = points < 2

    return {
        "params": resolved,
        "trajectory": trajectory,
        "energy": float(energy),
        "classification": classify_orbit(energy),
        "points": points,
        "expected_points": expected,
        "complete": (not fallback) and points == expected,
        "fallback": fallback,
    }
