"""
Project settings (constants + small helpers).
Units: astronomical units (AU), years (yr), solar masses. GM of the attractor is 4*pi^2.
"""
from __future__ import annotations

import math
import os
from typing import Optional

# Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
OUTPUT_DIR = os.path.join(BASE_DIR, "outputs")

# Run
RUN_ID_PREFIX = "orbit"
VALIDATE_ON_IMPORT = False

# Attractor
GM = 4.0 * math.pi ** 2
DEFAULT_ATTRACTOR_RADIUS = 0.1
POINT_ATTRACTOR_RADIUS = 1e-5  # "no multipole" setting

# Integration (fixed, not user-tunable)
TIME_STEP = 0.1

# Fallback orbit returned whenever integration is impossible
PLANAR_SAMPLES = 512
FALLBACK_SAMPLES = 1
FALLBACK_RADIUS = 0.1
FALLBACK_ENERGY = 0.0

# Interactive ranges
FINAL_TIME_MIN = 100.0
FINAL_TIME_MAX = 1000.0
ATTRACTOR_RADIUS_MIN = POINT_ATTRACTOR_RADIUS
ATTRACTOR_RADIUS_MAX = 5.0
COMPONENT_MIN = -10.0
COMPONENT_MAX = 10.0

# Plotting
ATTRACTOR_SHAPE_THRESHOLD = 0.001  # below: sphere, above: thin ring
MIN_PLOT_EXTENT = 5.0
PLOT_PADDING = 1.25
UNBOUND_PLOT_EXTENT = 20.0
SURFACE_RESOLUTION = 32

# Presets
DEFAULT_PRESET = "default"
PRESETS = {
    "default": {
        "attractor_radius": 1.0,
        "final_time": 100.0,
        "initial_position": (5.0, 0.0, 0.0),
        "initial_velocity": (0.0, 3.0, 0.0),
    },
    "monopole": {
        "attractor_radius": POINT_ATTRACTOR_RADIUS,
        "final_time": 300.0,
        "initial_position": (4.0, 0.0, 0.0),
        "initial_velocity": (0.0, 2.0, 3.0),
    },
    "quadrupole": {
        "attractor_radius": 1.0,
        "final_time": 500.0,
        "initial_position": (3.0, 1.0, 0.0),
        "initial_velocity": (0.0, 4.0, 2.0),
    },
}


def get_preset(name: Optional[str] = None) -> dict:
    key = DEFAULT_PRESET if name is None else str(name).strip().lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown preset: {name!r} (choose from {', '.join(PRESETS)})")
    p = PRESETS[key]
    return {
        "attractor_radius": float(p["attractor_radius"]),
        "final_time": float(p["final_time"]),
        "initial_position": tuple(float(c) for c in p["initial_position"]),
        "initial_velocity": tuple(float(c) for c in p["initial_velocity"]),
    }


def _clamp(val: float, lo: float, hi: float) -> float:
    return max(float(lo), min(float(hi), float(val)))


def clamp_final_time(val: Optional[float]) -> float:
    out = float(PRESETS[DEFAULT_PRESET]["final_time"] if val is None else val)
    return _clamp(out, FINAL_TIME_MIN, FINAL_TIME_MAX)


def clamp_attractor_radius(val: Optional[float]) -> float:
    out = float(PRESETS[DEFAULT_PRESET]["attractor_radius"] if val is None else val)
    return _clamp(out, ATTRACTOR_RADIUS_MIN, ATTRACTOR_RADIUS_MAX)


def clamp_component(val: float) -> float:
    return _clamp(val, COMPONENT_MIN, COMPONENT_MAX)


def validate_settings() -> None:
    if GM <= 0:
        raise ValueError("GM must be > 0")
    if TIME_STEP <= 0:
        raise ValueError("TIME_STEP must be > 0")
    if DEFAULT_ATTRACTOR_RADIUS < 0:
        raise ValueError("DEFAULT_ATTRACTOR_RADIUS must be >= 0")
    if FALLBACK_SAMPLES <= 0:
        raise ValueError("FALLBACK_SAMPLES must be > 0")
    if FALLBACK_RADIUS <= 0:
        raise ValueError("FALLBACK_RADIUS must be > 0")
    if PLANAR_SAMPLES <= 0:
        raise ValueError("PLANAR_SAMPLES must be > 0")
    if FINAL_TIME_MAX < FINAL_TIME_MIN:
        raise ValueError("FINAL_TIME_MAX must be >= FINAL_TIME_MIN")
    if ATTRACTOR_RADIUS_MIN <= 0:
        raise ValueError("ATTRACTOR_RADIUS_MIN must be > 0")
    if ATTRACTOR_RADIUS_MAX < ATTRACTOR_RADIUS_MIN:
        raise ValueError("ATTRACTOR_RADIUS_MAX must be >= ATTRACTOR_RADIUS_MIN")
    if COMPONENT_MAX < COMPONENT_MIN:
        raise ValueError("COMPONENT_MAX must be >= COMPONENT_MIN")
    if DEFAULT_PRESET not in PRESETS:
        raise ValueError("DEFAULT_PRESET must name an entry of PRESETS")


if VALIDATE_ON_IMPORT:
    validate_settings()
