# multipole_orbits/cli.py
import logging

import numpy as np
from multipole_orbits.physics.state import as_vector3
from multipole_orbits.config.settings import (
    DEFAULT_PRESET,
    POINT_ATTRACTOR_RADIUS,
    clamp_final_time,
    clamp_attractor_radius,
    clamp_component,
    get_preset,
)

log = logging.getLogger(__name__)


def is_valid_position(position, attractor_radius):
    """Initial position must lie on or outside the attractor."""
    return float(np.linalg.norm(as_vector3(position))) >= attractor_radius


def project_outside_attractor(position, attractor_radius):
    """
    Return `position` unchanged if it lies outside the attractor, otherwise
    scaled radially onto the attractor surface.
    """
    pos = as_vector3(position)
    r = float(np.linalg.norm(pos))
    if r >= attractor_radius:
        return pos
    if r == 0.0:
        return np.array([attractor_radius, 0.0, 0.0], dtype=float)
    return pos * (attractor_radius / r)


def get_float(prompt, default=None):
    """
    Safe float input with optional default. Non-interactive (EOF) returns default.
    """
    while True:
        try:
            user = input(prompt)
        except EOFError:
            return float(default) if default is not None else None
        if user.strip() == "" and default is not None:
            return float(default)
        try:
            return float(user)
        except (ValueError, TypeError):
            print("❌ Please enter a valid number.")


def get_vector(label, default):
    """
    Ask for the three components of a vector; each is clamped to the allowed range.
    """
    names = ("x", "y", "z")
    out = []
    for name, d in zip(names, default):
        val = get_float(f"  {label} {name} [default {d}]: ", default=d)
        out.append(clamp_component(val))
    return np.array(out, dtype=float)


def choose_preset():
    """
    Choose a starting preset.
      1 -> default
      2 -> monopole orbit (bound)
      3 -> quadrupole orbit (bound)
    """
    print("\n🪐 Presets")
    print("  1) Default")
    print("  2) Monopole orbit (bound)")
    print("  3) Quadrupole orbit (bound)")

    try:
        choice = input("Select preset [1]: ").strip()
    except EOFError:
        choice = ""

    if choice == "2":
        return "monopole"
    if choice == "3":
        return "quadrupole"
    return DEFAULT_PRESET


def ask_attractor_radius(default):
    try:
        point = input("Use point attractor (no multipole)? (y/N): ").strip().lower()
    except EOFError:
        point = "n"
    if point == "y":
        return POINT_ATTRACTOR_RADIUS
    val = get_float(f"Attractor size [default {default}]: ", default=default)
    return clamp_attractor_radius(val)


def ask_initial_position(default, attractor_radius):
    """
    Ask for the initial position. A position inside the attractor is rejected
    and replaced by its projection onto the attractor surface.
    """
    pos = get_vector("position", default)
    if is_valid_position(pos, attractor_radius):
        return pos
    log.warning("Position would be inside attractor. Minimum distance from origin must be %s.",
                attractor_radius)
    print(f"❌ Distance from origin must be >= {attractor_radius}; moved onto the attractor surface.")
    return project_outside_attractor(pos, attractor_radius)


def run_cli():
    print("======================================")
    print("  MULTIPOLE ORBIT SIMULATOR (CLI)     ")
    print("======================================")

    preset_name = choose_preset()
    preset = get_preset(preset_name)
    print(f"✔ Preset: {preset_name}")

    final_time = clamp_final_time(
        get_float(f"\nFinal time (yr) [default {preset['final_time']}]: ", default=preset["final_time"])
    )

    attractor_radius = ask_attractor_radius(preset["attractor_radius"])

    # a bigger attractor may swallow the preset position: push it to the surface
    default_pos = project_outside_attractor(preset["initial_position"], attractor_radius)

    print("\n📍 Initial position (AU)")
    position = ask_initial_position(tuple(float(c) for c in default_pos), attractor_radius)

    print("\n🚀 Initial velocity (AU/yr)")
    velocity = get_vector("velocity", preset["initial_velocity"])

    params = {
        "preset": preset_name,
        "final_time": float(final_time),
        "attractor_radius": float(attractor_radius),
        "initial_position": position,
        "initial_velocity": velocity,
    }

    print("\n✅ CLI input complete.")
    print(f"→ Final time: {final_time:g}")
    print(f"→ Attractor size: {attractor_radius:g}")
    print(f"→ Position: [{position[0]:.2f}, {position[1]:.2f}, {position[2]:.2f}] "
          f"(distance {np.linalg.norm(position):.2f})")
    print(f"→ Velocity: [{velocity[0]:.2f}, {velocity[1]:.2f}, {velocity[2]:.2f}]")

    return params

