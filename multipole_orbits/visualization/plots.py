import os
import numpy as np
import matplotlib.pyplot as plt
from multipole_orbits.config.settings import (
    OUTPUT_DIR,
    TIME_STEP,
    ATTRACTOR_SHAPE_THRESHOLD,
    MIN_PLOT_EXTENT,
    PLOT_PADDING,
    UNBOUND_PLOT_EXTENT,
    SURFACE_RESOLUTION,
)


def plot_extent(trajectory, energy):
    """
    Half-width of the (cubic) view box.
    Bound orbits are framed by their data (origin included); unbound ones get a fixed box.
    """
    if energy >= 0:
        return UNBOUND_PLOT_EXTENT
    pts = np.asarray(trajectory, dtype=float).reshape(-1, 3)
    max_abs = float(np.max(np.abs(pts))) if len(pts) else 0.0
    return max(max_abs, MIN_PLOT_EXTENT) * PLOT_PADDING


def sphere_surface(radius=1.0, resolution=SURFACE_RESOLUTION):
    theta = np.linspace(0.0, np.pi, resolution + 1)
    phi = np.linspace(0.0, 2.0 * np.pi, resolution + 1)
    th, ph = np.meshgrid(theta, phi, indexing="ij")
    x = radius * np.sin(th) * np.cos(ph)
    y = radius * np.sin(th) * np.sin(ph)
    z = radius * np.cos(th)
    return x, y, z


def ring_surface(radius=1.0, tube_radius=0.001, resolution=SURFACE_RESOLUTION):
    theta = np.linspace(0.0, 2.0 * np.pi, resolution + 1)
    phi = np.linspace(0.0, 2.0 * np.pi, resolution + 1)
    th, ph = np.meshgrid(theta, phi, indexing="ij")
    x = (radius + tube_radius * np.cos(ph)) * np.cos(th)
    y = (radius + tube_radius * np.cos(ph)) * np.sin(th)
    z = tube_radius * np.sin(ph)
    return x, y, z


def attractor_surface(attractor_radius, threshold=ATTRACTOR_SHAPE_THRESHOLD):
    """
    Mesh used to draw the attractor: a small sphere for point-like attractors,
    a thin ring otherwise. Returns (x, y, z, shape_name).
    """
    if attractor_radius < threshold:
        x, y, z = sphere_surface(max(0.5, attractor_radius))
        return x, y, z, "Sphere"
    x, y, z = ring_surface(attractor_radius, attractor_radius * 0.2)
    return x, y, z, "Ring"


def plot_orbit_3d(trajectory, attractor_radius, energy, output_dir=OUTPUT_DIR,
                  filename="orbit_3d.png"):
    """
    Plot the 3D trajectory, its starting point and the attractor.
    """
    os.makedirs(output_dir, exist_ok=True)
    pts = np.asarray(trajectory, dtype=float).reshape(-1, 3)

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(projection="3d")

    ax.scatter([0.0], [0.0], [0.0], color="black", s=10, label="Origin")
    ax.plot(pts[:, 0], pts[:, 1], pts[:, 2], color="blue", linewidth=1.5, label="Trajectory")
    ax.scatter([pts[0, 0]], [pts[0, 1]], [pts[0, 2]], color="red", s=25, label="Start")

    sx, sy, sz, shape = attractor_surface(attractor_radius)
    ax.plot_surface(sx, sy, sz, color="orange", alpha=0.6, linewidth=0)

    extent = plot_extent(pts, energy)
    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_zlim(-extent, extent)
    ax.set_xlabel("x (AU)")
    ax.set_ylabel("y (AU)")
    ax.set_zlabel("z (AU)")

    label = "Bound" if energy < 0 else "Unbound"
    ax.set_title(f"Orbit, E = {energy:.4f} ({label}), attractor {shape} size {attractor_radius:g}")
    ax.legend(loc="upper right")

    save_path = os.path.join(output_dir, filename)
    fig.tight_layout()
    fig.savefig(save_path)
    plt.close(fig)

    print(f"[OK] Saved: {save_path}")
    return save_path


def plot_radius_over_time(trajectory, attractor_radius, dt=TIME_STEP, output_dir=OUTPUT_DIR,
                          filename="radius_over_time.png"):
    """
    Plot distance from the attractor centre vs time.
    """
    os.makedirs(output_dir, exist_ok=True)
    pts = np.asarray(trajectory, dtype=float).reshape(-1, 3)
    times = np.arange(len(pts)) * dt
    radii = np.linalg.norm(pts, axis=1)

    plt.figure(figsize=(10, 6))
    plt.plot(times, radii, label="r(t)")
    plt.axhline(attractor_radius, color="red", linestyle="--", alpha=0.5, label="Attractor size")

    plt.xlabel("Time (yr)")
    plt.ylabel("Distance from origin (AU)")
    plt.title("Orbital Radius Over Time")
    plt.legend()

    save_path = os.path.join(output_dir, filename)
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()

    print(f"[OK] Saved: {save_path}")
    return save_path
