"""
Physics kernels for the ASCII N-body simulator.

All performance-critical functions are JIT-compiled with Numba.
These functions must be Numba-compatible (NumPy arrays, no Python objects).

FORCE LAW:
The pairwise force magnitude is F = G × m_i × m_j / d, i.e. linear in
1/d rather than the physical inverse-square law. The demo's dynamics
depend on it, so it is reproduced exactly.

TICK ORDER (integrate_tick):
  1. Drift: x += v (unit time step)
  2. Snapshot the drifted positions
  3. Kick: accumulate pairwise accelerations from the snapshot into v
  4. Recenter: subtract the centroid from every position
"""

import numpy as np
from numba import jit, prange

from asciigrav import constants as const
from asciigrav.state import SimulationState


@jit(nopython=True)
def newton_force_magnitude(G, mass1, mass2, distance):
    """
    Force magnitude between two masses.

    F = G × m1 × m2 / d

    Args:
        G: Gravitational constant
        mass1: Mass of body 1
        mass2: Mass of body 2
        distance: Distance between the mass centers (> 0)

    Returns:
        float: Force magnitude
    """
    return G * ((mass1 * mass2) / distance)


@jit(nopython=True)
def advance_positions(positions, velocities):
    """
    Move every body by its velocity (one tick, no dt scaling).

    Args:
        positions: Body positions (shape: (N, 3)), modified in place
        velocities: Body velocities (shape: (N, 3))
    """
    n_bodies = positions.shape[0]
    for i in range(n_bodies):
        positions[i, 0] += velocities[i, 0]
        positions[i, 1] += velocities[i, 1]
        positions[i, 2] += velocities[i, 2]


@jit(nopython=True)
def accumulate_pairwise_forces(ref_positions, velocities, masses, G, min_distance):
    """
    Apply the gravitational kick of every unordered pair exactly once.

    Pairs are visited as i in [0, N-1), j in (i, N). Each pair updates both
    bodies with equal and opposite forces, so total momentum is conserved
    up to rounding.

    Args:
        ref_positions: Snapshot positions used for all geometry (shape: (N, 3))
        velocities: Live velocities (shape: (N, 3)), modified in place
        masses: Body masses (shape: (N,)), all > 0
        G: Gravitational constant
        min_distance: Pairs closer than this are skipped

    Notes:
        - Reading geometry from the snapshot makes the result independent
          of the in-place velocity updates and of body order (except for
          floating-point summation order)
        - Coincident bodies (d == 0) are always skipped
    """
    n_bodies = ref_positions.shape[0]

    for i in range(n_bodies - 1):
        for j in range(i + 1, n_bodies):
            # Vector from i to j
            dx = ref_positions[j, 0] - ref_positions[i, 0]
            dy = ref_positions[j, 1] - ref_positions[i, 1]
            dz = ref_positions[j, 2] - ref_positions[i, 2]

            d = np.sqrt(dx * dx + dy * dy + dz * dz)
            if d == 0.0 or d < min_distance:
                continue

            force = newton_force_magnitude(G, masses[i], masses[j], d)

            # Force on i points toward j; force on j is its negation
            fx = dx / d * force
            fy = dy / d * force
            fz = dz / d * force

            velocities[i, 0] += fx / masses[i]
            velocities[i, 1] += fy / masses[i]
            velocities[i, 2] += fz / masses[i]

            velocities[j, 0] -= fx / masses[j]
            velocities[j, 1] -= fy / masses[j]
            velocities[j, 2] -= fz / masses[j]


@jit(nopython=True, parallel=True)
def accumulate_forces_parallel(ref_positions, velocities, masses, G, min_distance):
    """
    Parallel variant of accumulate_pairwise_forces.

    Each worker owns body i: it sums the accelerations from every other
    body into local accumulators and writes only velocities[i]. Every pair
    is therefore evaluated twice, but there are no concurrent writes.

    Args:
        ref_positions: Snapshot positions (shape: (N, 3))
        velocities: Live velocities (shape: (N, 3)), modified in place
        masses: Body masses (shape: (N,))
        G: Gravitational constant
        min_distance: Pairs closer than this are skipped
    """
    n_bodies = ref_positions.shape[0]

    for i in prange(n_bodies):
        ax = 0.0
        ay = 0.0
        az = 0.0

        for j in range(n_bodies):
            if i == j:
                continue

            dx = ref_positions[j, 0] - ref_positions[i, 0]
            dy = ref_positions[j, 1] - ref_positions[i, 1]
            dz = ref_positions[j, 2] - ref_positions[i, 2]

            d = np.sqrt(dx * dx + dy * dy + dz * dz)
            if d == 0.0 or d < min_distance:
                continue

            force = newton_force_magnitude(G, masses[i], masses[j], d)

            ax += dx / d * force / masses[i]
            ay += dy / d * force / masses[i]
            az += dz / d * force / masses[i]

        velocities[i, 0] += ax
        velocities[i, 1] += ay
        velocities[i, 2] += az


@jit(nopython=True)
def recenter(positions):
    """
    Pin the centroid of the system to the origin.

    Bounds numeric drift of the whole cloud; does not rescale
    inter-body distances.

    Args:
        positions: Body positions (shape: (N, 3)), modified in place

    Returns:
        centroid: The offset that was removed (shape: (3,))
    """
    n_bodies = positions.shape[0]

    cx = 0.0
    cy = 0.0
    cz = 0.0
    for i in range(n_bodies):
        cx += positions[i, 0]
        cy += positions[i, 1]
        cz += positions[i, 2]

    cx /= n_bodies
    cy /= n_bodies
    cz /= n_bodies

    for i in range(n_bodies):
        positions[i, 0] -= cx
        positions[i, 1] -= cy
        positions[i, 2] -= cz

    centroid = np.empty(3)
    centroid[0] = cx
    centroid[1] = cy
    centroid[2] = cz
    return centroid


FORCE_KERNELS = {
    'pairwise': accumulate_pairwise_forces,
    'parallel': accumulate_forces_parallel,
}


def integrate_tick(
    state: SimulationState,
    G: float = const.G,
    min_distance: float = const.MIN_DISTANCE,
    method: str = 'pairwise'
) -> np.ndarray:
    """
    Advance the state by one tick (drift, kick, recenter).

    Does not touch state.tick_count; the scheduler owns the counter.

    Args:
        state: SimulationState (modified in place)
        G: Gravitational constant
        min_distance: Distance floor for the pairwise force
        method: 'pairwise' (serial i<j loop) or 'parallel'

    Returns:
        centroid: Offset removed by recentering (shape: (3,))

    Raises:
        ValueError: If method is unknown
    """
    try:
        kernel = FORCE_KERNELS[method]
    except KeyError:
        raise ValueError(
            f"Unknown force method '{method}', expected one of {', '.join(FORCE_KERNELS)}"
        ) from None

    # 1. Drift
    advance_positions(state.positions, state.velocities)

    # 2. Reference positions for this tick's geometry
    ref_positions = state.positions.copy()

    # 3. Kick
    kernel(ref_positions, state.velocities, state.masses, float(G), float(min_distance))

    # 4. Recenter
    return recenter(state.positions)
