"""
Runtime diagnostics for simulation health checks.

This module provides functions to detect:
- Momentum conservation violations
- Centroid drift (recentering failures)
- Numerical blow-up (NaN or Inf in the state)
"""

import numpy as np

from asciigrav.state import SimulationState


def total_momentum(state: SimulationState) -> np.ndarray:
    """Total linear momentum sum(m * v) (3,)."""
    return state.total_momentum()


def momentum_drift(p_before: np.ndarray, p_after: np.ndarray, scale: float = 1.0) -> float:
    """
    Relative change of the total momentum vector.

    |p_after - p_before| / max(|p_before|, scale)

    Args:
        p_before: Momentum before the step (shape: (3,))
        p_after: Momentum after the step (shape: (3,))
        scale: Floor for the denominator (a system at rest has |p| = 0)

    Returns:
        float: Relative drift (0 for perfect conservation)
    """
    denom = max(float(np.linalg.norm(p_before)), scale)
    return float(np.linalg.norm(p_after - p_before)) / denom


def centroid_offset(state: SimulationState) -> float:
    """Distance of the system centroid from the origin."""
    return float(np.linalg.norm(state.centroid()))


def check_numerical_health(state: SimulationState) -> dict:
    """
    Check the state for values that will corrupt further ticks.

    Args:
        state: SimulationState

    Returns:
        dict with:
            - is_finite: bool
            - n_nonfinite: number of bodies with a NaN/Inf position or velocity
            - warnings: list of warning messages
    """
    warnings = []

    bad_positions = ~np.isfinite(state.positions).all(axis=1)
    bad_velocities = ~np.isfinite(state.velocities).all(axis=1)
    bad = bad_positions | bad_velocities
    n_bad = int(np.sum(bad))

    if n_bad > 0:
        first = int(np.flatnonzero(bad)[0])
        warnings.append(
            f"CRITICAL: {n_bad} bodies have NaN or Inf state at tick {state.tick_count} "
            f"(first: body {first}) - numerical instability!"
        )

    return {
        'is_finite': n_bad == 0,
        'n_nonfinite': n_bad,
        'warnings': warnings
    }
