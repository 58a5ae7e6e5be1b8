"""
Simulation state management for the ASCII N-body simulator.

This module defines the SimulationState class (the body store). All bodies
are stored in parallel NumPy arrays so the Numba kernels in
``asciigrav.physics`` can operate on them directly and in place.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class Body:
    """Read-only view of a single point mass."""

    position: Tuple[float, float, float]
    velocity: Tuple[float, float, float]
    mass: float


class SimulationState:
    """
    Fixed-size collection of point masses.

    Physics arrays:
    - positions: (N, 3) float64
    - velocities: (N, 3) float64
    - masses: (N,) float64, strictly positive

    Body order only defines pair iteration in the integrator; it has no
    physical meaning.
    """

    def __init__(self, n_bodies: int):
        """
        Allocate a zeroed collection.

        Args:
            n_bodies: Number of bodies (must be >= 1)
        """
        if n_bodies < 1:
            raise ValueError(f"n_bodies must be at least 1, got {n_bodies}")

        self.positions = np.zeros((n_bodies, 3), dtype=np.float64)
        self.velocities = np.zeros((n_bodies, 3), dtype=np.float64)
        self.masses = np.zeros(n_bodies, dtype=np.float64)

        # Number of completed ticks
        self.tick_count = 0

    @classmethod
    def from_arrays(cls, positions, velocities, masses) -> 'SimulationState':
        """
        Build a state from existing arrays (copied).

        Args:
            positions: (N, 3) array-like
            velocities: (N, 3) array-like
            masses: (N,) array-like

        Raises:
            ValueError: If shapes disagree or any mass is not positive
        """
        positions = np.asarray(positions, dtype=np.float64)
        velocities = np.asarray(velocities, dtype=np.float64)
        masses = np.asarray(masses, dtype=np.float64)

        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(f"positions must have shape (N, 3), got {positions.shape}")
        if velocities.shape != positions.shape:
            raise ValueError(
                f"velocities shape {velocities.shape} does not match positions {positions.shape}"
            )
        if masses.shape != (len(positions),):
            raise ValueError(f"masses must have shape ({len(positions)},), got {masses.shape}")

        state = cls(len(positions))
        state.positions[:] = positions
        state.velocities[:] = velocities
        state.masses[:] = masses
        state.validate_masses()
        return state

    @property
    def n_bodies(self) -> int:
        """Total number of bodies."""
        return len(self.positions)

    def validate_masses(self) -> None:
        """
        Reject non-positive or non-finite masses.

        The acceleration step divides by mass, so a zero mass would poison
        the state on the first tick.

        Raises:
            ValueError: If any mass is <= 0 or not finite
        """
        bad = ~np.isfinite(self.masses) | (self.masses <= 0)
        if np.any(bad):
            idx = int(np.flatnonzero(bad)[0])
            raise ValueError(
                f"All masses must be positive and finite; body {idx} has mass {self.masses[idx]}"
            )

    def snapshot(self) -> 'SimulationState':
        """Independent copy of the whole collection."""
        copy = SimulationState(self.n_bodies)
        copy.positions[:] = self.positions
        copy.velocities[:] = self.velocities
        copy.masses[:] = self.masses
        copy.tick_count = self.tick_count
        return copy

    def centroid(self) -> np.ndarray:
        """Arithmetic mean position (3,)."""
        return self.positions.mean(axis=0)

    def total_momentum(self) -> np.ndarray:
        """Total linear momentum sum(m * v) (3,)."""
        return (self.masses[:, np.newaxis] * self.velocities).sum(axis=0)

    def get_body(self, index: int) -> Body:
        """Return body ``index`` as an immutable Body value."""
        return Body(
            position=tuple(float(v) for v in self.positions[index]),
            velocity=tuple(float(v) for v in self.velocities[index]),
            mass=float(self.masses[index]),
        )

    def __len__(self) -> int:
        return self.n_bodies

    def __repr__(self) -> str:
        """String representation of simulation state."""
        c = self.centroid()
        p = self.total_momentum()
        lines = [
            f"SimulationState(tick={self.tick_count})",
            f"  Bodies: {self.n_bodies}",
            f"  Total mass: {self.masses.sum():.4f}",
            f"  Centroid: ({c[0]:.3e}, {c[1]:.3e}, {c[2]:.3e})",
            f"  Momentum: ({p[0]:.3e}, {p[1]:.3e}, {p[2]:.3e})",
        ]
        return "\n".join(lines)
