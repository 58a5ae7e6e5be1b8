"""
Initialization functions for the ASCII N-body simulator.

Bodies start in a cube whose half-width equals the body count, so the
cloud's spread grows with its population.
"""

import numpy as np
from typing import Optional

from asciigrav.config import SimulationParameters
from asciigrav.state import SimulationState


def sample_masses(
    n_bodies: int,
    rng: np.random.Generator,
    mass_floor: float = 0.0
) -> np.ndarray:
    """
    Sample body masses uniformly in (0, 1].

    Args:
        n_bodies: Number of bodies
        rng: NumPy random number generator
        mass_floor: Lower bound applied after sampling (0 = no floor)

    Returns:
        masses: (n_bodies,) array

    Notes:
        - Generator.random() draws from [0, 1), so 1 - U lies in (0, 1]
        - Very small masses produce very large accelerations; mass_floor
          is the knob for taming that
    """
    masses = 1.0 - rng.random(n_bodies)
    if mass_floor > 0:
        masses = np.maximum(masses, mass_floor)
    return masses


def initialize_bodies(
    n_bodies: int,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    mass_floor: float = 0.0
) -> SimulationState:
    """
    Create a collection of bodies with randomized state.

    Per body, independently:
    - position components uniform in [-n_bodies, n_bodies]
    - velocity components uniform in [0, 1]
    - mass uniform in (0, 1]

    Args:
        n_bodies: Number of bodies
        rng: Random generator to draw from (takes precedence over seed)
        seed: Seed for a fresh generator; None seeds from OS entropy
        mass_floor: Minimum body mass

    Returns:
        SimulationState with tick_count = 0

    Raises:
        ValueError: If n_bodies < 1 or mass_floor < 0
    """
    if n_bodies < 1:
        raise ValueError(f"n_bodies must be at least 1, got {n_bodies}")
    if mass_floor < 0:
        raise ValueError(f"mass_floor must be non-negative, got {mass_floor}")

    if rng is None:
        rng = np.random.default_rng(seed)

    state = SimulationState(n_bodies)

    # Scale positions by body count
    state.positions[:] = rng.uniform(-n_bodies, n_bodies, size=(n_bodies, 3))
    state.velocities[:] = rng.uniform(0.0, 1.0, size=(n_bodies, 3))
    state.masses[:] = sample_masses(n_bodies, rng, mass_floor)

    state.validate_masses()
    return state


def initialize_simulation(
    params: SimulationParameters,
    seed: Optional[int] = None
) -> SimulationState:
    """
    Initialize a simulation from configuration.

    Args:
        params: SimulationParameters object
        seed: Random seed; falls back to params.seed, then OS entropy

    Returns:
        Freshly initialized SimulationState
    """
    if seed is None:
        seed = params.seed
    return initialize_bodies(params.n_bodies, seed=seed, mass_floor=params.mass_floor)
