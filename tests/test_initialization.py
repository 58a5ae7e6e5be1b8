"""
Unit tests for body initialization.
"""

import pytest
import numpy as np

from asciigrav.config import SimulationParameters
from asciigrav.initialization import initialize_bodies, initialize_simulation, sample_masses


class TestInitializationBounds:
    """Sampled state stays within the documented ranges."""

    @pytest.mark.parametrize("n_bodies", [1, 2, 5, 300])
    def test_positions_within_population_cube(self, n_bodies):
        state = initialize_bodies(n_bodies, seed=1)
        assert np.all(state.positions >= -n_bodies)
        assert np.all(state.positions <= n_bodies)

    def test_velocities_within_unit_interval(self):
        state = initialize_bodies(300, seed=2)
        assert np.all(state.velocities >= 0.0)
        assert np.all(state.velocities <= 1.0)

    def test_masses_strictly_positive_and_at_most_one(self):
        state = initialize_bodies(300, seed=3)
        assert np.all(state.masses > 0.0)
        assert np.all(state.masses <= 1.0)

    def test_spread_grows_with_population(self):
        small = initialize_bodies(10, seed=4)
        large = initialize_bodies(1000, seed=4)
        assert np.abs(large.positions).max() > np.abs(small.positions).max()

    def test_state_is_fresh(self):
        state = initialize_bodies(10, seed=5)
        assert state.tick_count == 0
        assert state.n_bodies == 10


class TestRandomSource:
    """Seeding and generator injection."""

    def test_same_seed_is_reproducible(self):
        a = initialize_bodies(50, seed=123)
        b = initialize_bodies(50, seed=123)

        assert np.array_equal(a.positions, b.positions)
        assert np.array_equal(a.velocities, b.velocities)
        assert np.array_equal(a.masses, b.masses)

    def test_different_seeds_differ(self):
        a = initialize_bodies(50, seed=1)
        b = initialize_bodies(50, seed=2)
        assert not np.array_equal(a.positions, b.positions)

    def test_injected_generator_is_used(self):
        a = initialize_bodies(20, rng=np.random.default_rng(7))
        b = initialize_bodies(20, rng=np.random.default_rng(7), seed=999)
        assert np.array_equal(a.positions, b.positions)

    def test_initialize_simulation_uses_params_seed(self):
        params = SimulationParameters(n_bodies=30, seed=11)
        a = initialize_simulation(params)
        b = initialize_bodies(30, seed=11)
        assert np.array_equal(a.positions, b.positions)

    def test_explicit_seed_overrides_params(self):
        params = SimulationParameters(n_bodies=30, seed=11)
        a = initialize_simulation(params, seed=12)
        b = initialize_bodies(30, seed=12)
        assert np.array_equal(a.masses, b.masses)


class TestMassFloor:
    """Optional lower bound on sampled masses."""

    def test_floor_applied(self):
        state = initialize_bodies(500, seed=6, mass_floor=0.5)
        assert state.masses.min() >= 0.5
        assert state.masses.max() <= 1.0

    def test_no_floor_by_default(self):
        masses = sample_masses(5000, np.random.default_rng(8))
        assert masses.min() < 0.01

    def test_negative_floor_rejected(self):
        with pytest.raises(ValueError):
            initialize_bodies(5, seed=1, mass_floor=-1.0)


def test_zero_bodies_rejected():
    with pytest.raises(ValueError):
        initialize_bodies(0)
