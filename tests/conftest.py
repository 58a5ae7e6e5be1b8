"""
Pytest configuration for the ASCII N-body simulator tests.

This file ensures the asciigrav package is importable from tests without
installing it, and provides shared fixtures.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / 'src'))

from asciigrav.state import SimulationState


class FakeClock:
    """Deterministic time source; sleeping advances time instantly."""

    def __init__(self, start: float = 0.0):
        self.t = start
        self.sleeps = []

    def time(self) -> float:
        return self.t

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.t += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def two_body_state():
    """Two unit masses at rest, 10 units apart on the x-axis."""
    return SimulationState.from_arrays(
        positions=[[0.0, 0.0, 0.0], [10.0, 0.0, 0.0]],
        velocities=np.zeros((2, 3)),
        masses=[1.0, 1.0]
    )
