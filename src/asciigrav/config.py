"""
Configuration management for the ASCII N-body simulator.

This module handles loading and parsing YAML configuration files.
Every parameter has a default equal to the reference configuration, so an
empty (or missing) section simply reproduces the reference demo.
"""

from dataclasses import dataclass
from typing import Any, Optional
import yaml
from pathlib import Path

from asciigrav import constants as const


@dataclass
class SimulationParameters:
    """
    Container for all simulation parameters.

    Units are the simulation's own:
    - Distance: initial cloud spans [-n_bodies, n_bodies] per axis
    - Time: ticks (one velocity step per tick)
    - Mass: (0, 1] before any floor is applied
    """

    # Metadata
    simulation_name: str = "reference"

    # Bodies
    n_bodies: int = const.N_BODIES
    mass_floor: float = 0.0

    # Physics
    G: float = const.G
    min_distance: float = const.MIN_DISTANCE
    force_method: str = "pairwise"  # "pairwise" or "parallel"

    # Scheduler
    ticks_per_second: float = const.TICKS_PER_SECOND
    max_ticks: Optional[int] = None  # None runs until interrupted

    # Display
    fallback_width: int = const.FALLBACK_WIDTH
    fallback_height: int = const.FALLBACK_HEIGHT
    reserve_status_row: bool = False  # shrink the grid by one row so frames never scroll

    # Diagnostics
    check_momentum_conservation: bool = False

    # Random seed (None seeds from OS entropy)
    seed: Optional[int] = None

    def validate(self) -> list:
        """
        Perform sanity checks on configuration parameters.

        Returns:
            List of warning/error messages. Empty list if all checks pass.
        """
        warnings = []

        if self.n_bodies < 1:
            warnings.append(f"ERROR: n_bodies must be at least 1, got {self.n_bodies}")
        elif self.n_bodies == 1:
            warnings.append("WARNING: a single body feels no force and renders as one point")

        if self.mass_floor < 0:
            warnings.append(f"ERROR: mass_floor must be non-negative, got {self.mass_floor}")
        elif self.mass_floor > 1.0:
            warnings.append(
                f"WARNING: mass_floor ({self.mass_floor}) exceeds the sampled mass range (0, 1]; "
                f"all bodies will have equal mass"
            )

        if self.G < 0:
            warnings.append(f"ERROR: gravitational constant must be non-negative, got {self.G}")

        if self.min_distance < 0:
            warnings.append(f"ERROR: min_distance must be non-negative, got {self.min_distance}")

        if self.force_method not in const.FORCE_METHODS:
            warnings.append(
                f"ERROR: force_method must be one of {', '.join(const.FORCE_METHODS)}, "
                f"got '{self.force_method}'"
            )

        if self.ticks_per_second <= 0:
            warnings.append(f"ERROR: ticks_per_second must be positive, got {self.ticks_per_second}")

        if self.max_ticks is not None and self.max_ticks < 0:
            warnings.append(f"ERROR: max_ticks must be non-negative, got {self.max_ticks}")

        if self.fallback_width < 1 or self.fallback_height < 2:
            warnings.append(
                f"ERROR: fallback display must be at least 1x2 cells, got "
                f"{self.fallback_width}x{self.fallback_height}"
            )

        # O(N^2) per tick: a large cloud cannot keep up with the tick rate
        if self.n_bodies > 5000 and self.force_method == "pairwise":
            warnings.append(
                f"WARNING: {self.n_bodies} bodies with the pairwise kernel will not keep "
                f"{self.ticks_per_second} ticks/s; consider force_method: parallel"
            )

        return warnings

    @classmethod
    def from_yaml(cls, filepath: str) -> 'SimulationParameters':
        """
        Load configuration from YAML file.

        Args:
            filepath: Path to YAML configuration file

        Returns:
            SimulationParameters object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        def to_float(value: Any) -> float:
            """Convert value to float, handling YAML quirks with scientific notation."""
            return float(value)

        def to_int(value: Any) -> int:
            """Convert value to int."""
            return int(value)

        def to_optional_int(value: Any) -> Optional[int]:
            """Convert value to int, keeping null."""
            if value is None:
                return None
            return int(value)

        def to_bool(value: Any) -> bool:
            """Convert value to bool."""
            if isinstance(value, str):
                return value.lower() in ('true', 'yes', '1')
            return bool(value)

        config_path = Path(filepath)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"{filepath}: top level must be a mapping")

        defaults = cls()

        def section(name: str) -> dict:
            """Fetch a nested section; a missing or empty one reads as {}."""
            value = config.get(name)
            if value is None:
                return {}
            if not isinstance(value, dict):
                raise ValueError(f"{filepath}: section '{name}' must be a mapping")
            return value

        bodies = section('bodies')
        physics = section('physics')
        scheduler = section('scheduler')
        display = section('display')
        diagnostics = section('diagnostics')

        force_method = physics.get('force_method', defaults.force_method)
        if force_method not in const.FORCE_METHODS:
            raise ValueError(
                f"physics.force_method must be one of {', '.join(const.FORCE_METHODS)}, "
                f"got '{force_method}'"
            )

        return cls(
            simulation_name=config.get('simulation_name', defaults.simulation_name),
            n_bodies=to_int(bodies.get('count', defaults.n_bodies)),
            mass_floor=to_float(bodies.get('mass_floor', defaults.mass_floor)),
            G=to_float(physics.get('gravitational_constant', defaults.G)),
            min_distance=to_float(physics.get('min_distance', defaults.min_distance)),
            force_method=force_method,
            ticks_per_second=to_float(scheduler.get('ticks_per_second', defaults.ticks_per_second)),
            max_ticks=to_optional_int(scheduler.get('max_ticks', defaults.max_ticks)),
            fallback_width=to_int(display.get('fallback_width', defaults.fallback_width)),
            fallback_height=to_int(display.get('fallback_height', defaults.fallback_height)),
            reserve_status_row=to_bool(display.get('reserve_status_row', defaults.reserve_status_row)),
            check_momentum_conservation=to_bool(
                diagnostics.get('check_momentum_conservation', defaults.check_momentum_conservation)
            ),
            seed=to_optional_int(config.get('seed', defaults.seed)),
        )

    def __repr__(self):
        """Human-readable representation."""
        lines = [
            f"Simulation: {self.simulation_name}",
            f"Bodies: {self.n_bodies}",
            f"G: {self.G:g}",
            f"Force method: {self.force_method}",
            f"Tick rate: {self.ticks_per_second:g} ticks/s",
            f"Max ticks: {'unbounded' if self.max_ticks is None else self.max_ticks}",
        ]
        if self.mass_floor > 0:
            lines.append(f"Mass floor: {self.mass_floor:g}")
        return "\n".join(lines)
