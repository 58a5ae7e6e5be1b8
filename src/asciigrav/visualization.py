"""
ASCII projection of the body cloud.

Bodies are projected orthographically onto the x-y plane and scaled so
the cloud's bounding box fills the character grid. The z coordinate is
encoded with a depth palette running from '.' (least z) to '@'
(greatest z).

Degenerate geometry:
- An axis with zero extent (all bodies share the coordinate) maps every
  body to the middle of that axis
- Bodies with non-finite coordinates are drawn at the middle of the grid
  and ignored when computing the bounding box
"""

import numpy as np
from typing import Sequence, Tuple

from asciigrav import constants as const
from asciigrav.state import SimulationState


def bounding_box(positions: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Axis-aligned bounding box of all finite positions.

    Args:
        positions: Body positions (shape: (N, 3))

    Returns:
        (lowest, highest) tuple of (3,) arrays. Both are zero if no body
        has a finite position.
    """
    finite = np.isfinite(positions).all(axis=1)
    if not np.any(finite):
        return np.zeros(3), np.zeros(3)
    valid = positions[finite]
    return valid.min(axis=0), valid.max(axis=0)


def _inverse_lerp(values: np.ndarray, lowest: float, highest: float) -> np.ndarray:
    """Map values into [0, 1] relative to [lowest, highest]; degenerate -> 0.5."""
    extent = highest - lowest
    if not np.isfinite(extent) or extent <= 0:
        return np.full(values.shape, 0.5)
    with np.errstate(invalid='ignore'):
        t = (values - lowest) / extent
    return np.where(np.isfinite(t), t, 0.5)


def _to_index(t: np.ndarray, size: int) -> np.ndarray:
    """Scale [0, 1] onto 0..size-1, rounding half away from zero."""
    index = np.floor(t * (size - 1) + 0.5).astype(np.int64)
    return np.clip(index, 0, size - 1)


def project_bodies(
    height: int,
    width: int,
    positions: np.ndarray,
    palette_size: int = len(const.DEPTH_PALETTE)
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compute grid cell and depth symbol for every body.

    row    = round((y - min_y) / (max_y - min_y) × (height - 1))
    column = round((x - min_x) / (max_x - min_x) × (width - 1))
    depth  = round((z - min_z) / (max_z - min_z) × (palette_size - 1))

    Args:
        height: Grid rows
        width: Grid columns
        positions: Body positions (shape: (N, 3))
        palette_size: Number of depth symbols

    Returns:
        (rows, columns, depths) integer arrays of shape (N,), all within
        the grid and palette bounds
    """
    lowest, highest = bounding_box(positions)

    columns = _to_index(_inverse_lerp(positions[:, 0], lowest[0], highest[0]), width)
    rows = _to_index(_inverse_lerp(positions[:, 1], lowest[1], highest[1]), height)
    depths = _to_index(_inverse_lerp(positions[:, 2], lowest[2], highest[2]), palette_size)

    return rows, columns, depths


def render(
    height: int,
    width: int,
    state: SimulationState,
    palette: Sequence[str] = const.DEPTH_PALETTE
) -> str:
    """
    Render the bodies as a height × width character map.

    Bodies are drawn in collection order; a later body landing on an
    occupied cell overwrites it.

    Args:
        height: Grid rows (>= 1)
        width: Grid columns (>= 1)
        state: SimulationState to draw (not modified)
        palette: Depth symbols, least z first

    Returns:
        str: height lines of width characters, each ending in a newline

    Raises:
        ValueError: If height or width < 1, or the palette is empty
    """
    if height < 1 or width < 1:
        raise ValueError(f"Grid must be at least 1x1, got {height}x{width}")
    if len(palette) == 0:
        raise ValueError("Depth palette must not be empty")

    lines = [[' '] * width for _ in range(height)]

    rows, columns, depths = project_bodies(height, width, state.positions, len(palette))
    for row, column, depth in zip(rows, columns, depths):
        lines[row][column] = palette[depth]

    return ''.join(''.join(line) + '\n' for line in lines)
