"""
Growth and diffusion operator.

A raise is two steps: a deposit that adds height to a cell and a fraction of
it to the surrounding ring, then a bounded smoothing sweep so the new
height spreads organically instead of standing as a spike.
"""

from collections import deque
from typing import List

import numpy as np

from .grid import GridIndex


def deposit(
    matrix: np.ndarray,
    grid: GridIndex,
    x: int,
    y: int,
    z_delta: float,
    density: float,
) -> List[int]:
    """
    Add z_delta to (x, y) and z_delta / density to each in-bounds neighbour.

    Args:
        matrix: Flat row-major height matrix, modified in place
        grid: Index for the matrix's grid size
        x, y: Centre cell, must be in bounds; fractional values are floored
        z_delta: Height added to the centre
        density: Divisor for the neighbour share

    Returns:
        Indices written, centre first
    """
    if density <= 0:
        raise ValueError(f"density must be positive, got {density}")

    center = grid.to_index(x, y)
    x, y = grid.to_coords(center)
    matrix[center] += z_delta

    written = [center]
    share = z_delta / density
    for i in grid.neighbor_indices(x, y):
        matrix[i] += share
        written.append(i)
    return written


def _blend(matrix: np.ndarray, grid: GridIndex, x: int, y: int) -> float:
    """Mean of a cell and its in-bounds neighbours' current values."""
    indices = [y * grid.width + x] + grid.neighbor_indices(x, y)
    return float(matrix[indices].sum()) / len(indices)


def diffuse(
    matrix: np.ndarray,
    grid: GridIndex,
    x: int,
    y: int,
    max_depth: int = 2,
) -> List[int]:
    """
    Smooth the neighbourhood of (x, y) after a deposit.

    Breadth-first from the centre out to max_depth rings. Each visited cell
    has the mean of itself and its neighbours added to its value; cells are
    processed in visit order, so later cells see earlier blends. A cell is
    processed at most once per call and the sweep never leaves the
    (2 * max_depth + 1) square around the centre.

    Returns:
        Indices in the order they were processed
    """
    cell = grid.cell(x, y)
    if cell is None:
        return []

    x, y = cell
    start = y * grid.width + x
    visited = {start}
    queue: deque = deque([(x, y, 0)])
    order = []

    while queue:
        cx, cy, depth = queue.popleft()
        i = cy * grid.width + cx
        matrix[i] += _blend(matrix, grid, cx, cy)
        order.append(i)

        if depth == max_depth:
            continue

        for nx, ny in grid.iter_neighbors(cx, cy):
            n = ny * grid.width + nx
            if n in visited:
                continue
            visited.add(n)
            queue.append((nx, ny, depth + 1))

    return order

