"""
Grid sizing and coordinate/index mapping for the height field.

Cells are addressed row-major: ``index = y * width + x``. Every mapping in
this module works on the half-open ranges ``0 <= x < width``,
``0 <= y < height`` and ``0 <= index < cell_count``.
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .errors import InvalidGridSize, OutOfBounds

# Moore neighbourhood offsets, row by row
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


def _is_dimension(value) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, np.integer)) and value > 0


@dataclass(frozen=True)
class GridSize:
    """Width and height of the field, in cells."""

    width: int
    height: int

    def __post_init__(self):
        if not (_is_dimension(self.width) and _is_dimension(self.height)):
            raise InvalidGridSize(self.width, self.height)
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def shape(self) -> Tuple[int, int]:
        """NumPy (rows, cols) shape of the matrix."""
        return (self.height, self.width)

    @classmethod
    def from_pixels(
        cls, pixel_width: float, pixel_height: float, cell_size: float
    ) -> "GridSize":
        """
        Derive a grid from an element's pixel size.

        Partial cells at the right and bottom edges count as whole cells.

        Args:
            pixel_width: Element width in pixels
            pixel_height: Element height in pixels
            cell_size: Edge length of one grid cell in pixels

        Returns:
            GridSize covering the whole element
        """
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        if pixel_width <= 0 or pixel_height <= 0:
            raise InvalidGridSize(pixel_width, pixel_height)
        return cls(
            width=math.ceil(pixel_width / cell_size),
            height=math.ceil(pixel_height / cell_size),
        )

    def cell_at(
        self, px: float, py: float, cell_size: float
    ) -> Optional[Tuple[int, int]]:
        """Grid cell under a pixel position, or None outside the grid."""
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        x = math.floor(px / cell_size)
        y = math.floor(py / cell_size)
        if 0 <= x < self.width and 0 <= y < self.height:
            return (x, y)
        return None


class GridIndex:
    """Coordinate transform and bounds test for one grid size."""

    def __init__(self, size: GridSize):
        self.size = size
        self.width = size.width
        self.height = size.height
        self.cell_count = size.cell_count

    def cell(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """
        Integer cell containing a point, or None outside the grid.

        Fractional coordinates are floored, so (4.5, 5) is cell (4, 5).
        Non-finite coordinates are never in the grid.
        """
        try:
            cx = math.floor(x)
            cy = math.floor(y)
        except (OverflowError, TypeError, ValueError):
            return None
        if 0 <= cx < self.width and 0 <= cy < self.height:
            return (int(cx), int(cy))
        return None

    def in_bounds(self, x: float, y: float) -> bool:
        return self.cell(x, y) is not None

    def index_in_bounds(self, index: int) -> bool:
        return 0 <= index < self.cell_count

    def to_index(self, x: float, y: float) -> int:
        """Row-major index of the in-bounds cell containing (x, y).

        Raises:
            OutOfBounds: if (x, y) is outside the grid
        """
        cell = self.cell(x, y)
        if cell is None:
            raise OutOfBounds(x, y, self.width, self.height)
        cx, cy = cell
        return cy * self.width + cx

    def to_coords(self, index: int) -> Tuple[int, int]:
        """Inverse of to_index."""
        if not self.index_in_bounds(index):
            raise OutOfBounds(index, width=self.width, height=self.height)
        y, x = divmod(index, self.width)
        return (x, y)

    def iter_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield (nx, ny)

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """In-bounds Moore neighbours of (x, y), at most 8."""
        return list(self.iter_neighbors(x, y))

    def neighbor_indices(self, x: int, y: int) -> List[int]:
        return [ny * self.width + nx for nx, ny in self.iter_neighbors(x, y)]
