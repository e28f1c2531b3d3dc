"""
Isoband extraction.

Turns the flat height matrix and a threshold list into filled contour
polygons using contourpy, the marching-squares engine behind matplotlib's
contourf. Rings can be thinned with shapely before they are handed out.
"""

import math
from typing import List, Sequence, Tuple

import contourpy
import numpy as np
from pydantic import BaseModel, Field
from shapely.geometry import Polygon

from .grid import GridSize

Point = Tuple[float, float]
Ring = List[Point]

# Closed triangle: three vertices plus the repeated first one
MIN_RING_POINTS = 4


class Isoband(BaseModel):
    """Region whose values fall in [lower_bound, upper_bound)."""

    lower_bound: float = Field(..., description="Inclusive lower value of the band")
    upper_bound: float = Field(..., description="Exclusive upper value, inf for the top band")
    rings: List[Ring] = Field(
        default_factory=list,
        description=(
            "Closed polygon rings in grid coordinates. Outer boundaries and holes "
            "are flattened into one list; only winding order tells them apart, "
            "a hole runs opposite to the outer ring that contains it"
        ),
    )

    def contains(self, value: float) -> bool:
        return self.lower_bound <= value < self.upper_bound

    @property
    def is_empty(self) -> bool:
        return not self.rings


def _sample_axis(n: int) -> np.ndarray:
    """Cell centres plus the two grid edges: [0, 0.5, 1.5, ..., n-0.5, n]."""
    return np.concatenate(([0.0], np.arange(n, dtype=np.float64) + 0.5, [float(n)]))


def _band_levels(thresholds: Sequence[float]) -> List[float]:
    levels = sorted({float(t) for t in thresholds if math.isfinite(t)})
    if not levels:
        raise ValueError("At least one finite threshold is required")
    return levels


def simplify_ring(ring: np.ndarray, tolerance: float) -> np.ndarray:
    """
    Drop ring vertices closer than tolerance to the simplified outline.

    Returns the ring unchanged when tolerance is 0 or simplification would
    collapse it below a triangle.
    """
    if tolerance <= 0 or len(ring) <= MIN_RING_POINTS:
        return ring
    simplified = Polygon(ring).simplify(tolerance, preserve_topology=True)
    if simplified.is_empty or simplified.geom_type != "Polygon":
        return ring
    coords = np.asarray(simplified.exterior.coords)
    if len(coords) < MIN_RING_POINTS:
        return ring
    return coords


def _rings_from_filled(filled, size: GridSize, simplify: float = 0.0) -> List[Ring]:
    points_list, offsets_list = filled
    upper = np.array([size.width, size.height], dtype=np.float64)
    rings: List[Ring] = []
    for points, offsets in zip(points_list, offsets_list):
        for start, stop in zip(offsets[:-1], offsets[1:]):
            ring = simplify_ring(points[start:stop], simplify)
            if len(ring) < MIN_RING_POINTS:
                continue
            # Interpolation towards the edge samples can overshoot by an ulp
            ring = np.clip(ring, 0.0, upper)
            rings.append([(float(px), float(py)) for px, py in ring])
    return rings


def extract_isobands(
    matrix: np.ndarray,
    size: GridSize,
    thresholds: Sequence[float],
    simplify: float = 0.0,
) -> List[Isoband]:
    """
    Partition the grid into bands between consecutive thresholds.

    Thresholds may arrive in either order; they are sorted ascending and
    each band covers [t_i, t_{i+1}), with the last one open above. Values
    below the lowest threshold belong to no band.

    Args:
        matrix: Flat row-major matrix of size.cell_count values
        size: Grid dimensions
        thresholds: Band boundaries
        simplify: Ring simplification tolerance in grid cells, 0 disables it

    Returns:
        Isobands ordered by lower_bound, including bands with no rings
    """
    values = np.asarray(matrix, dtype=np.float64)
    if values.size != size.cell_count:
        raise ValueError(
            f"Matrix has {values.size} values, grid {size.width}x{size.height} needs {size.cell_count}"
        )
    if simplify < 0:
        raise ValueError(f"simplify must be non-negative, got {simplify}")

    levels = _band_levels(thresholds)
    z = values.reshape(size.shape)

    # Edge samples replicate the outer cells so regions reach the grid border.
    # The field is negated because contourpy fills lower < z <= upper and
    # bands here are closed below.
    padded = -np.pad(z, 1, mode="edge")
    generator = contourpy.contour_generator(
        x=_sample_axis(size.width),
        y=_sample_axis(size.height),
        z=padded,
        fill_type=contourpy.FillType.OuterOffset,
    )

    ceiling = max(float(z.max()), levels[-1]) + 1.0
    uppers = levels[1:] + [math.inf]

    bands = []
    for lower, upper in zip(levels, uppers):
        fill_upper = upper if math.isfinite(upper) else ceiling
        rings = _rings_from_filled(generator.filled(-fill_upper, -lower), size, simplify)
        bands.append(Isoband(lower_bound=lower, upper_bound=upper, rings=rings))
    return bands
