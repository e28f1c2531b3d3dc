"""
Tests for isoband extraction.
"""

import math

import numpy as np
import pytest
from topo_contours.core.grid import GridSize
from topo_contours.core.isobands import Isoband, extract_isobands


def ring_bounds(ring):
    xs = [p[0] for p in ring]
    ys = [p[1] for p in ring]
    return min(xs), min(ys), max(xs), max(ys)


class TestExtractIsobands:
    """Test band partitioning of the matrix."""

    @pytest.fixture
    def size(self):
        return GridSize(10, 10)

    def test_uniform_field_single_band(self, size):
        """A flat field at the only threshold is one band over the whole grid."""
        bands = extract_isobands(np.full(100, 10.0), size, [10.0])

        assert len(bands) == 1
        band = bands[0]
        assert band.lower_bound == 10.0
        assert math.isinf(band.upper_bound)
        assert len(band.rings) == 1

        x0, y0, x1, y1 = ring_bounds(band.rings[0])
        assert (x0, y0) == pytest.approx((0.0, 0.0))
        assert (x1, y1) == pytest.approx((10.0, 10.0))

    def test_rings_are_closed(self, size):
        """Test every ring ends where it starts."""
        matrix = np.full(100, 10.0)
        matrix[55] = 120.0
        bands = extract_isobands(matrix, size, [20, 60, 100])

        for band in bands:
            for ring in band.rings:
                assert ring[0] == ring[-1]

    def test_rings_stay_inside_grid(self):
        """Test ring points never leave the grid bounds."""
        size = GridSize(12, 7)
        rng = np.random.default_rng(42)
        matrix = rng.uniform(0, 100, size.cell_count)

        bands = extract_isobands(matrix, size, list(range(0, 100, 10)))

        for band in bands:
            for ring in band.rings:
                x0, y0, x1, y1 = ring_bounds(ring)
                assert 0.0 <= x0 and x1 <= 12.0
                assert 0.0 <= y0 and y1 <= 7.0

    def test_bands_sorted_and_contiguous(self, size):
        """Test bands are sorted and share boundaries."""
        bands = extract_isobands(np.full(100, 10.0), size, [60, 20, 100, 20])

        assert [b.lower_bound for b in bands] == [20.0, 60.0, 100.0]
        assert [b.upper_bound for b in bands] == [60.0, 100.0, math.inf]

    def test_lower_bound_is_inclusive(self, size):
        """Test a value equal to a threshold joins the band above it."""
        bands = extract_isobands(np.full(100, 20.0), size, [10, 20, 30])

        by_lower = {b.lower_bound: b for b in bands}
        assert by_lower[10.0].is_empty
        assert len(by_lower[20.0].rings) == 1
        assert by_lower[30.0].is_empty

    def test_values_below_lowest_threshold_are_background(self, size):
        """Test values below every threshold belong to no band."""
        bands = extract_isobands(np.full(100, 5.0), size, [10.0])
        assert bands[0].is_empty

    def test_peak_lands_in_top_band(self, size):
        """Test the peak is enclosed by the top band."""
        matrix = np.full(100, 10.0)
        matrix[55] = 150.0  # cell (5, 5)

        bands = extract_isobands(matrix, size, [20, 100])
        top = bands[-1]

        assert top.lower_bound == 100.0
        assert len(top.rings) == 1
        x0, y0, x1, y1 = ring_bounds(top.rings[0])
        assert x0 < 5.5 < x1
        assert y0 < 5.5 < y1

    def test_simplify_reduces_vertices(self):
        """Test that simplification thins rings while keeping them closed and in bounds."""
        size = GridSize(40, 30)
        yy, xx = np.mgrid[0:30, 0:40]
        matrix = 100.0 * np.exp(-((xx - 19.5) ** 2 + (yy - 14.5) ** 2) / 80.0)
        thresholds = [10, 30, 50, 70]

        plain = extract_isobands(matrix.ravel(), size, thresholds)
        thinned = extract_isobands(matrix.ravel(), size, thresholds, simplify=0.5)

        assert [len(b.rings) for b in thinned] == [len(b.rings) for b in plain]
        for before, after in zip(plain, thinned):
            for ring_before, ring_after in zip(before.rings, after.rings):
                assert 4 <= len(ring_after) < len(ring_before)
                assert ring_after[0] == ring_after[-1]
                x0, y0, x1, y1 = ring_bounds(ring_after)
                assert 0.0 <= x0 and x1 <= 40.0
                assert 0.0 <= y0 and y1 <= 30.0

    def test_zero_simplify_keeps_vertices(self, size):
        """Test that a zero tolerance returns contourpy's rings untouched."""
        matrix = np.full(100, 10.0)
        matrix[55] = 150.0
        assert extract_isobands(matrix, size, [20, 100], simplify=0.0) == extract_isobands(
            matrix, size, [20, 100]
        )

    def test_negative_simplify_rejected(self, size):
        """Test that a negative tolerance is refused."""
        with pytest.raises(ValueError):
            extract_isobands(np.zeros(100), size, [10.0], simplify=-1)

    def test_matrix_length_checked(self, size):
        """Test a wrong-length matrix is rejected."""
        with pytest.raises(ValueError):
            extract_isobands(np.zeros(99), size, [10.0])

    def test_thresholds_required(self, size):
        """Test at least one finite threshold is required."""
        with pytest.raises(ValueError):
            extract_isobands(np.zeros(100), size, [])

    def test_single_cell_grid(self):
        """Test a 1x1 grid yields one ring."""
        bands = extract_isobands([42.0], GridSize(1, 1), [10.0])
        assert len(bands[0].rings) == 1


class TestIsobandModel:
    """Test the isoband record handed to renderers."""

    def test_contains_half_open(self):
        """Test band membership is half-open."""
        band = Isoband(lower_bound=20, upper_bound=40)
        assert band.contains(20)
        assert band.contains(39.9)
        assert not band.contains(40)
        assert band.is_empty

    def test_model_dump(self):
        """Test isobands serialize through pydantic."""
        band = Isoband(lower_bound=0, upper_bound=10, rings=[[(0, 0), (1, 0), (1, 1), (0, 0)]])
        data = band.model_dump()
        assert set(data) == {"lower_bound", "upper_bound", "rings"}
        assert data["rings"][0][1] == (1.0, 0.0)
