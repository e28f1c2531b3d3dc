"""
Scalar-field engine for interactive topographic contour maps.
"""

from .core import (
    GridSize,
    GridIndex,
    HeightField,
    GrowthResult,
    GrowthStatus,
    Isoband,
    Preset,
    compute_thresholds,
    extract_isobands,
)

__version__ = "0.1.0"

__all__ = ['GridSize', 'GridIndex', 'HeightField', 'GrowthResult', 'GrowthStatus',
           'Isoband', 'Preset', 'compute_thresholds', 'extract_isobands']
