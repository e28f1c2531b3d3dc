"""
Core height-field engine.
"""

from .errors import TopoError, InvalidGridSize, OutOfBounds
from .grid import GridSize, GridIndex
from .presets import Preset
from .growth import deposit, diffuse
from .thresholds import compute_thresholds
from .isobands import Isoband, extract_isobands
from .height_field import HeightField, GrowthResult, GrowthStatus

__all__ = ['TopoError', 'InvalidGridSize', 'OutOfBounds', 'GridSize', 'GridIndex',
           'Preset', 'deposit', 'diffuse', 'compute_thresholds', 'Isoband',
           'extract_isobands', 'HeightField', 'GrowthResult', 'GrowthStatus']
