"""
Threshold strategy: the z-values at which contour bands are split.
"""

import math
from typing import List

import structlog

from .presets import Preset

logger = structlog.get_logger()

DEFAULT_CONTOUR_INTERVAL = 20.0
RANDOM_THRESHOLDS = tuple(float(z) for z in range(0, 100, 10))


def _empty_thresholds(
    z_min: float, z_max: float, contour_interval: float
) -> List[float]:
    z_range = math.ceil(z_max - z_min)
    bucket_count = math.ceil(z_max / contour_interval)
    if bucket_count <= 0 or z_range <= 0:
        return []

    end = (bucket_count + 1) * z_range / bucket_count
    steps = math.ceil(end / contour_interval)
    values = [k * contour_interval for k in range(1, steps)]
    return [z for z in values if z < end][::-1]


def compute_thresholds(
    z_min: float,
    z_max: float,
    preset: Preset,
    contour_interval: float = DEFAULT_CONTOUR_INTERVAL,
    baseline: float = 10.0,
) -> List[float]:
    """
    Ordered band boundaries for the current field statistics.

    Args:
        z_min: Running minimum of the field
        z_max: Running maximum of the field
        preset: Field preset, selects the formula
        contour_interval: Spacing between empty-preset boundaries
        baseline: Single boundary used when the statistics are degenerate

    Returns:
        Descending multiples of contour_interval for EMPTY, the fixed
        0..90 ladder for RANDOM, or [baseline] when EMPTY has no usable
        range (flat or never-raised field).
    """
    preset = Preset.parse(preset)

    if preset is Preset.RANDOM:
        return list(RANDOM_THRESHOLDS)

    if preset is Preset.EMPTY:
        degenerate = (
            not (math.isfinite(z_min) and math.isfinite(z_max))
            or contour_interval <= 0
            or z_max <= 0
            or z_max <= z_min
        )
        values = [] if degenerate else _empty_thresholds(z_min, z_max, contour_interval)
        if not values:
            logger.debug(
                "Degenerate thresholds, using baseline band",
                z_min=z_min,
                z_max=z_max,
                contour_interval=contour_interval,
            )
            return [float(baseline)]
        return values

    raise ValueError(f"No threshold strategy for preset {preset!r}")
