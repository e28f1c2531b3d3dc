"""
Random number generation utilities.

All randomness in the engine comes from the Alea PRNG so that a seeded
field is reproducible. NumPy's and Python's generators are not used.
"""

import math
import uuid
from typing import Optional

import structlog

from ..core.alea_prng import AleaPRNG

logger = structlog.get_logger()

# Shared PRNG for fields created without their own seed
_prng = None


def set_random_seed(seed: str) -> None:
    """
    Reseed the shared Alea PRNG.

    Args:
        seed: Seed string to use
    """
    global _prng
    _prng = AleaPRNG(seed)


def get_prng() -> AleaPRNG:
    """
    Get the shared Alea PRNG instance.

    Seeded from settings.random_seed, or from a fresh UUID when no seed is
    configured.
    """
    global _prng
    if _prng is None:
        from ..config import settings

        _prng = AleaPRNG(settings.random_seed or uuid.uuid4().hex)
    return _prng


def box_muller(prng: AleaPRNG) -> float:
    """One standard normal deviate from two uniform draws in (0, 1)."""
    u = prng.random_open()
    v = prng.random_open()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def bounded_gaussian(
    prng: Optional[AleaPRNG] = None,
    center: float = 0.5,
    std_dev: float = 0.1,
    max_attempts: int = 64,
) -> float:
    """
    Gaussian sample restricted to [0, 1) by rejection.

    Args:
        prng: Generator to draw from, defaults to the shared PRNG
        center: Mean of the distribution
        std_dev: Standard deviation of the distribution
        max_attempts: Draws before giving up on rejection

    Returns:
        A value in [0, 1). When every attempt lands outside, the center is
        returned instead.
    """
    if prng is None:
        prng = get_prng()

    for _ in range(max_attempts):
        value = box_muller(prng) * std_dev + center
        if 0.0 <= value < 1.0:
            return value

    logger.warning(
        "Gaussian resampling exhausted, using center",
        attempts=max_attempts,
        center=center,
    )
    return center
