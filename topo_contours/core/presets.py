"""Field presets.

A preset picks the initial fill of the matrix and the threshold formula
together; the two are never chosen independently.
"""

from enum import Enum
from typing import Union


class Preset(str, Enum):
    """Fill policy and threshold strategy of a height field."""

    EMPTY = "empty"
    RANDOM = "random"

    @classmethod
    def parse(cls, value: Union["Preset", str]) -> "Preset":
        """Resolve a preset member or its selector string."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for preset in cls:
                if preset.value == normalized:
                    return preset
        choices = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown preset {value!r}, expected one of: {choices}")
