"""
Height field: the scalar grid behind the topographic map.

Pointer events raise cells, render ticks read isobands. The field keeps
running extremes for the threshold strategy and a version counter so
repeated isoband reads of an unchanged field reuse the last extraction.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import structlog

from ..config import Settings, settings as default_settings
from ..utils.random import bounded_gaussian, get_prng
from .alea_prng import AleaPRNG
from .grid import GridIndex, GridSize
from .growth import deposit, diffuse
from .isobands import Isoband, extract_isobands
from .presets import Preset
from .thresholds import compute_thresholds

logger = structlog.get_logger()


class GrowthStatus(str, Enum):
    """Outcome of a raise_at call."""

    APPLIED = "applied"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class GrowthResult:
    """What a raise_at call did to the field."""

    status: GrowthStatus
    x: int
    y: int
    center_value: Optional[float] = None
    deposited: Tuple[int, ...] = field(default_factory=tuple)
    diffused: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def applied(self) -> bool:
        return self.status is GrowthStatus.APPLIED


class HeightField:
    """
    Matrix of heights with preset-driven fill and incremental extremes.

    The matrix is a flat row-major float64 array of size.cell_count values.
    min and max are maintained incrementally: initialize, reset, randomize
    and set_matrix rebuild them from the values they write, while raise_at
    only folds in the centre cell's post-deposit value.

    Not thread-safe. A field shared between threads must be guarded by the
    caller.
    """

    def __init__(
        self,
        size: GridSize,
        preset: Union[Preset, str] = Preset.EMPTY,
        config: Optional[Settings] = None,
        seed: Optional[str] = None,
        field_id: Optional[str] = None,
    ):
        """
        Initialize the height field.

        Args:
            size: Grid dimensions
            preset: Fill policy and threshold strategy
            config: Settings, defaults to the module-level settings
            seed: Optional seed for a private Alea PRNG
            field_id: Caller-assigned identity used in log records
        """
        self.config = config or default_settings
        self.field_id = field_id
        self._log = logger.bind(field_id=field_id) if field_id else logger

        if seed is not None:
            self._prng = AleaPRNG(seed)
        else:
            self._prng = None

        self.min = math.inf
        self.max = -math.inf
        self.version = 0
        self._matrix = np.zeros(0, dtype=np.float64)
        self._bands_cache: Optional[Tuple[int, List[Isoband]]] = None

        self.initialize(size, preset)

    @classmethod
    def random(cls, size: GridSize, **kwargs) -> "HeightField":
        """Field filled from the Gaussian sampler."""
        return cls(size, Preset.RANDOM, **kwargs)

    # Properties

    @property
    def matrix(self) -> np.ndarray:
        """Read-only view of the current matrix."""
        view = self._matrix.view()
        view.flags.writeable = False
        return view

    @property
    def cell_count(self) -> int:
        return self.size.cell_count

    @property
    def z_range(self) -> int:
        """Spread of the running extremes, rounded up."""
        return math.ceil(self.max - self.min)

    @property
    def bucket_count(self) -> int:
        """Number of contour intervals needed to reach max."""
        return math.ceil(self.max / self.config.contour_interval)

    # Lifecycle

    def initialize(self, size: GridSize, preset: Union[Preset, str]) -> None:
        """
        Allocate and fill the matrix for a grid size and preset.

        Args:
            size: Grid dimensions
            preset: EMPTY fills with the baseline, RANDOM samples every cell
        """
        self.size = size
        self.grid = GridIndex(size)
        self.preset = Preset.parse(preset)

        if self.preset is Preset.EMPTY:
            self._fill_baseline()
        elif self.preset is Preset.RANDOM:
            self._fill_random()
        else:
            raise ValueError(f"No initializer for preset {self.preset!r}")

        self._touch()
        self._log.debug(
            "Height field initialized",
            width=size.width,
            height=size.height,
            preset=self.preset.value,
            min=self.min,
            max=self.max,
        )

    def resize(self, size: GridSize) -> None:
        """Replace the field with a fresh one of a new size, same preset."""
        self.initialize(size, self.preset)

    def reset(self) -> None:
        """Set every cell, and both extremes, back to the baseline."""
        self._fill_baseline()
        self._touch()
        self._log.debug("Height field reset", baseline=self.config.baseline)

    def randomize(self) -> None:
        """Refill every cell from the bounded Gaussian sampler."""
        self._fill_random()
        self._touch()
        self._log.debug("Height field randomized", min=self.min, max=self.max)

    def _fill_baseline(self) -> None:
        baseline = float(self.config.baseline)
        self._matrix = np.full(self.size.cell_count, baseline, dtype=np.float64)
        self.min = baseline
        self.max = baseline

    def _fill_random(self) -> None:
        prng = self._get_prng()
        scale = self.config.random_scale
        values = np.empty(self.size.cell_count, dtype=np.float64)

        z_min = math.inf
        z_max = -math.inf
        for i in range(self.size.cell_count):
            z = bounded_gaussian(
                prng,
                center=self.config.random_center,
                std_dev=self.config.random_std_dev,
                max_attempts=self.config.max_resample_attempts,
            ) * scale
            if z < z_min:
                z_min = z
            if z > z_max:
                z_max = z
            values[i] = z

        self._matrix = values
        self.min = z_min
        self.max = z_max

    def _get_prng(self) -> AleaPRNG:
        if self._prng is None:
            return get_prng()
        return self._prng

    def _touch(self) -> None:
        self.version += 1
        self._bands_cache = None

    # Reads and writes

    def value(self, x: float, y: float) -> Optional[float]:
        """Value of the cell containing (x, y), or None outside the grid."""
        cell = self.grid.cell(x, y)
        if cell is None:
            return None
        cx, cy = cell
        return float(self._matrix[cy * self.size.width + cx])

    def set_matrix(self, values: Sequence[float]) -> None:
        """
        Replace the matrix wholesale.

        Args:
            values: Row-major values, exactly cell_count of them

        Raises:
            ValueError: if the length does not match the grid
        """
        matrix = np.array(values, dtype=np.float64).reshape(-1)
        if matrix.size != self.size.cell_count:
            raise ValueError(
                f"Matrix of {matrix.size} values cannot replace a "
                f"{self.size.width}x{self.size.height} field"
            )
        self._matrix = matrix
        self.min = float(matrix.min())
        self.max = float(matrix.max())
        self._touch()

    def raise_at(
        self,
        x: float,
        y: float,
        z_delta: Optional[float] = None,
        density: Optional[float] = None,
        diffuse_after: bool = True,
    ) -> GrowthResult:
        """
        Deposit height at a cell and smooth its neighbourhood.

        Args:
            x, y: Grid cell to raise; fractional coordinates are floored
            z_delta: Height added to the cell, defaults to settings.z_delta
            density: Neighbours receive z_delta / density, defaults to
                settings.density
            diffuse_after: Run the diffusion sweep after the deposit

        Returns:
            GrowthResult; an out-of-bounds centre leaves the field untouched
        """
        cell = self.grid.cell(x, y)
        if cell is None:
            self._log.debug("Raise rejected, cell out of bounds", x=x, y=y)
            return GrowthResult(status=GrowthStatus.OUT_OF_BOUNDS, x=x, y=y)
        x, y = cell

        if z_delta is None:
            z_delta = self.config.z_delta
        if density is None:
            density = self.config.density

        deposited = deposit(self._matrix, self.grid, x, y, z_delta, density)
        center = deposited[0]
        z = float(self._matrix[center])

        diffused: List[int] = []
        if diffuse_after:
            diffused = diffuse(
                self._matrix, self.grid, x, y, max_depth=self.config.diffusion_depth
            )

        if z < self.min:
            self.min = z
        if z > self.max:
            self.max = z

        self._touch()
        return GrowthResult(
            status=GrowthStatus.APPLIED,
            x=x,
            y=y,
            center_value=z,
            deposited=tuple(deposited),
            diffused=tuple(diffused),
        )

    # Contours

    def thresholds(self) -> List[float]:
        """Band boundaries for the current extremes and preset."""
        return compute_thresholds(
            self.min,
            self.max,
            self.preset,
            contour_interval=self.config.contour_interval,
            baseline=self.config.baseline,
        )

    def isobands(self) -> List[Isoband]:
        """
        Contour bands for the current field.

        Recomputed after any mutation; otherwise the previous extraction for
        the same version is returned.
        """
        if self._bands_cache is None or self._bands_cache[0] != self.version:
            bands = extract_isobands(
                self._matrix, self.size, self.thresholds(), simplify=self.config.simplify
            )
            self._bands_cache = (self.version, bands)

        # Callers own what they get back
        return [band.model_copy(deep=True) for band in self._bands_cache[1]]
