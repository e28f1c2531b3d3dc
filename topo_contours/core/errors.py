"""Exceptions raised by the height-field engine."""


class TopoError(Exception):
    """Base class for all topo_contours errors."""


class InvalidGridSize(TopoError, ValueError):
    """Grid dimensions that cannot back a height field."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        super().__init__(
            f"Grid size must be positive integers, got width={width!r} height={height!r}"
        )


class OutOfBounds(TopoError, IndexError):
    """A coordinate or index outside the half-open grid range."""

    def __init__(self, x, y=None, width=None, height=None):
        self.x = x
        self.y = y
        if y is None:
            message = f"Index {x} outside grid of {width}x{height} cells"
        else:
            message = f"Cell ({x}, {y}) outside grid [0, {width}) x [0, {height})"
        super().__init__(message)
