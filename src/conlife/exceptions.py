"""Exception hierarchy for the conlife package."""

from typing import Iterable, Tuple


class ConlifeError(Exception):
    """Base class for all errors raised by conlife."""


class InvalidDimensionsError(ConlifeError, ValueError):
    """Raised when a grid is constructed with non-positive dimensions."""

    def __init__(self, width: object, height: object) -> None:
        self.width = width
        self.height = height
        super().__init__(
            f"Grid dimensions must be positive integers, got {width!r}x{height!r}"
        )


class OutOfBoundsError(ConlifeError, IndexError):
    """Raised when one or more coordinates fall outside the grid.

    Attributes:
        coordinates: The rejected (x, y) positions
        shape: The grid size as (width, height)
    """

    def __init__(
        self, coordinates: Iterable[Tuple[int, int]], shape: Tuple[int, int]
    ) -> None:
        self.coordinates = list(coordinates)
        self.shape = shape
        listed = ", ".join(f"({x}, {y})" for x, y in self.coordinates)
        super().__init__(
            f"Coordinates {listed} out of bounds for grid of size {shape[0]}x{shape[1]}"
        )


class PatternError(ConlifeError, ValueError):
    """Base class for errors while parsing pattern text."""


class NoCoordinatesFoundError(PatternError):
    """The pattern text contained no coordinates."""

    def __init__(self) -> None:
        super().__init__("No coordinates found in pattern input")


class DuplicateCoordinateError(PatternError):
    """The pattern text listed the same coordinate more than once."""

    def __init__(self, coordinate: Tuple[int, int]) -> None:
        self.coordinate = coordinate
        super().__init__(f"Duplicate coordinate ({coordinate[0]}, {coordinate[1]})")


class BadInputError(PatternError):
    """A token in the pattern text is not a valid (x,y) pair."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Cannot parse coordinate from {token!r}")


class ConfigError(ConlifeError, ValueError):
    """Raised for invalid simulation configuration values."""
