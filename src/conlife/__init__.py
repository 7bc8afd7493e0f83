"""Conway's Game of Life on a fixed-size, non-wrapping grid."""

__version__ = "0.1.0"

from .core.grid import Cell, Grid, next_state
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary, parse_coordinates
from .config import SimulationConfig, configure_logging
from .exceptions import (
    BadInputError,
    ConfigError,
    ConlifeError,
    DuplicateCoordinateError,
    InvalidDimensionsError,
    NoCoordinatesFoundError,
    OutOfBoundsError,
    PatternError,
)

__all__ = [
    "Cell",
    "Grid",
    "next_state",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
    "parse_coordinates",
    "SimulationConfig",
    "configure_logging",
    "ConlifeError",
    "InvalidDimensionsError",
    "OutOfBoundsError",
    "PatternError",
    "NoCoordinatesFoundError",
    "DuplicateCoordinateError",
    "BadInputError",
    "ConfigError",
]
