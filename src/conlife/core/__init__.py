"""Core cellular automata logic."""

from .grid import Cell, Grid, next_state
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary, parse_coordinates

__all__ = [
    "Cell",
    "Grid",
    "next_state",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
    "parse_coordinates",
]
