"""Pattern text parsing and a library of well-known Game of Life patterns."""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import (
    BadInputError,
    DuplicateCoordinateError,
    NoCoordinatesFoundError,
    PatternError,
)
from .grid import Coordinate, Grid

logger = logging.getLogger(__name__)

PATTERN_SUFFIX = ".life"

_COMMA = re.compile(r"\s*,\s*")
_PAIR = re.compile(r"([0-9]+),([0-9]+)")


def parse_coordinates(text: str) -> List[Coordinate]:
    """Parse whitespace-separated ``(x,y)`` tokens into coordinates.

    Parentheses are ignored, as is whitespace on either side of a comma,
    so ``(0, 2)`` and ``0,2`` are both accepted.

    Args:
        text: Pattern text, e.g. ``"(0,2) (1,2) (2,2) (1,0) (2,1)"``

    Returns:
        Coordinates in the order they appear

    Raises:
        BadInputError: If a token is not a pair of non-negative integers
        DuplicateCoordinateError: If a coordinate appears twice
        NoCoordinatesFoundError: If the text holds no coordinates
    """
    buffer = text.replace("(", " ").replace(")", " ")
    buffer = _COMMA.sub(",", buffer)

    coordinates: List[Coordinate] = []
    seen = set()
    for token in buffer.split():
        match = _PAIR.fullmatch(token)
        if match is None:
            raise BadInputError(token)

        coordinate = (int(match.group(1)), int(match.group(2)))
        if coordinate in seen:
            raise DuplicateCoordinateError(coordinate)
        seen.add(coordinate)
        coordinates.append(coordinate)

    if not coordinates:
        raise NoCoordinatesFoundError()
    return coordinates


class Pattern:
    """Represents a Game of Life pattern."""

    def __init__(
        self,
        name: str,
        cells: List[Coordinate],
        description: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (x, y) coordinates for living cells
            description: Optional description
            metadata: Optional metadata dictionary
        """
        self.name = name
        self.cells = cells
        self.description = description
        self.metadata = metadata or {}

    @classmethod
    def from_string(
        cls, text: str, name: str = "Untitled", description: str = ""
    ) -> "Pattern":
        """Create a pattern from ``(x,y)`` coordinate text.

        Raises:
            PatternError: If the text cannot be parsed
        """
        return cls(name, parse_coordinates(text), description)

    @classmethod
    def from_file(
        cls, path: Union[str, Path], name: Optional[str] = None
    ) -> "Pattern":
        """Load a pattern from a file, usually with a ``.life`` extension.

        Args:
            path: File to read
            name: Pattern name (defaults to the file stem)

        Raises:
            FileNotFoundError: If the file doesn't exist
            PatternError: If the contents cannot be parsed
        """
        path = Path(path)
        pattern = cls.from_string(path.read_text(), name or path.stem)
        pattern.metadata["source"] = str(path)
        logger.info("Loaded pattern from %s: %d live cells", path, len(pattern.cells))
        return pattern

    @classmethod
    def from_grid(cls, grid: Grid, name: str, description: str = "") -> "Pattern":
        """Create pattern from current grid state."""
        cells = list(grid.alive_cells())
        metadata = {"source_grid_size": grid.shape, "population": len(cells)}
        return cls(name, cells, description, metadata)

    def to_string(self) -> str:
        """Render the pattern in the ``(x,y)`` text format."""
        return " ".join(f"({x},{y})" for x, y in self.cells)

    def apply_to_grid(
        self, grid: Grid, offset_x: int = 0, offset_y: int = 0, clear: bool = False
    ) -> None:
        """Apply this pattern to a grid.

        Args:
            grid: Target grid
            offset_x: Horizontal offset
            offset_y: Vertical offset
            clear: Whether to kill every cell on the grid first

        Raises:
            OutOfBoundsError: If any shifted cell falls outside the grid
        """
        if clear:
            grid.clear()
        grid.load(self.cells, (offset_x, offset_y))

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (width, height)."""
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern shifted so its bounding box starts at (0, 0)."""
        min_x, min_y, _, _ = self.get_bounding_box()
        cells = [(x - min_x, y - min_y) for x, y in self.cells]
        return Pattern(self.name, cells, self.description, self.metadata.copy())

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells)"


# name: (category, description, cells)
_BUILTIN_PATTERNS = {
    "Block": ("Still Life", "2x2 still life block", "(0,0) (1,0) (0,1) (1,1)"),
    "Beehive": (
        "Still Life",
        "Beehive still life",
        "(1,0) (2,0) (0,1) (3,1) (1,2) (2,2)",
    ),
    "Loaf": (
        "Still Life",
        "Loaf still life",
        "(1,0) (2,0) (0,1) (3,1) (1,2) (3,2) (2,3)",
    ),
    "Blinker": ("Oscillators", "Period-2 oscillator", "(0,1) (1,1) (2,1)"),
    "Toad": (
        "Oscillators",
        "Period-2 oscillator",
        "(1,0) (2,0) (3,0) (0,1) (1,1) (2,1)",
    ),
    "Beacon": (
        "Oscillators",
        "Period-2 oscillator",
        "(0,0) (1,0) (0,1) (3,2) (2,3) (3,3)",
    ),
    "Glider": (
        "Spaceships",
        "Smallest spaceship, period-4",
        "(0,2) (1,2) (2,2) (1,0) (2,1)",
    ),
    "Lightweight Spaceship": (
        "Spaceships",
        "LWSS - Period-4 spaceship",
        "(0,0) (3,0) (4,1) (0,2) (4,2) (1,3) (2,3) (3,3) (4,3)",
    ),
    "R-pentomino": (
        "Methuselahs",
        "Famous methuselah that stabilizes after 1103 generations",
        "(1,0) (2,0) (0,1) (1,1) (1,2)",
    ),
    "Diehard": (
        "Methuselahs",
        "Dies after exactly 130 generations",
        "(6,0) (0,1) (1,1) (1,2) (5,2) (6,2) (7,2)",
    ),
    "Acorn": (
        "Methuselahs",
        "Takes 5206 generations to stabilize",
        "(1,0) (3,1) (0,2) (1,2) (4,2) (5,2) (6,2)",
    ),
}


class PatternLibrary:
    """Manages a collection of named patterns."""

    def __init__(self, include_builtins: bool = True) -> None:
        self._patterns: Dict[str, Pattern] = {}
        if include_builtins:
            self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        for name, (category, description, text) in _BUILTIN_PATTERNS.items():
            pattern = Pattern.from_string(text, name, description)
            pattern.metadata["category"] = category
            self.add_pattern(pattern)

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing any with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get pattern names grouped by category.

        Patterns without a category are listed under "Custom".
        """
        categories: Dict[str, List[str]] = {}
        for name, pattern in self._patterns.items():
            category = pattern.metadata.get("category", "Custom")
            categories.setdefault(category, []).append(name)
        return categories

    def load_pattern(self, path: Union[str, Path], name: Optional[str] = None) -> Pattern:
        """Load a pattern file and add it to the library.

        Raises:
            FileNotFoundError: If the file doesn't exist
            PatternError: If the contents cannot be parsed
        """
        pattern = Pattern.from_file(path, name)
        self.add_pattern(pattern)
        return pattern

    def load_directory(self, directory: Union[str, Path]) -> List[Pattern]:
        """Load every ``.life`` file in a directory.

        Files that fail to parse are logged and skipped.

        Returns:
            The patterns that were loaded
        """
        loaded = []
        for path in sorted(Path(directory).glob(f"*{PATTERN_SUFFIX}")):
            try:
                loaded.append(self.load_pattern(path))
            except PatternError as e:
                logger.warning("Failed to load pattern from %s: %s", path.name, e)
        return loaded

    def __contains__(self, name: object) -> bool:
        return name in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)
