"""Grid data structure for Conway's Game of Life on a bounded board."""

import logging
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from ..exceptions import InvalidDimensionsError, OutOfBoundsError

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

MAX_NEIGHBOURS = 8


def next_state(alive: bool, live_neighbours: int) -> bool:
    """Apply the B3/S23 rule to a single cell.

    Args:
        alive: Current state of the cell
        live_neighbours: Number of live cells in its Moore neighbourhood

    Returns:
        State of the cell in the next generation
    """
    if live_neighbours <= 1:
        # Underpopulation
        return False
    if live_neighbours == 2:
        return alive
    if live_neighbours == 3:
        # Survival or birth
        return True
    # Overpopulation
    return False


# Next state indexed by live-neighbour count, one table per current state
_NEXT_IF_DEAD = np.array(
    [next_state(False, count) for count in range(MAX_NEIGHBOURS + 1)], dtype=np.int8
)
_NEXT_IF_ALIVE = np.array(
    [next_state(True, count) for count in range(MAX_NEIGHBOURS + 1)], dtype=np.int8
)

_MOORE_KERNEL = (
    torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32)
    .unsqueeze(0)
    .unsqueeze(0)
)


class Cell(NamedTuple):
    """Read-only view of one cell: its position, state and neighbours."""

    x: int
    y: int
    alive: bool
    neighbour_coordinates: Tuple[Coordinate, ...]


def _is_dimension(value: object) -> bool:
    return (
        isinstance(value, (int, np.integer))
        and not isinstance(value, bool)
        and value > 0
    )


class Grid:
    """A fixed-size, non-wrapping 2D grid for Conway's Game of Life.

    Cell states live in two flat numpy buffers that swap roles on every
    call to advance(). Each buffer has one extra trailing slot that is
    never written and therefore always dead; neighbour tables point
    unused entries at it.

    Each cell's Moore neighbourhood is computed once at construction.
    Cells on the border simply have fewer neighbours.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            InvalidDimensionsError: If either dimension is not a positive integer
        """
        if not (_is_dimension(width) and _is_dimension(height)):
            raise InvalidDimensionsError(width, height)

        self.width = int(width)
        self.height = int(height)
        self._size = self.width * self.height
        self._front = np.zeros(self._size + 1, dtype=np.int8)
        self._back = np.zeros(self._size + 1, dtype=np.int8)
        self._advanced = False

        # Single-threaded torch for the convolution cross-check
        torch.set_num_threads(1)

        self._neighbours = self._compute_neighbours()
        self._neighbour_index = self._build_neighbour_index()

        logger.info("Initialized %dx%d grid", self.width, self.height)

    def _compute_neighbours(self) -> List[List[Tuple[Coordinate, ...]]]:
        """Compute the in-bounds Moore neighbourhood of every cell.

        Returns:
            Neighbour coordinates indexed by [row][column]
        """
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                x_candidates = [x]
                y_candidates = [y]

                if x > 0:
                    x_candidates.append(x - 1)
                if x < self.width - 1:
                    x_candidates.append(x + 1)
                if y > 0:
                    y_candidates.append(y - 1)
                if y < self.height - 1:
                    y_candidates.append(y + 1)

                row.append(
                    tuple(
                        (nx, ny)
                        for nx in x_candidates
                        for ny in y_candidates
                        if (nx, ny) != (x, y)
                    )
                )
            rows.append(row)
        return rows

    def _build_neighbour_index(self) -> np.ndarray:
        """Pack the neighbour lists into a (cells, 8) table of flat indices.

        Slots past a cell's real neighbour count hold the sentinel index.
        """
        index = np.full((self._size, MAX_NEIGHBOURS), self._size, dtype=np.intp)
        for y, row in enumerate(self._neighbours):
            for x, neighbours in enumerate(row):
                flat = [ny * self.width + nx for nx, ny in neighbours]
                index[y * self.width + x, : len(flat)] = flat
        return index

    @property
    def cells(self) -> np.ndarray:
        """Current generation as a (height, width) array indexed [y, x].

        The array is a view of the live buffer; re-read it after advance().
        """
        return self._front[: self._size].reshape(self.height, self.width)

    @property
    def previous_cells(self) -> np.ndarray:
        """Generation before the most recent advance(), indexed [y, x]."""
        return self._back[: self._size].reshape(self.height, self.width)

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._front[: self._size]))

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies on the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError([(x, y)], self.shape)

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            True if cell is alive, False if dead

        Raises:
            OutOfBoundsError: If coordinates are outside the grid
        """
        self._check_bounds(x, y)
        return bool(self._front[y * self.width + x])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell.

        Raises:
            OutOfBoundsError: If coordinates are outside the grid
        """
        self._check_bounds(x, y)
        self._front[y * self.width + x] = 1 if alive else 0

    def neighbours(self, x: int, y: int) -> Tuple[Coordinate, ...]:
        """Get the precomputed neighbour coordinates of a cell."""
        self._check_bounds(x, y)
        return self._neighbours[y][x]

    def cell(self, x: int, y: int) -> Cell:
        """Get a read-only view of the cell at (x, y)."""
        return Cell(x, y, self.get_cell(x, y), self.neighbours(x, y))

    def neighbour_count(self, x: int, y: int) -> int:
        """Count living neighbours of a cell.

        Returns:
            Number of living neighbours (0-8)
        """
        return sum(
            int(self._front[ny * self.width + nx]) for nx, ny in self.neighbours(x, y)
        )

    def _live_neighbour_counts(self) -> np.ndarray:
        return self._front[self._neighbour_index].sum(axis=1)

    def count_all_neighbours(self) -> np.ndarray:
        """Count living neighbours for every cell using the precomputed table.

        Returns:
            (height, width) array of neighbour counts
        """
        return self._live_neighbour_counts().reshape(self.height, self.width)

    def convolution_neighbour_counts(self) -> np.ndarray:
        """Count living neighbours for every cell with a torch convolution.

        Zero padding makes the border behave as permanently dead cells,
        so the result must equal count_all_neighbours().

        Returns:
            (height, width) array of neighbour counts
        """
        state = torch.from_numpy(self.cells.astype(np.float32)).reshape(
            1, 1, self.height, self.width
        )
        counts = F.conv2d(state, _MOORE_KERNEL, padding=1)
        return counts[0, 0].numpy().astype(np.int64)

    def advance(self) -> None:
        """Advance the grid by one generation.

        Every count is taken from the current buffer before anything is
        written; the next generation goes into the back buffer, which then
        becomes the current one.
        """
        counts = self._live_neighbour_counts()
        current = self._front[: self._size]
        self._back[: self._size] = np.where(
            current > 0, _NEXT_IF_ALIVE[counts], _NEXT_IF_DEAD[counts]
        )
        self._front, self._back = self._back, self._front
        self._advanced = True

    def load(self, coordinates: Iterable[Coordinate], offset: Coordinate = (0, 0)) -> None:
        """Mark cells alive at the given coordinates, shifted by offset.

        Either every coordinate is applied or none is.

        Args:
            coordinates: (x, y) positions relative to the offset
            offset: (x, y) shift applied to every coordinate

        Raises:
            OutOfBoundsError: Listing every shifted coordinate outside the grid
        """
        offset_x, offset_y = offset
        targets = [(x + offset_x, y + offset_y) for x, y in coordinates]

        rejected = [(x, y) for x, y in targets if not self.in_bounds(x, y)]
        if rejected:
            raise OutOfBoundsError(rejected, self.shape)

        for x, y in targets:
            self._front[y * self.width + x] = 1

        logger.debug("Loaded %d cells at offset (%d, %d)", len(targets), offset_x, offset_y)

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._front.fill(0)

    def alive_cells(self) -> Iterator[Coordinate]:
        """Iterate over living cells in row-then-column order.

        Yields:
            Tuples of (x, y) coordinates
        """
        ys, xs = np.nonzero(self.cells)
        for x, y in zip(xs, ys):
            yield (int(x), int(y))

    def get_changed_cells(self) -> Iterator[Coordinate]:
        """Get coordinates of cells that differ from the previous generation.

        Compares the current cells with the generation before the most
        recent advance(), so edits made by hand since then also count.
        Yields nothing before the first advance().

        Yields:
            Tuples of (x, y) coordinates for changed cells
        """
        if not self._advanced:
            return
        ys, xs = np.nonzero(self.cells != self.previous_cells)
        for x, y in zip(xs, ys):
            yield (int(x), int(y))

    def log_alive_cells(self) -> None:
        """Write the coordinates of the living cells to the debug log."""
        if logger.isEnabledFor(logging.DEBUG):
            listed = ", ".join(f"({x}, {y})" for x, y in self.alive_cells())
            logger.debug("Alive cells: %s", listed or "none")

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        ys, xs = np.nonzero(self.cells)
        if len(xs) == 0:
            return None
        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def __eq__(self, other: object) -> bool:
        """Check if two grids hold the same generation."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self.cells, other.cells)

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join(
            "".join("*" if alive else "." for alive in row) for row in self.cells
        )
