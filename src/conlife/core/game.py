"""Simulation session driving a Game of Life grid."""

import logging
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple

import numpy as np

from ..config import SimulationConfig
from ..exceptions import ConfigError
from .grid import Grid
from .patterns import PatternLibrary

logger = logging.getLogger(__name__)

POPULATION_HISTORY_SIZE = 100
STATE_HISTORY_SIZE = 1000


class GameOfLife:
    """Conway's Game of Life simulation session.

    Steps a Grid forward and keeps track of the generation number,
    recent population counts, and whether the grid has returned to an
    earlier state.
    """

    def __init__(self, grid: Grid, max_generations: int = 10000) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate
            max_generations: Default limit for run_until_stable()
        """
        self.grid = grid
        self.max_generations = max_generations
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=POPULATION_HISTORY_SIZE)
        self._state_history: Deque[bytes] = deque(maxlen=STATE_HISTORY_SIZE)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @classmethod
    def from_config(
        cls, config: SimulationConfig, library: Optional[PatternLibrary] = None
    ) -> "GameOfLife":
        """Build a grid from a config and place its pattern.

        Args:
            config: Simulation settings
            library: Where to look up the pattern name (defaults to built-ins)

        Raises:
            ConfigError: If the config is invalid or names an unknown pattern
            OutOfBoundsError: If the pattern does not fit at its offset
        """
        config.validate()
        grid = Grid(config.width, config.height)

        if config.pattern is not None:
            library = library or PatternLibrary()
            pattern = library.get_pattern(config.pattern)
            if pattern is None:
                raise ConfigError(f"Unknown pattern {config.pattern!r}")
            pattern.apply_to_grid(grid, config.pattern_x, config.pattern_y)

        game = cls(grid, max_generations=config.max_generations)
        logger.info(
            "Created %dx%d game with population %d",
            config.width,
            config.height,
            game.population,
        )
        return game

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> List[int]:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        # The starting state is captured lazily so that cells set after
        # construction are part of it; its population is re-read with it.
        if not self._seen_states:
            self._remember_state()
            self._population_history[-1] = self.population

        self.grid.advance()
        self._generation += 1
        self._update_population_history()
        self._check_for_cycles()

        logger.debug(
            "Generation %d: population %d", self._generation, self.population
        )

    def run(self, generations: int) -> None:
        """Advance the simulation by a fixed number of generations."""
        for _ in range(generations):
            self.step()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _remember_state(self) -> None:
        state = self.grid.cells.tobytes()
        if len(self._state_history) == self._state_history.maxlen:
            # States in the history are unique, so the evicted one can go
            del self._seen_states[self._state_history[0]]
        self._seen_states[state] = self._generation
        self._state_history.append(state)

    def _check_for_cycles(self) -> None:
        """Check whether the current state has been seen before."""
        if self._cycle_detected:
            return

        first_seen = self._seen_states.get(self.grid.cells.tobytes())
        if first_seen is None:
            self._remember_state()
            return

        self._cycle_detected = True
        self._cycle_length = self._generation - first_seen
        self._cycle_start_generation = first_seen
        logger.info(
            "Cycle of length %d detected at generation %d (first seen at %d)",
            self._cycle_length,
            self._generation,
            first_seen,
        )

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0
        self._population_history.clear()
        self.clear_cycle_detection()
        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget every recorded state.

        Call this after editing the grid by hand mid-run.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def run_until_stable(self, max_generations: Optional[int] = None) -> Tuple[int, str]:
        """Run simulation until it dies out or repeats a state.

        Args:
            max_generations: Maximum generations to run (defaults to
                self.max_generations)

        Returns:
            Tuple of (final_generation, reason) where reason is one of
            'extinction', 'cycle', 'max_generations'
        """
        if max_generations is None:
            max_generations = self.max_generations

        for _ in range(max_generations):
            self.step()

            if self.population == 0:
                return self._generation, "extinction"

            if self._cycle_detected:
                return self._generation, "cycle"

        return self._generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over a recent window."""
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict[str, Any]:
        """Get a summary of the current simulation state."""
        bbox = self.grid.get_bounding_box()

        stats: Dict[str, Any] = {
            "generation": self._generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": self.population_history,
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": self.grid.shape,
            "population_density": self.population / (self.grid.width * self.grid.height),
            "bounding_box": bbox,
        }

        if bbox:
            stats["bounding_box_size"] = (bbox[2] - bbox[0] + 1, bbox[3] - bbox[1] + 1)
        else:
            stats["bounding_box_size"] = (0, 0)

        return stats
