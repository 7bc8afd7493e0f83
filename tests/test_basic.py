"""Basic tests for the conlife package."""

import conlife
from conlife import GameOfLife, Grid, PatternLibrary


def test_grid_creation():
    """Test basic grid creation and cell operations."""
    grid = Grid(10, 10)
    assert grid.width == 10
    assert grid.height == 10
    assert grid.get_cell(0, 0) is False

    grid.set_cell(5, 5, True)
    assert grid.get_cell(5, 5) is True


def test_game_creation():
    grid = Grid(5, 5)
    game = GameOfLife(grid)
    assert game.population == 0

    grid.set_cell(2, 2, True)
    assert game.population == 1


def test_pattern_library():
    """Test pattern library has some patterns."""
    patterns = PatternLibrary().list_patterns()
    assert len(patterns) > 0
    assert "Glider" in patterns


def test_glider_round_trip_through_text():
    """Load a glider from text, step it, and read the live cells back."""
    glider = conlife.Pattern.from_string("(0,2) (1,2) (2,2) (1,0) (2,1)", "Glider")
    grid = Grid(8, 8)
    glider.apply_to_grid(grid)

    grid.advance()

    assert list(grid.alive_cells()) == [(0, 1), (2, 1), (1, 2), (2, 2), (1, 3)]


def test_error_hierarchy():
    assert issubclass(conlife.OutOfBoundsError, conlife.ConlifeError)
    assert issubclass(conlife.OutOfBoundsError, IndexError)
    assert issubclass(conlife.BadInputError, conlife.PatternError)
    assert issubclass(conlife.InvalidDimensionsError, ValueError)
