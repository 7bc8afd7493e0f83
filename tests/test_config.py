"""Tests for SimulationConfig and logging setup."""

import io
import logging

import pytest

from conlife.config import SimulationConfig, configure_logging, resolve_log_level
from conlife.core.grid import Grid
from conlife.exceptions import ConfigError


@pytest.fixture
def package_logger():
    """Restore the package logger after a test configures it."""
    logger = logging.getLogger("conlife")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestSimulationConfig:
    """Test cases for SimulationConfig."""

    def test_defaults_are_valid(self):
        config = SimulationConfig()
        config.validate()
        assert (config.width, config.height) == (64, 64)
        assert config.pattern is None

    @pytest.mark.parametrize(
        "field,value",
        [
            ("width", 0),
            ("height", -3),
            ("width", 2.0),
            ("max_generations", 0),
            ("pattern_x", -1),
            ("pattern_y", "1"),
            ("log_level", "chatty"),
        ],
    )
    def test_invalid_values(self, field, value):
        config = SimulationConfig(**{field: value})
        with pytest.raises(ConfigError):
            config.validate()

    def test_from_dict(self):
        config = SimulationConfig.from_dict({"width": 8, "height": 4, "pattern": "Glider"})
        assert config.width == 8
        assert config.height == 4
        assert config.pattern == "Glider"

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigError, match="toroidal"):
            SimulationConfig.from_dict({"width": 8, "toroidal": True})

    def test_from_dict_invalid_value(self):
        with pytest.raises(ConfigError):
            SimulationConfig.from_dict({"height": 0})


class TestLogging:
    """Test cases for logging configuration."""

    def test_resolve_log_level(self):
        assert resolve_log_level("debug") == logging.DEBUG
        assert resolve_log_level("WARNING") == logging.WARNING
        assert resolve_log_level(15) == 15

        with pytest.raises(ConfigError):
            resolve_log_level("verbose")

    def test_configure_logging(self, package_logger):
        stream = io.StringIO()
        package_logger.handlers = []

        logger = configure_logging("debug", stream=stream)
        configure_logging("debug", stream=stream)

        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

        grid = Grid(3, 3)
        grid.load([(1, 1)])
        grid.log_alive_cells()

        output = stream.getvalue()
        assert "Initialized 3x3 grid" in output
        assert "Alive cells: (1, 1)" in output

    def test_log_alive_cells_empty(self, caplog):
        grid = Grid(2, 2)
        with caplog.at_level(logging.DEBUG, logger="conlife"):
            grid.log_alive_cells()
        assert "Alive cells: none" in caplog.text
