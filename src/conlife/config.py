"""Simulation configuration and logging setup."""

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, TextIO, Union

from .exceptions import ConfigError

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""

    width: int = 64
    height: int = 64
    pattern: Optional[str] = None
    pattern_x: int = 0
    pattern_y: int = 0
    max_generations: int = 10000
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Check every field.

        Raises:
            ConfigError: If a value is out of range
        """
        for name in ("width", "height", "max_generations"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

        for name in ("pattern_x", "pattern_y"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")

        resolve_log_level(self.log_level)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """Build a validated config from a mapping.

        Raises:
            ConfigError: If a key is unknown or a value is invalid
        """
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        config = cls(**data)
        config.validate()
        return config


def resolve_log_level(level: Union[str, int]) -> int:
    """Turn a level name such as "debug" or a numeric level into an int.

    Raises:
        ConfigError: If the level is not recognised
    """
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    if isinstance(level, str):
        value = getattr(logging, level.upper(), None)
        if isinstance(value, int):
            return value
    raise ConfigError(f"Unknown log level {level!r}")


def configure_logging(
    level: Union[str, int] = "INFO", stream: Optional[TextIO] = None
) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this again only changes the level.

    Returns:
        The ``conlife`` logger
    """
    logger = logging.getLogger("conlife")
    logger.setLevel(resolve_log_level(level))

    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
