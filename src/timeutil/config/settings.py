"""
Configuration settings for timeutil.

**Conceptual**: This module provides a strongly-typed configuration object that
loads from environment variables (optionally via a .env file at the project
root). Settings are validated when they are built, so a typo such as
TIMEUTIL_LOG_LEVEL=VERBOSE fails fast with a clear message instead of
silently logging at the wrong level.

The library itself needs very little configuration: only how its log output
(elapsed-time lines, registry build summary) is emitted.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


# Load .env from project root (src/timeutil/config -> repo root)
env_path = Path(__file__).resolve().parents[3] / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class TimeUtilSettings:
    """
    Logging configuration for timeutil.

    Attributes:
        log_level: Name of the logging level (e.g. "INFO", "DEBUG").
                   Case-insensitive; stored upper-cased.
        log_format: logging.Formatter format string.
    """
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT

    def __post_init__(self):
        """Validate settings after initialization."""
        level = (self.log_level or "").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(
                f"TIMEUTIL_LOG_LEVEL must be a logging level name "
                f"(DEBUG, INFO, WARNING, ERROR, CRITICAL), got: {self.log_level!r}"
            )
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "log_level", level)

        if not self.log_format:
            raise ValueError("TIMEUTIL_LOG_FORMAT must not be empty.")

    @property
    def level(self) -> int:
        """Numeric logging level for log_level."""
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls) -> "TimeUtilSettings":
        """
        Load settings from environment variables.

        **Environment variables**:
          - TIMEUTIL_LOG_LEVEL (optional): Defaults to "INFO".
          - TIMEUTIL_LOG_FORMAT (optional): Defaults to
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s".

        Returns:
            TimeUtilSettings object with values loaded from environment.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        return cls(
            log_level=os.getenv("TIMEUTIL_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            log_format=os.getenv("TIMEUTIL_LOG_FORMAT", DEFAULT_LOG_FORMAT),
        )
