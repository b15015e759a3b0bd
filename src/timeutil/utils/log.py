"""
Logging setup shared by applications that use timeutil.

timeutil modules only ever call logging.getLogger(__name__); they never
configure handlers themselves. Applications (or scripts) call
configure_logging() once at startup to route those records somewhere.
"""

import logging
from typing import Optional

from timeutil.config.settings import TimeUtilSettings


_LOGGING_CONFIGURED = False


def configure_logging(settings: Optional[TimeUtilSettings] = None) -> None:
    """
    Configure process-wide logging once.

    Safe to call multiple times; only the first call has an effect.

    Args:
        settings: Settings to apply. Loaded from the environment if None.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    settings = settings or TimeUtilSettings.from_env()
    logging.basicConfig(level=settings.level, format=settings.log_format)
    _LOGGING_CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger by name (root logger if None)."""
    return logging.getLogger(name)
