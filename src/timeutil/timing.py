"""
Elapsed-time instrumentation for units of work.

Each helper here runs a caller-supplied piece of work, measures how long it
took on the process-wide clock (timeutil.now), and emits exactly one INFO
line on every exit path:

    <tag> (true) elapsed time(ms): 12
    <tag> (false) elapsed time(ms): 3

The flag is false when the work raised. The exception itself is never caught
or transformed; it reaches the caller unchanged after the line is logged.

Because time is read through timeutil.now, freezing the shared clock makes
the reported elapsed time deterministic in tests.
"""

import functools
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from timeutil.now import current_time_millis


LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def _log_elapsed(tag: str, success: bool, elapsed_ms: int) -> None:
    LOGGER.info(
        "%s (%s) elapsed time(ms): %d",
        tag,
        "true" if success else "false",
        elapsed_ms,
    )


def log_elapsed_time(tag: str, task: Callable[[], T]) -> T:
    """
    Run task once and log how long it took.

    **Functionally**:
    - task is any zero-argument callable. Its return value is passed back to
      the caller; a task that returns nothing yields None.
    - Exactly one log line is emitted whether task returns or raises.
    - Any exception raised by task propagates unchanged.

    **Usage**:
        rows = log_elapsed_time("load rows", lambda: store.load(day))
        log_elapsed_time("flush cache", cache.flush)

    Args:
        tag: Label written at the start of the log line.
        task: The unit of work.

    Returns:
        Whatever task returned.
    """
    start = current_time_millis()
    success = False

    try:
        value = task()
        success = True

        return value
    finally:
        _log_elapsed(tag, success, current_time_millis() - start)


@contextmanager
def elapsed_time(tag: str) -> Iterator[None]:
    """
    Context-manager form of log_elapsed_time.

    **Usage**:
        with elapsed_time("rebuild index"):
            index.rebuild()
    """
    start = current_time_millis()
    success = False

    try:
        yield
        success = True
    finally:
        _log_elapsed(tag, success, current_time_millis() - start)


def timed(tag: Optional[str] = None) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator form of log_elapsed_time.

    The tag defaults to the decorated function's qualified name.

    **Usage**:
        @timed()
        def refresh():
            ...

        @timed("nightly export")
        def export(day):
            ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        label = tag if tag is not None else func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            return log_elapsed_time(label, lambda: func(*args, **kwargs))

        return wrapper

    return decorator
