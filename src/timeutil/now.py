"""
Process-wide "current time" with test overrides.

**Conceptual**: Library code that cannot take an injected Clock (for example,
the elapsed-time wrappers in timeutil.timing) reads time through this module
instead of calling the system clock directly. Tests can then freeze that
shared clock at a known instant, step it forward, and restore real time
afterwards.

**Usage**:
    set_now(datetime(2015, 1, 5, tzinfo=timezone.utc))
    current_time_millis()                 # 1420416000000
    advance_now(timedelta(seconds=30))
    current_time_millis()                 # 1420416030000
    reset_now()                           # back to the wall clock

**Thread safety**: NOT thread safe. The shared clock is a plain module
global swapped without locking; two threads calling set_now()/advance_now()
concurrently can lose an update. Confine overrides to single-threaded test
setup and teardown.
"""

from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Iterator

from timeutil.utils.time import (
    Clock,
    FrozenClock,
    RealClock,
    duration_millis,
    to_epoch_millis,
)


_clock: Clock = RealClock()


def get_clock() -> Clock:
    """Return the clock currently backing the process-wide time."""
    return _clock


def use_clock(clock: Clock) -> Clock:
    """
    Install clock as the process-wide time source.

    Args:
        clock: Any object implementing the Clock protocol.

    Returns:
        The previously installed clock, so callers can restore it.
    """
    global _clock
    previous = _clock
    _clock = clock
    return previous


def current_time_millis() -> int:
    """Return the process-wide current time in epoch milliseconds."""
    return _clock.millis()


def now() -> datetime:
    """Return the process-wide current time as an aware datetime."""
    return _clock.now()


def set_now(instant: datetime) -> None:
    """
    Freeze the process-wide clock at instant's millisecond value.

    All subsequent reads through current_time_millis()/now() return this
    value until set_now(), advance_now() or reset_now() is called again.

    Raises:
        ValueError: If instant is naive.
    """
    use_clock(FrozenClock.from_millis(to_epoch_millis(instant)))


def advance_now(duration: timedelta) -> None:
    """
    Re-freeze the process-wide clock at (current time + duration).

    "Current time" is whatever the shared clock reports right now: the
    previously frozen value if set_now() was called, otherwise the wall clock.
    """
    current = current_time_millis()
    use_clock(FrozenClock.from_millis(current + duration_millis(duration)))


def reset_now() -> None:
    """Restore the real system clock as the process-wide time source."""
    use_clock(RealClock())


@contextmanager
def frozen_time(instant: datetime) -> Iterator[Clock]:
    """
    Freeze the process-wide clock at instant for the duration of a with-block.

    The previously installed clock is restored on exit, including when the
    block raises.

    **Usage**:
        with frozen_time(datetime(2020, 7, 4, tzinfo=timezone.utc)):
            advance_now(timedelta(minutes=1))
            ...
    """
    previous = get_clock()
    set_now(instant)
    try:
        yield get_clock()
    finally:
        use_clock(previous)
