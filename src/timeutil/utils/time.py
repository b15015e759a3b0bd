"""
Time and clock abstractions for deterministic testing.

This module provides a simple, testable way to obtain "now" via a clock object
rather than calling datetime.now() directly. Every clock answers in two
representations: a timezone-aware datetime (now()) and whole milliseconds
since the Unix epoch (millis()). The millisecond form is what elapsed-time
measurements and the process-wide clock override operate on.

Depending on a Clock abstraction instead of system time makes code testable
and reproducible: tests can "freeze" time at a chosen instant and step it
forward explicitly instead of sleeping.
"""

import time
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Protocol


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)


def to_epoch_millis(instant: datetime) -> int:
    """
    Convert a timezone-aware datetime into milliseconds since the Unix epoch.

    **Functionally**:
    - Sub-millisecond precision is dropped by flooring, so instants before
      the epoch round toward negative infinity (same as integer division).
    - The datetime's own zone does not matter: two datetimes naming the same
      instant in different zones give the same result.

    Args:
        instant: Timezone-aware datetime.

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z.

    Raises:
        TypeError: If instant is not a datetime.
        ValueError: If instant is naive (no tzinfo).
    """
    if not isinstance(instant, datetime):
        raise TypeError(f"Expected datetime, got {type(instant).__name__}: {instant!r}")
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError(
            f"Cannot convert naive datetime {instant} to epoch millis. "
            "Attach a timezone first (e.g. tzinfo=timezone.utc)."
        )
    return (instant - EPOCH) // _ONE_MILLISECOND


def from_epoch_millis(millis: int, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert milliseconds since the Unix epoch into an aware datetime.

    Args:
        millis: Milliseconds since 1970-01-01T00:00:00Z.
        tz: Zone to express the result in. Defaults to UTC.

    Returns:
        Timezone-aware datetime for that instant.
    """
    instant = EPOCH + timedelta(milliseconds=int(millis))
    if tz is None:
        return instant
    return instant.astimezone(tz)


def duration_millis(duration: timedelta) -> int:
    """
    Return a duration's length in whole milliseconds (floored).

    Raises:
        TypeError: If duration is not a timedelta.
    """
    if not isinstance(duration, timedelta):
        raise TypeError(f"Expected timedelta, got {type(duration).__name__}: {duration!r}")
    return duration // _ONE_MILLISECOND


class Clock(Protocol):
    """
    Abstract time source protocol.

    **Conceptual**: A Clock is any object that can answer the question "what time
    is it right now?" By depending on this abstraction instead of directly calling
    datetime.now() or time.time(), code becomes testable and deterministic.

    **Usage**: Consumers should accept a Clock instance (injected via constructor
    or function parameter) and call clock.now() or clock.millis() whenever they
    need the current time. In production, pass a RealClock; in tests, pass a
    FrozenClock and move it with set()/advance().

    **Example**:
        def expires_at(clock: Clock, ttl: timedelta) -> datetime:
            return clock.now() + ttl

        # In production:
        expires_at(RealClock(), timedelta(minutes=5))

        # In tests:
        expires_at(FrozenClock(datetime(2015, 1, 5, tzinfo=timezone.utc)), timedelta(minutes=5))
    """

    def now(self) -> datetime:
        """
        Return the current time according to this clock.

        Returns:
            datetime object representing "now" (timezone-aware, UTC preferred).
        """
        ...

    def millis(self) -> int:
        """
        Return the current time as milliseconds since the Unix epoch.
        """
        ...


class RealClock:
    """
    Clock that returns the actual current system time (UTC).

    **Usage**:
        clock = RealClock()
        current_time = clock.now()    # Current UTC time
        current_ms = clock.millis()   # Current epoch millis
    """

    def now(self) -> datetime:
        """
        Return the current UTC time from the system clock.

        Returns:
            datetime object with current time in UTC timezone.
        """
        return datetime.now(timezone.utc)

    def millis(self) -> int:
        # time_ns avoids float rounding for large epoch values
        return time.time_ns() // 1_000_000

    def __repr__(self) -> str:
        return "RealClock()"


class FrozenClock:
    """
    Clock that returns a fixed timestamp until it is explicitly moved.

    **Conceptual**: Use this in tests to simulate being at a specific point in
    time. FrozenClock "freezes" time to a configured timestamp, making code
    deterministic and reproducible. Unlike the wall clock, it only moves when
    told to: set() jumps to a new instant, advance() steps forward (or back,
    with a negative duration).

    **Usage**:
        # Freeze time to January 5, 2015 at midnight UTC
        clock = FrozenClock(datetime(2015, 1, 5, tzinfo=timezone.utc))
        clock.now()                          # 2015-01-05T00:00:00+00:00
        clock.advance(timedelta(hours=1))
        clock.now()                          # 2015-01-05T01:00:00+00:00

    **Thread safety**: none. A FrozenClock is meant to be driven from a
    single test thread.
    """

    def __init__(self, fixed_now: datetime):
        """
        Initialize a FrozenClock with a fixed timestamp.

        Args:
            fixed_now: The datetime to return on every call to now().
                       Must be timezone-aware.

        Raises:
            ValueError: If fixed_now is naive.
        """
        # Validates type and awareness up front
        to_epoch_millis(fixed_now)
        self._fixed_now = fixed_now

    @classmethod
    def from_millis(cls, millis: int) -> "FrozenClock":
        """Create a FrozenClock fixed at the given epoch millis (UTC)."""
        return cls(from_epoch_millis(millis))

    def now(self) -> datetime:
        """
        Return the configured fixed timestamp.

        Returns:
            The datetime most recently set (initially the constructor value).
        """
        return self._fixed_now

    def millis(self) -> int:
        return to_epoch_millis(self._fixed_now)

    def set(self, instant: datetime) -> None:
        """
        Move the clock to a new fixed instant.

        Raises:
            ValueError: If instant is naive.
        """
        to_epoch_millis(instant)
        self._fixed_now = instant

    def advance(self, duration: timedelta) -> None:
        """
        Move the clock forward by duration (negative durations move it back).

        Raises:
            TypeError: If duration is not a timedelta.
        """
        duration_millis(duration)
        self._fixed_now = self._fixed_now + duration

    def __repr__(self) -> str:
        return f"FrozenClock({self._fixed_now.isoformat()})"


def get_real_clock() -> Clock:
    """
    Factory function to create a RealClock instance.

    Useful for dependency injection or config-driven clock selection.

    Returns:
        RealClock instance.
    """
    return RealClock()


def get_frozen_clock(fixed_now: datetime) -> Clock:
    """
    Factory function to create a FrozenClock with a given timestamp.

    **Usage**:
        clock = get_frozen_clock(datetime(2015, 1, 5, tzinfo=timezone.utc))
        # Pass clock to functions/classes that need deterministic time

    Args:
        fixed_now: The datetime to freeze at (timezone-aware).

    Returns:
        FrozenClock instance configured with fixed_now.
    """
    return FrozenClock(fixed_now)
