"""
timeutil - small time helpers shared across services.

- Timezone lookups backed by a table precomputed at import
  (get_time_zone, get_chronology).
- Elapsed-time logging around a unit of work
  (log_elapsed_time, elapsed_time, timed).
- A process-wide "current time" that tests can freeze and advance
  (set_now, advance_now, reset_now, current_time_millis).
"""

from timeutil.now import (
    advance_now,
    current_time_millis,
    frozen_time,
    get_clock,
    now,
    reset_now,
    set_now,
    use_clock,
)
from timeutil.timing import elapsed_time, log_elapsed_time, timed
from timeutil.zones.chronology import IsoChronology
from timeutil.zones.registry import TimeZoneRegistry, get_chronology, get_time_zone

__all__ = [
    "IsoChronology",
    "TimeZoneRegistry",
    "advance_now",
    "current_time_millis",
    "elapsed_time",
    "frozen_time",
    "get_chronology",
    "get_clock",
    "get_time_zone",
    "log_elapsed_time",
    "now",
    "reset_now",
    "set_now",
    "timed",
    "use_clock",
]
