"""
ISO calendar system bound to a single timezone.

**Conceptual**: A chronology answers "which calendar fields (year, month,
day, hour...) does this instant have in this zone?" and the reverse. All
instants here are epoch milliseconds, the same unit the process-wide clock
(timeutil.now) uses, so a chronology can turn current_time_millis() straight
into a local date.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, NamedTuple
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

from timeutil.utils.time import from_epoch_millis, to_epoch_millis


class NonexistentLocalTimeError(ValueError):
    """Raised when local calendar fields fall in a DST spring-forward gap.

    The chronology does not invent a time that never occurred on the wall
    clock of its zone.
    """


class DateTimeFields(NamedTuple):
    """Calendar fields of one instant as seen in one zone."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: int
    day_of_week: int
    day_of_year: int
    offset_millis: int


@dataclass(frozen=True)
class IsoChronology:
    """
    ISO-8601 calendar calculations in a fixed zone.

    **Usage**:
        chrono = IsoChronology(ZoneInfo("America/New_York"))
        chrono.fields(1420416000000).hour        # 19 (previous evening, EST)
        chrono.millis_from_fields(2015, 1, 5)    # local midnight as epoch ms

    Two chronologies are equal when they are bound to the same zone.

    Attributes:
        zone: The zone all calendar fields are expressed in.
    """

    zone: ZoneInfo

    @property
    def zone_id(self) -> str:
        """IANA identifier of the bound zone (e.g. "Europe/Paris")."""
        return self.zone.key

    def with_utc(self) -> "IsoChronology":
        """Return the chronology for UTC."""
        return IsoChronology(ZoneInfo("UTC"))

    def datetime_from_millis(self, millis: int) -> datetime:
        """Return the instant as an aware datetime in this zone."""
        return from_epoch_millis(millis, self.zone)

    def millis_from_fields(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> int:
        """
        Return the epoch millis of a local wall-clock time in this zone.

        **Edge cases**:
        - Ambiguous wall times (DST fall-back) resolve to the earlier of the
          two instants.
        - Wall times inside a DST gap raise NonexistentLocalTimeError.

        Raises:
            ValueError: If any field is out of range.
            NonexistentLocalTimeError: If the wall time is skipped by a
                DST transition.
        """
        if not 0 <= millisecond <= 999:
            raise ValueError(f"millisecond must be in 0..999, got {millisecond}")

        local = datetime(
            year, month, day, hour, minute, second, millisecond * 1000,
            tzinfo=self.zone,
        )
        # A skipped wall time does not survive a round trip through UTC
        round_trip = local.astimezone(timezone.utc).astimezone(self.zone)
        if round_trip.replace(tzinfo=None) != local.replace(tzinfo=None):
            raise NonexistentLocalTimeError(
                f"Nonexistent local time: {local.replace(tzinfo=None).isoformat()} "
                f"in {self.zone_id}"
            )
        return to_epoch_millis(local)

    def fields(self, millis: int) -> DateTimeFields:
        """Break an instant into calendar fields in this zone."""
        local = self.datetime_from_millis(millis)
        offset = local.utcoffset()
        return DateTimeFields(
            year=local.year,
            month=local.month,
            day=local.day,
            hour=local.hour,
            minute=local.minute,
            second=local.second,
            millisecond=local.microsecond // 1000,
            day_of_week=local.isoweekday(),
            day_of_year=local.timetuple().tm_yday,
            offset_millis=int(offset.total_seconds() * 1000) if offset is not None else 0,
        )

    def localize_millis(self, values: Iterable[int]) -> pd.DatetimeIndex:
        """
        Convert many epoch-millis values at once into a zone-aware index.

        **Usage**:
            idx = chrono.localize_millis(df["ts_ms"])
            df["local_date"] = idx.date

        Args:
            values: Any iterable of integer epoch milliseconds.

        Returns:
            pandas DatetimeIndex in this chronology's zone.
        """
        millis = np.asarray(list(values), dtype="int64")
        return pd.DatetimeIndex(
            pd.to_datetime(millis, unit="ms", utc=True)
        ).tz_convert(self.zone_id)

    def __str__(self) -> str:
        return f"ISOChronology[{self.zone_id}]"
