"""
Precomputed timezone and chronology lookups.

**Conceptual**: Resolving an identifier into a zone and then building its
chronology is expensive compared with a dict lookup, and callers tend to do
it on every request. This module does the work once, at import, for every
identifier in the timezone database and then only serves reads.

**Functionally**:
- get_time_zone("America/New_York") -> ZoneInfo, or None if unknown.
- get_chronology("America/New_York") -> IsoChronology, or None if unknown.
- None and "" are treated as "UTC" by both lookups.
- Unknown identifiers are not an error; callers decide what to do with None.

The mappings are exposed as read-only views and never change after the
build, so concurrent readers need no locking.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo, available_timezones

from timeutil.timing import log_elapsed_time
from timeutil.zones.chronology import IsoChronology


LOGGER = logging.getLogger(__name__)

UTC_ID = "UTC"
UTC = ZoneInfo(UTC_ID)


class TimeZoneRegistry:
    """
    Immutable identifier -> (zone, chronology) lookup table.

    Both maps are filled from the same zones in one pass, so they always
    share a key set and each chronology is bound to the zone stored under
    its key.
    """

    def __init__(self, zones: Mapping[str, ZoneInfo]):
        self._zones = MappingProxyType(dict(zones))
        self._chronologies = MappingProxyType(
            {tz: IsoChronology(zone) for tz, zone in self._zones.items()}
        )

    @classmethod
    def build(cls, identifiers: Optional[Iterable[str]] = None) -> "TimeZoneRegistry":
        """
        Resolve every identifier into a zone and build the registry.

        Args:
            identifiers: Identifiers to load. Defaults to everything the
                timezone database knows, plus "UTC".

        Raises:
            zoneinfo.ZoneInfoNotFoundError: If an explicitly passed
                identifier is not in the database.
        """
        if identifiers is None:
            identifiers = available_timezones() | {UTC_ID}

        zones = {tz: ZoneInfo(tz) for tz in sorted(identifiers)}
        return cls(zones)

    @property
    def zones(self) -> Mapping[str, ZoneInfo]:
        return self._zones

    @property
    def chronologies(self) -> Mapping[str, IsoChronology]:
        return self._chronologies

    def available_ids(self) -> Tuple[str, ...]:
        return tuple(sorted(self._zones))

    def get_time_zone(self, identifier: Optional[str]) -> Optional[ZoneInfo]:
        """Return the zone for identifier (UTC for None/""), or None if unknown."""
        if not identifier:
            return UTC
        return self._zones.get(identifier)

    def get_chronology(self, identifier: Optional[str]) -> Optional[IsoChronology]:
        """Return the chronology for identifier (UTC for None/""), or None if unknown."""
        if not identifier:
            identifier = UTC_ID
        return self._chronologies.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._zones

    def __len__(self) -> int:
        return len(self._zones)


def _build_default_registry() -> TimeZoneRegistry:
    registry = log_elapsed_time("timezone registry build", TimeZoneRegistry.build)
    LOGGER.info("Loaded %d timezones", len(registry))
    return registry


_REGISTRY = _build_default_registry()


def get_registry() -> TimeZoneRegistry:
    """Return the registry built at import."""
    return _REGISTRY


def get_time_zone(identifier: Optional[str]) -> Optional[ZoneInfo]:
    """Look up a zone in the shared registry. See TimeZoneRegistry.get_time_zone."""
    return _REGISTRY.get_time_zone(identifier)


def get_chronology(identifier: Optional[str]) -> Optional[IsoChronology]:
    """Look up a chronology in the shared registry. See TimeZoneRegistry.get_chronology."""
    return _REGISTRY.get_chronology(identifier)
