"""Timezone resolution, detection and formatting utilities."""

import logging
import os
import re
import zoneinfo
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from .aliases import ALIASES
from .errors import AmbiguousTimezoneError, InvalidDateError, UnknownTimezoneError

logger = logging.getLogger(__name__)

# Candidates shown when a fuzzy search is ambiguous
MAX_CANDIDATES = 10

_FALLBACK_TZ = "UTC"
_SEPARATORS = re.compile(r"[\s_-]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def normalize_name(raw: str) -> str:
    """Lowercase *raw* and collapse underscores, hyphens and runs of spaces."""
    return _SEPARATORS.sub(" ", raw.lower()).strip()


@lru_cache(maxsize=1)
def known_timezones() -> frozenset[str]:
    """Every identifier the zoneinfo database knows about."""
    return frozenset(zoneinfo.available_timezones())


@lru_cache(maxsize=1)
def _search_index() -> tuple[tuple[str, str, tuple[str, ...]], ...]:
    """(identifier, normalized identifier, normalized segments), sorted by identifier."""
    index = []
    for name in sorted(known_timezones()):
        normalized = normalize_name(name)
        index.append((name, normalized, tuple(normalized.split("/"))))
    return tuple(index)


def list_timezones() -> list[str]:
    return sorted(known_timezones())


def _canonical(identifier: str) -> str:
    # Keeps resolution idempotent for identifiers that double as aliases (EST, Zulu)
    return ALIASES.get(normalize_name(identifier), identifier)


def _fuzzy_matches(query: str) -> list[tuple[str, tuple[str, ...]]]:
    words = query.split()
    matches = []
    for name, normalized, segments in _search_index():
        if (
            query in normalized
            or any(query in segment for segment in segments)
            or all(word in normalized for word in words)
        ):
            matches.append((name, segments))
    return matches


def resolve_timezone(raw: str) -> str:
    """Resolve a loose timezone name to an IANA identifier.

    Tried in order: the alias table, the raw string as an exact
    identifier, then a substring search over every known identifier.

    Raises:
        UnknownTimezoneError: nothing matched.
        AmbiguousTimezoneError: the search matched several identifiers
            and none of them has a segment equal to the input.
    """
    query = normalize_name(raw)
    if not query:
        raise UnknownTimezoneError(raw)

    if query in ALIASES:
        logger.debug("Resolved %r via alias table to %s", raw, ALIASES[query])
        return ALIASES[query]

    if raw in known_timezones():
        logger.debug("Resolved %r as an exact identifier", raw)
        return raw

    matches = _fuzzy_matches(query)
    if len(matches) == 1:
        logger.debug("Resolved %r via fuzzy search to %s", raw, matches[0][0])
        return _canonical(matches[0][0])

    if not matches:
        raise UnknownTimezoneError(raw)

    exact = [name for name, segments in matches if query in segments]
    if len(exact) == 1:
        logger.debug("Resolved %r via exact segment to %s", raw, exact[0])
        return _canonical(exact[0])

    names = [name for name, _ in matches]
    raise AmbiguousTimezoneError(
        raw, names[:MAX_CANDIDATES], max(0, len(names) - MAX_CANDIDATES)
    )


def _zone_from_localtime(path: str = "/etc/localtime") -> str | None:
    target = os.path.realpath(path)
    marker = "zoneinfo" + os.sep
    if marker not in target:
        return None
    return target.split(marker, 1)[1]


def detect_local_timezone() -> str:
    """Detect the host timezone identifier.

    Checks the ``TZ`` environment variable, then the ``/etc/localtime``
    symlink, and falls back to UTC.
    """
    try:
        env_tz = os.environ.get("TZ", "").lstrip(":")
        if env_tz in known_timezones():
            return env_tz

        linked = _zone_from_localtime()
        if linked in known_timezones():
            return linked
    except OSError as e:
        logger.debug("Could not inspect host timezone: %s", e)

    return _FALLBACK_TZ


def get_zone(name: str) -> zoneinfo.ZoneInfo:
    return zoneinfo.ZoneInfo(name)


def timezone_offset(zone: zoneinfo.ZoneInfo, wall_time: datetime) -> timedelta:
    """UTC offset of *zone* at the naive local *wall_time*, honoring DST."""
    offset = wall_time.replace(tzinfo=zone).utcoffset()
    return offset if offset is not None else timedelta(0)


def from_epoch_ms(epoch_ms: int) -> datetime:
    """Aware UTC datetime for a millisecond epoch value."""
    return _EPOCH + timedelta(milliseconds=epoch_ms)


def to_epoch_ms(moment: datetime) -> int:
    """Millisecond epoch value for an aware datetime."""
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def format_local_time(epoch_ms: int, zone: zoneinfo.ZoneInfo) -> str:
    """Format an instant in *zone*, e.g. ``Jan 13, 2024, 02:24:16 AM UTC``."""
    try:
        local = from_epoch_ms(epoch_ms).astimezone(zone)
    except OverflowError as e:
        raise InvalidDateError(f"Timestamp {epoch_ms} cannot be shown in {zone.key}.") from e
    return f"{local:%b} {local.day}, {local.year}, {local:%I:%M:%S %p %Z}"
