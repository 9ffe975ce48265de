"""Parsers turning each supported input format into a NormalizedMoment."""

import logging
import re
import zoneinfo
from datetime import datetime, timedelta, timezone

from .classify import DATETIME_PATTERN, ISO_PATTERN, UNITS
from .errors import InvalidDateError, InvalidRelativeFormatError, InvalidUnitError
from .timezone import from_epoch_ms, timezone_offset, to_epoch_ms
from .types import NormalizedMoment

logger = logging.getLogger(__name__)

_MS_DIGITS = 13

# Looser than the classifier's pattern so unknown units are reported as such
_RELATIVE_SHAPE = re.compile(r"^(?P<sign>[+-])(?P<amount>\d+)\s*(?P<unit>[a-z]+)$", re.IGNORECASE)

_FIXED_UNITS_MS: dict[str, int] = {
    "second": 1000,
    "minute": 60 * 1000,
    "hour": 60 * 60 * 1000,
    "day": 24 * 60 * 60 * 1000,
    "week": 7 * 24 * 60 * 60 * 1000,
}


def moment_from_ms(epoch_ms: int) -> NormalizedMoment:
    """Build a NormalizedMoment from a millisecond epoch value."""
    try:
        utc = from_epoch_ms(epoch_ms)
    except OverflowError as e:
        raise InvalidDateError(f"Timestamp {epoch_ms} is out of range.") from e
    return NormalizedMoment(
        epoch_seconds=epoch_ms // 1000,
        epoch_milliseconds=epoch_ms,
        utc_iso=f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z",
    )


def _moment_from_wall_time(wall_time: datetime, zone: zoneinfo.ZoneInfo) -> NormalizedMoment:
    # Wall-clock fields are local to zone; remove its offset at that instant
    try:
        utc_naive = wall_time - timezone_offset(zone, wall_time)
    except OverflowError as e:
        raise InvalidDateError(f"Date {wall_time} is out of range.") from e
    return moment_from_ms(to_epoch_ms(utc_naive.replace(tzinfo=timezone.utc)))


def parse_unix(text: str) -> NormalizedMoment:
    """Parse 10-19 digits; padded or cut to 13 digits, read as milliseconds."""
    digits = text.strip().ljust(_MS_DIGITS, "0")[:_MS_DIGITS]
    return moment_from_ms(int(digits))


def parse_iso(text: str, zone: zoneinfo.ZoneInfo) -> NormalizedMoment:
    """Parse ``YYYY-MM-DDTHH:MM:SS[.mmm][Z]``.

    A trailing ``Z`` marks UTC; without it the fields are local time in *zone*.
    """
    match = ISO_PATTERN.match(text.strip())
    if not match:
        raise InvalidDateError(f"Invalid ISO timestamp {text!r}.")

    fields = match.groupdict()
    try:
        wall_time = datetime(
            int(fields["year"]),
            int(fields["month"]),
            int(fields["day"]),
            int(fields["hour"]),
            int(fields["minute"]),
            int(fields["second"]),
            int(fields["millis"] or 0) * 1000,
        )
    except ValueError as e:
        raise InvalidDateError(f"Invalid date {text!r}: {e}.") from e

    if fields["utc"]:
        zone = zoneinfo.ZoneInfo("UTC")
    return _moment_from_wall_time(wall_time, zone)


def _add_months(wall_time: datetime, months: int) -> datetime:
    """Shift by whole months; missing days roll over into the next month."""
    total = wall_time.year * 12 + (wall_time.month - 1) + months
    year, month = divmod(total, 12)
    first = wall_time.replace(year=year, month=month + 1, day=1)
    return first + timedelta(days=wall_time.day - 1)


def parse_relative(text: str, now_ms: int, zone: zoneinfo.ZoneInfo) -> NormalizedMoment:
    """Parse ``[+-]<n><unit>`` relative to *now_ms*.

    Seconds through weeks are fixed durations. Months and years move the
    calendar fields of the current local time in *zone*.
    """
    match = _RELATIVE_SHAPE.match(text.strip())
    if not match:
        raise InvalidRelativeFormatError(text)

    unit = match["unit"].lower()
    if unit.endswith("s"):
        unit = unit[:-1]
    if unit not in UNITS:
        raise InvalidUnitError(match["unit"])

    amount = int(match["amount"])
    if match["sign"] == "-":
        amount = -amount

    if unit in _FIXED_UNITS_MS:
        return moment_from_ms(now_ms + amount * _FIXED_UNITS_MS[unit])

    months = amount if unit == "month" else amount * 12
    local_now = from_epoch_ms(now_ms).astimezone(zone).replace(tzinfo=None)
    try:
        shifted = _add_months(local_now, months)
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(f"Relative time {text!r} is out of range.") from e
    logger.debug("Shifted %s by %d months to %s", local_now, months, shifted)
    return _moment_from_wall_time(shifted, zone)


def parse_date_string(text: str, zone: zoneinfo.ZoneInfo) -> NormalizedMoment:
    """Parse ``YYYY-MM-DD H:MMam|pm`` as wall-clock time in *zone*."""
    match = DATETIME_PATTERN.match(text.strip())
    if not match:
        raise InvalidDateError('Invalid date string. Use "yyyy-MM-dd h:mma".')

    hour = int(match["hour"])
    period = match["period"].lower()
    if period == "pm" and hour != 12:
        hour += 12
    elif period == "am" and hour == 12:
        hour = 0

    try:
        wall_time = datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            hour,
            int(match["minute"]),
        )
    except ValueError as e:
        raise InvalidDateError(
            "Invalid date. Please check the day, month, year and time."
        ) from e

    return _moment_from_wall_time(wall_time, zone)
