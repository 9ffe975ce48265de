"""Single-shot conversion: resolve timezone, classify, parse, describe."""

import logging
import time
from typing import Any

from .aliases import ALIASES
from .classify import classify
from .parsers import moment_from_ms, parse_date_string, parse_iso, parse_relative, parse_unix
from .relative import describe
from .timezone import detect_local_timezone, format_local_time, get_zone, list_timezones, resolve_timezone
from .types import ConversionResult, InputFormat, NormalizedMoment

logger = logging.getLogger(__name__)


def current_time_ms() -> int:
    return time.time_ns() // 1_000_000


def parse_input(value: str, zone_name: str, now_ms: int) -> tuple[InputFormat, NormalizedMoment]:
    """Classify *value* and run the matching parser."""
    text = value.strip()
    fmt = classify(text)
    zone = get_zone(zone_name)

    if fmt is InputFormat.UNIX:
        moment = parse_unix(text)
    elif fmt is InputFormat.ISO:
        moment = parse_iso(text, zone)
    elif fmt is InputFormat.RELATIVE:
        moment = parse_relative(text, now_ms, zone)
    else:
        moment = parse_date_string(text, zone)
    return fmt, moment


def convert(
    value: str | None,
    timezone: str | None = None,
    now_ms: int | None = None,
) -> ConversionResult:
    """Convert *value* into every supported representation.

    Args:
        value: Input in any supported format. ``None`` or blank shows the
            current time.
        timezone: Loose timezone name; the host timezone when omitted.
        now_ms: Reference instant for relative input and the description.
            Read from the wall clock once when omitted.

    Raises:
        TimestampError: on any classification, parsing or resolution failure.
    """
    if now_ms is None:
        now_ms = current_time_ms()

    zone_name = resolve_timezone(timezone) if timezone else detect_local_timezone()

    if value is None or not value.strip():
        fmt, moment = None, moment_from_ms(now_ms)
    else:
        fmt, moment = parse_input(value, zone_name, now_ms)

    return ConversionResult(
        timezone=zone_name,
        local_time=format_local_time(moment.epoch_milliseconds, get_zone(zone_name)),
        unix_seconds=moment.epoch_seconds,
        unix_milliseconds=moment.epoch_milliseconds,
        utc_iso=moment.utc_iso,
        relative=describe(moment.epoch_milliseconds, now_ms),
        input_format=fmt,
    )


def list_all_timezones() -> dict[str, Any]:
    """Known identifiers plus the alias table's keys."""
    return {"timezones": list_timezones(), "aliases": sorted(ALIASES)}
