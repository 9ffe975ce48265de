"""Detect which supported format an input string is written in."""

import logging
import re

from .errors import UnrecognizedFormatError
from .types import InputFormat

logger = logging.getLogger(__name__)

UNITS = ("second", "minute", "hour", "day", "week", "month", "year")

UNIX_PATTERN = re.compile(r"^\d{10,19}$")
ISO_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<millis>\d{3}))?(?P<utc>Z)?$"
)
RELATIVE_PATTERN = re.compile(
    rf"^(?P<sign>[+-])(?P<amount>\d+)\s*(?P<unit>{'|'.join(UNITS)})s?$",
    re.IGNORECASE,
)
DATETIME_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2}) "
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2})(?P<period>am|pm)$",
    re.IGNORECASE,
)


def is_unix_timestamp(text: str) -> bool:
    """Return True for 10 to 19 digits (seconds, milliseconds or finer)."""
    return UNIX_PATTERN.match(text) is not None


def is_iso_timestamp(text: str) -> bool:
    return ISO_PATTERN.match(text) is not None


def is_relative_time(text: str) -> bool:
    return RELATIVE_PATTERN.match(text) is not None


def is_date_string(text: str) -> bool:
    return DATETIME_PATTERN.match(text) is not None


_CHECKS = (
    (InputFormat.UNIX, is_unix_timestamp),
    (InputFormat.ISO, is_iso_timestamp),
    (InputFormat.RELATIVE, is_relative_time),
    (InputFormat.DATETIME, is_date_string),
)


def classify(text: str) -> InputFormat:
    """Return the format of *text*, checking UNIX, ISO, RELATIVE, DATETIME in order.

    Raises:
        UnrecognizedFormatError: if no format matches.
    """
    value = text.strip()
    for fmt, check in _CHECKS:
        if check(value):
            logger.debug("Classified %r as %s", value, fmt.value)
            return fmt
    raise UnrecognizedFormatError(value)
