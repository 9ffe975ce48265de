"""Exceptions raised while classifying, parsing and resolving input."""

from __future__ import annotations


class TimestampError(ValueError):
    """Base class for every failure surfaced to the user.

    The message is shown verbatim, so subclasses build a complete
    human-readable sentence.
    """


class UnrecognizedFormatError(TimestampError):
    """Raised when the input matches none of the supported formats."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Unrecognized input {value!r}. Use a Unix timestamp, an ISO "
            'timestamp, a relative time like "+2hours", or "yyyy-MM-dd h:mma".'
        )
        self.value = value


class InvalidDateError(TimestampError):
    """Raised when the input has a valid shape but is not a real instant.

    Example:
        ``2024-02-30 10:00am`` matches the date-string grammar, but
        February has no 30th day.
    """


class InvalidUnitError(TimestampError):
    """Raised when a relative expression names an unknown unit."""

    def __init__(self, unit: str) -> None:
        super().__init__(
            f"Invalid time unit {unit!r}. Use seconds, minutes, hours, days, "
            "weeks, months or years."
        )
        self.unit = unit


class InvalidRelativeFormatError(TimestampError):
    """Raised when a relative expression cannot be parsed at all."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f'Invalid relative time {value!r}. Use a form like "+3days" or "-2 hours".'
        )
        self.value = value


class TimezoneError(TimestampError):
    """Base class for timezone resolution failures."""


class UnknownTimezoneError(TimezoneError):
    """Raised when no alias, identifier or fuzzy match exists."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Unknown timezone {name!r}. Run with --list-timezones to see valid names."
        )
        self.name = name


class AmbiguousTimezoneError(TimezoneError):
    """Raised when a fuzzy search matches several identifiers.

    ``candidates`` holds the identifiers shown to the user and
    ``remaining`` the number of further matches that were left out.
    """

    def __init__(self, name: str, candidates: list[str], remaining: int = 0) -> None:
        listing = ", ".join(candidates)
        if remaining:
            listing += f" (and {remaining} more)"
        super().__init__(f"Ambiguous timezone {name!r}. Did you mean: {listing}")
        self.name = name
        self.candidates = candidates
        self.remaining = remaining
