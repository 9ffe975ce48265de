"""Human-readable distance between an instant and a reference "now"."""

_SECONDS_CUTOFF = 90
_DAY = 86400
_HOUR = 3600
_MINUTE = 60


def _plural(amount: int, unit: str) -> str:
    return f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s"


def describe(moment_ms: int, now_ms: int) -> str:
    """Describe *moment_ms* relative to *now_ms*.

    Differences under 90 seconds are given in seconds. Longer ones are
    split into days, hours and minutes (floored, at most two parts once
    days are involved), e.g. ``"2 days, 3 hours ago"`` or
    ``"45 minutes in the future"``. Equal instants count as the past.
    """
    diff_seconds = abs(moment_ms - now_ms) // 1000

    if diff_seconds < _SECONDS_CUTOFF:
        parts = [_plural(diff_seconds, "second")]
    else:
        days, rest = divmod(diff_seconds, _DAY)
        hours, rest = divmod(rest, _HOUR)
        minutes = rest // _MINUTE

        if days:
            parts = [_plural(days, "day")]
            if hours:
                parts.append(_plural(hours, "hour"))
            if minutes and len(parts) < 2:
                parts.append(_plural(minutes, "minute"))
        elif hours:
            parts = [_plural(hours, "hour")]
            if minutes:
                parts.append(_plural(minutes, "minute"))
        else:
            parts = [_plural(minutes, "minute")]

    suffix = " in the future" if moment_ms > now_ms else " ago"
    return ", ".join(parts) + suffix
