"""Formatting rules for durations, byte counts and byte rates."""

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

_SECOND = timedelta(seconds=1)

# Decimal (SI) unit thresholds, smallest first.
_BYTE_UNITS = [
    (1e6, 1e3, "kB"),
    (1e9, 1e6, "MB"),
    (1e12, 1e9, "GB"),
    (1e15, 1e12, "TB"),
]


def format_fixed(value: float, digits: int) -> str:
    """Format a number with a fixed number of decimals.

    Rounds half up on the shortest decimal form of the float, so 1.005
    becomes "1.01" and 12.35 becomes "12.4".

    Args:
        value: Number to format
        digits: Number of decimals

    Returns:
        Formatted number
    """
    exponent = Decimal(1).scaleb(-digits)
    return str(Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def whole_seconds(duration: timedelta) -> int:
    """Return the number of whole seconds in a duration."""
    return duration // _SECOND


def format_duration(duration: timedelta) -> str:
    """Format a duration as a short human-readable string.

    Only the two most significant units are shown, e.g. ``"42.0s"``,
    ``"4m04s"``, ``"2h22m"`` or ``"1d13h"``.

    Args:
        duration: Duration to format

    Returns:
        Formatted duration string
    """
    seconds = whole_seconds(duration)

    if seconds < 60:
        return f"{seconds}.0s"
    elif seconds < 60 * 60:
        return f"{seconds // 60}m{seconds % 60:02d}s"
    elif seconds < 60 * 60 * 24:
        return f"{seconds // 3600}h{seconds // 60 % 60:02d}m"
    else:
        return f"{seconds // 86400}d{seconds // 3600 % 24:02d}h"


def format_bytes(ticks: int, undefined: bool = False) -> str:
    """Format a tick count as a byte size.

    Args:
        ticks: Number of bytes
        undefined: Render the undefined placeholder instead of a number

    Returns:
        Formatted size string, e.g. ``"999 B"`` or ``"1.00kB"``
    """
    if undefined:
        return " ~ B"
    if ticks < 1e3:
        return f"{ticks} B"

    for limit, scale, unit in _BYTE_UNITS:
        if ticks < limit:
            return f"{format_fixed(ticks / scale, 2)}{unit}"

    return f"{format_fixed(ticks / 1e15, 2)}PB"


def format_rate(per_second: float) -> str:
    """Format a byte rate.

    Args:
        per_second: Bytes per second

    Returns:
        Formatted rate string, e.g. ``"250.0 B/s"`` or ``"200.2kB/s"``
    """
    if per_second < 1e3:
        return f"{format_fixed(per_second, 1)} B/s"

    for limit, scale, unit in _BYTE_UNITS:
        if per_second < limit:
            return f"{format_fixed(per_second / scale, 1)}{unit}/s"

    return f"{format_fixed(per_second / 1e15, 1)}PB/s"
