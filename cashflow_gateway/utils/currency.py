"""Lenient numeric parsing for values stored as formatted currency text"""

import math
import re
from typing import Any, Optional

# Leading numeric prefix, read the way a lenient float parse reads it ("12.5abc" -> 12.5)
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^[+-]?\d+")
_STRIPPED_CHARS = re.compile(r"[$,%]")


def _clean(value: str) -> str:
    return _STRIPPED_CHARS.sub("", value).strip()


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a stored amount into a finite float, None when nothing is readable.

    Same reading rules as parse_currency, for callers that must tell a
    stored zero apart from an unreadable value.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(_clean(value))
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None

    return number if math.isfinite(number) else None


def parse_currency(value: Any) -> float:
    """
    Parse a stored amount into a finite float.

    Accepts numbers, formatted strings ("$12,345.67"), None or garbage.
    Anything unreadable is 0.0; this never raises.

    Example:
        "$1,234.50" -> 1234.5
        ""          -> 0.0
        None        -> 0.0
        42          -> 42.0
        10 ** 400   -> 0.0
    """
    number = parse_number(value)
    return 0.0 if number is None else number


def parse_int(value: Any) -> int:
    """Parse an integer field such as a loan term ("60", 60, "60 months")"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if not isinstance(value, str):
        return 0

    match = _INT_PREFIX.match(value.strip())
    if not match:
        return 0
    try:
        return int(match.group(0))
    except ValueError:
        # longer than the interpreter's int string conversion limit
        return 0


def parse_percent(value: Any) -> float:
    """Parse a whole-number percentage ("10.0%", "7.5", 7.5) to the number itself, not a fraction"""
    return parse_currency(value)
