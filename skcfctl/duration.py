"""Compact duration strings (``30s``, ``12h``, ``6M``) to seconds."""

import argparse
import re

from skcfctl.errors import InvalidDurationError

# Months are a fixed 30 days, not calendar months.
UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 60 * 60 * 24,
    "M": 60 * 60 * 24 * 30,
}

MAX_SECONDS = 2**64 - 1

_DIGITS = re.compile(r"[0-9]+")


def parse_duration(text: str) -> int:
    """Parse ``<value><unit>`` into a number of seconds.

    The last character is the unit (one of s, m, h, d, M; case-sensitive),
    everything before it is a non-negative decimal magnitude. Leading zeros
    are accepted.

    Raises:
        InvalidDurationError: on short input, a non-numeric magnitude, an
            unknown unit, or a result that does not fit in 64 unsigned bits.
    """
    if len(text) < 2:
        raise InvalidDurationError(f"invalid duration: {text!r}")

    magnitude, unit = text[:-1], text[-1]
    if not _DIGITS.fullmatch(magnitude):
        raise InvalidDurationError(f"invalid duration value: {magnitude!r}")
    value = int(magnitude)
    if value > MAX_SECONDS:
        raise InvalidDurationError(f"invalid duration value: {magnitude!r}")

    multiplier = UNIT_SECONDS.get(unit)
    if multiplier is None:
        raise InvalidDurationError(f"invalid duration unit: {unit!r}")

    seconds = value * multiplier
    if seconds > MAX_SECONDS:
        raise InvalidDurationError(f"duration overflows 64-bit seconds: {text!r}")
    return seconds


def format_seconds(seconds: int) -> str:
    """Decimal string form used by the API for second counts."""
    return str(seconds)


def duration_arg(text):
    """argparse ``type=`` adapter: duration string to float seconds."""
    try:
        return float(parse_duration(text))
    except InvalidDurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
