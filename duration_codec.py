# ======================================================================
#  File......: duration_codec.py
#  Purpose...: Interval parsing (WMI structured / generic) and compact
#              duration + byte-count formatting.
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

import re
from datetime import timedelta
from typing import Optional

from errors import FormatError


# ---------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------

# ddddddddhhmmss.mmmmmm:sss  e.g. 00000000001230.000000:000 (12m 30s)
STRUCTURED_INTERVAL_MIN_LEN = 25

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB")
UINT64_MAX = 2 ** 64 - 1

_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_UINT_RE = re.compile(r"^\s*\+?\d+\s*$")

_GENERAL_INTERVAL_RE = re.compile(
    r"""^\s*(?P<neg>-)?
        (?:
            (?P<only_days>\d+)
          |
            (?:(?P<days>\d+)\.)?
            (?P<hours>\d{1,2}):(?P<minutes>\d{1,2})
            (?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?
        )
        \s*$""",
    re.VERBOSE,
)


# ---------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------

def _parse_int(field: str, label: str) -> int:
    if not _INT_RE.match(field):
        raise FormatError(f"Invalid {label} field '{field}' in structured interval")
    return int(field)


def parse_structured_interval(raw: Optional[str]) -> timedelta:
    """
    Parse a WMI/DMTF interval string into a timedelta.

    Strings that are missing or shorter than the fixed layout give a zero
    duration. Sub-millisecond precision is dropped.
    """
    if not raw or len(raw) < STRUCTURED_INTERVAL_MIN_LEN:
        return timedelta(0)

    days = _parse_int(raw[0:8], "days")
    hours = _parse_int(raw[8:10], "hours")
    minutes = _parse_int(raw[10:12], "minutes")
    seconds = _parse_int(raw[12:14], "seconds")
    microseconds = _parse_int(raw[15:21], "microseconds")

    return timedelta(
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        milliseconds=microseconds // 1000,
    )


def parse_general_interval(raw: Optional[str]) -> Optional[timedelta]:
    """
    Try to read a plain duration such as '1.02:03:04.5', '02:03' or '3'.
    Returns None when the text is not a duration.
    """
    if not raw:
        return None

    m = _GENERAL_INTERVAL_RE.match(raw)
    if not m:
        return None

    if m.group("only_days") is not None:
        td = timedelta(days=int(m.group("only_days")))
    else:
        hours = int(m.group("hours"))
        minutes = int(m.group("minutes"))
        seconds = int(m.group("seconds") or 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            return None

        # fraction is in 100ns ticks, padded to 7 digits
        ticks = int((m.group("fraction") or "").ljust(7, "0"))
        td = timedelta(
            days=int(m.group("days") or 0),
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            microseconds=ticks // 10,
        )

    return -td if m.group("neg") else td


def try_parse_unsigned(text: Optional[str]) -> Optional[int]:
    """Unsigned 64-bit parse; None for empty, negative or out-of-range text."""
    if text is None or not _UINT_RE.match(text):
        return None
    value = int(text)
    if value > UINT64_MAX:
        return None
    return value


# ---------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------

def format_duration(td: timedelta) -> str:
    """Render as '{days}d {hours}h {minutes}m'; seconds are never shown."""
    total_us = (td.days * 86400 + td.seconds) * 1_000_000 + td.microseconds
    sign = -1 if total_us < 0 else 1
    total_us = abs(total_us)

    days = total_us // (86400 * 1_000_000)
    hours = (total_us // (3600 * 1_000_000)) % 24
    minutes = (total_us // (60 * 1_000_000)) % 60

    return f"{sign * days}d {sign * hours}h {sign * minutes}m"


def format_bytes(n: int) -> str:
    size = float(n)
    unit = 0
    while size >= 1024 and unit < len(BYTE_UNITS) - 1:
        size /= 1024
        unit += 1

    number = f"{size:.2f}".rstrip("0").rstrip(".")
    return f"{number} {BYTE_UNITS[unit]}"
