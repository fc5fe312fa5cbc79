"""
Argot units: pure formatting helpers for command-line tools.

- get_time_tuple(ts, tz_offset): POSIX seconds -> (year, month, day, hour, minute, second).
- format_time(ts, tz_offset): "YYYY-MM-DD HH:MM:SS".
- format_system_time(moment): same, for a datetime or a timestamp (now by default).
- to_human_readable_string(size): 1536 -> "1.5K".

None of these touch the parser; they exist so that tools built on it (ls, du,
dd style utilities) can print times and sizes without another dependency.
"""
import time
from datetime import datetime, timezone

from .utils import Unset

UNITS = ("", "K", "M", "G", "T", "P", "E")


def get_time_tuple(ts, tz_offset=0, /):
    """
    Convert a POSIX timestamp to a civil (proleptic Gregorian) date and time.

    `tz_offset` is in whole hours east of UTC. The date part uses the integer
    civil-from-days conversion described at
    http://ptspts.blogspot.com/2009/11/how-to-convert-unix-timestamp-to-civil.html
    """
    if not isinstance(ts, int) or not isinstance(tz_offset, int):
        raise TypeError("get_time_tuple() arguments must be integers")

    ts += tz_offset * 3600
    ts, seconds = divmod(ts, 86400)
    hour = seconds // 3600
    minute = seconds // 60 % 60
    second = seconds % 60

    x = (ts * 4 + 102032) // 146097 + 15
    b = ts + 2442113 + x - x // 4
    c = (b * 20 - 2442) // 7305
    d = b - 365 * c - c // 4
    e = d * 1000 // 30601
    f = d - e * 30 - e * 601 // 1000
    if e < 14:
        c -= 4716
        e -= 1
    else:
        c -= 4715
        e -= 13
    return c, e, f, hour, minute, second


def format_time(ts, tz_offset=0, /):
    return "%04d-%02d-%02d %02d:%02d:%02d" % get_time_tuple(ts, tz_offset)


def format_system_time(moment=Unset, /):
    """
    Format a moment at UTC (offset 0).

    `moment` may be a datetime (naive values are taken as UTC), a POSIX
    timestamp, or Unset for the current time. Moments before the epoch are
    reported as "duration since epoch err".
    """
    if moment is Unset:
        moment = time.time()
    elif isinstance(moment, datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        moment = moment.timestamp()
    elif not isinstance(moment, int | float) or isinstance(moment, bool):
        raise TypeError("format_system_time() argument must be a datetime or a timestamp")

    if moment < 0:
        return "duration since epoch err"
    return format_time(int(moment), 0)


def to_human_readable_string(size, /):
    """
    Scale a byte count to 1024-based units with one decimal.

    Sizes below 1024 are returned as plain integers ("512"); larger ones get a
    unit suffix from K to E ("1.5K", "2.0G").
    """
    if not isinstance(size, int) or isinstance(size, bool):
        raise TypeError("to_human_readable_string() argument must be an integer")
    elif size < 0:
        raise ValueError("to_human_readable_string() argument cannot be negative")

    if size < 1024:
        return str(size)

    groups, scaled = 0, size
    while scaled >= 1024 and groups < len(UNITS) - 1:
        scaled //= 1024
        groups += 1
    return "%.1f%s" % (size / 1024 ** groups, UNITS[groups])


__all__ = (
    "get_time_tuple",
    "format_time",
    "format_system_time",
    "to_human_readable_string",
)
