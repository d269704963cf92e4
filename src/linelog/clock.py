"""
Wall-clock access and calendar decomposition.

The clock is a plain zero-argument callable returning a TimeVal, so
a Logger can be handed a fixed or fake clock instead of the real one.
"""

import time
from dataclasses import dataclass
from typing import Callable, NamedTuple

from .errors import ClockUnavailable


class TimeVal(NamedTuple):
    """Absolute time: seconds since the epoch plus milliseconds."""
    sec: int
    msec: int = 0


@dataclass
class ParsedTime:
    """Local calendar time decoded from a TimeVal.

    Attributes:
        year: Actual year (not offset from 1900)
        mon: Month, 0-11 (zero is January)
        day: Day of month, 1-31
        wday: Day of week, 0-6 (zero is Sunday)
        hour: 0-23
        min: 0-59
        sec: 0-59 (60 on a leap second)
        msec: 0-999
    """
    year: int
    mon: int
    day: int
    hour: int = 0
    min: int = 0
    sec: int = 0
    msec: int = 0
    wday: int = 0


Clock = Callable[[], TimeVal]


def gettimeofday() -> TimeVal:
    """Read the wall clock.

    Raises:
        ClockUnavailable: If the system clock cannot be read
    """
    try:
        ns = time.time_ns()
    except (OSError, OverflowError) as e:
        raise ClockUnavailable(f"Cannot read wall clock: {e}") from e
    sec, rest = divmod(ns, 1_000_000_000)
    return TimeVal(sec, rest // 1_000_000)


def time_decode(tv: TimeVal) -> ParsedTime:
    """Decode an absolute time into local calendar fields.

    Raises:
        ClockUnavailable: If the platform cannot represent the time
    """
    try:
        lt = time.localtime(tv.sec)
    except (OSError, OverflowError, ValueError) as e:
        raise ClockUnavailable(f"Cannot decode time {tv.sec}: {e}") from e
    return ParsedTime(
        year=lt.tm_year,
        mon=lt.tm_mon - 1,
        day=lt.tm_mday,
        hour=lt.tm_hour,
        min=lt.tm_min,
        sec=lt.tm_sec,
        msec=tv.msec,
        # struct_time counts Monday as 0
        wday=(lt.tm_wday + 1) % 7,
    )


def time_encode(pt: ParsedTime) -> TimeVal:
    """Encode local calendar fields back into an absolute time.

    DST is left to the C library (tm_isdst = -1). ``wday`` is ignored and
    ``msec`` is carried over unchanged.

    Raises:
        ClockUnavailable: If mktime cannot represent the fields
    """
    fields = (pt.year, pt.mon + 1, pt.day, pt.hour, pt.min, pt.sec,
              0, 0, -1)
    try:
        sec = time.mktime(fields)
    except (OverflowError, ValueError) as e:
        raise ClockUnavailable(f"Cannot encode {pt}: {e}") from e
    return TimeVal(int(sec), pt.msec)


def fixed_clock(tv: TimeVal) -> Clock:
    """Return a clock that always reads ``tv``."""
    def clock():
        return tv
    return clock
