# daygrid/presenter.py
"""Time <-> pixel mapping for the hour grid.

All vertical offsets are measured from hour 0. Callers that draw a grid
starting at another hour subtract `offset_from_time(hbh, start, 0)` themselves.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from typing import Optional, Tuple

from .model import NewEventTime, TimeOfDay
from .util.timeparse import DateLike, coerce_date, parse_date_yyyy_mm_dd, parse_hhmm

HOUR_BLOCK_HEIGHT = 100.0
QUARTER_HOUR_BLOCK_HEIGHT = HOUR_BLOCK_HEIGHT / 4

# Float noise from offsets such as 70 * 570 / 60 must not drop a quarter.
_QUANT_EPS = 1e-9

_TIME_STRING_RE = re.compile(r"^(?:(\d{4}-\d{2}-\d{2}) )?(\d{2}:\d{2})$")


def offset_from_time(hour_block_height: float, hour: float, minutes: float) -> float:
    # Multiply before dividing so quarter hours stay exact.
    return float(hour_block_height) * (hour * 60 + minutes) / 60


def time_from_offset(
    y_pixel: float,
    quarter_block_height: float,
    *,
    min_hour: int = 0,
    max_hour: int = 24,
) -> TimeOfDay:
    """Quantize a vertical pixel to the quarter hour it falls in.

    Out-of-range pixels clamp to `min_hour:00` / `max_hour:00`.
    """
    if quarter_block_height <= 0:
        raise ValueError("quarter_block_height must be > 0")
    lo = int(min_hour) * 4
    hi = int(max_hour) * 4

    y = float(y_pixel)
    if math.isnan(y):
        q = lo
    elif math.isinf(y):
        q = hi if y > 0 else lo
    else:
        q = math.floor(y / float(quarter_block_height) + _QUANT_EPS)
    q = max(lo, min(hi, q))
    return TimeOfDay(hour=q // 4, minute=(q % 4) * 15)


def column_from_offset(x_pixel: float, left_inset: float, number_of_days: int, *, width: float) -> int:
    n = max(1, int(number_of_days))
    if n == 1 or width <= 0:
        return 0
    col_w = float(width) / n
    x = float(x_pixel) - float(left_inset)
    if math.isnan(x):
        return 0
    if math.isinf(x):
        return n - 1 if x > 0 else 0
    col = math.floor(x / col_w)
    return max(0, min(n - 1, col))


def date_from_offset(
    x_pixel: float,
    left_inset: float,
    number_of_days: int,
    base_date: DateLike | None,
    *,
    width: float,
) -> Optional[dt.date]:
    """Date of the day column under `x_pixel`.

    `width` is the width of the day-column area, excluding the left inset.
    Presses inside the inset land in column 0; presses past the right edge
    land in the last column.
    """
    base = coerce_date(base_date)
    if base is None:
        return None
    col = column_from_offset(x_pixel, left_inset, number_of_days, width=width)
    return base + dt.timedelta(days=col)


def format_time_string(hour: int, minutes: int, date: DateLike | None = None) -> str:
    """Canonical press payload: `HH:MM` or `YYYY-MM-DD HH:MM` (24h, zero-padded)."""
    hhmm = f"{int(hour):02d}:{int(minutes):02d}"
    d = coerce_date(date)
    if d is None:
        return hhmm
    return f"{d.isoformat()} {hhmm}"


def parse_time_string(s: str) -> Tuple[TimeOfDay, Optional[dt.date]]:
    m = _TIME_STRING_RE.match(str(s).strip())
    if not m:
        raise ValueError(f"Invalid time string: {s!r}")
    date_s, hhmm = m.groups()
    hh, mm = parse_hhmm(hhmm)
    d = parse_date_yyyy_mm_dd(date_s) if date_s else None
    return TimeOfDay(hour=hh, minute=mm), d


def new_event_time(hour: int, minutes: int, date: DateLike | None = None) -> NewEventTime:
    d = coerce_date(date)
    return NewEventTime(hour=int(hour), minutes=int(minutes), date=d.isoformat() if d else None)


__all__ = [
    "HOUR_BLOCK_HEIGHT",
    "QUARTER_HOUR_BLOCK_HEIGHT",
    "offset_from_time",
    "time_from_offset",
    "column_from_offset",
    "date_from_offset",
    "format_time_string",
    "parse_time_string",
    "new_event_time",
]
