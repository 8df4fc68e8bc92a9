# daygrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Tuple, Union

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

DateLike = Union[dt.date, str]


def parse_hhmm(s: str) -> Tuple[int, int]:
    """Parse `HH:MM`; `24:00` is accepted as the end of the day."""
    m = _HHMM_RE.match(str(s).strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if hh == 24 and mm == 0:
        return hh, mm
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(str(s).strip(), "%Y-%m-%d").date()


def coerce_date(d: DateLike | None) -> dt.date | None:
    if d is None:
        return None
    if isinstance(d, dt.datetime):
        return d.date()
    if isinstance(d, dt.date):
        return d
    s = str(d).strip()
    if not s:
        return None
    return parse_date_yyyy_mm_dd(s)
