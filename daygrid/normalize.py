# daygrid/normalize.py
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .model import EventInstance, TimeOfDay
from .util.console import obs_log
from .util.timeparse import DateLike, coerce_date, parse_hhmm


def _parse_time(v: Any) -> Optional[TimeOfDay]:
    if isinstance(v, dict):
        h = v.get("hour")
        m = v.get("minute", v.get("minutes", 0))
        if isinstance(h, int) and isinstance(m, int):
            try:
                return TimeOfDay(hour=h, minute=m)
            except ValueError:
                return None
        return None
    if isinstance(v, str):
        try:
            hh, mm = parse_hhmm(v)
        except ValueError:
            return None
        return TimeOfDay(hour=hh, minute=mm)
    return None


def _day_index(e: Dict[str, Any], base_date: Optional[dt.date]) -> Optional[int]:
    di = e.get("day_index", e.get("day"))
    if isinstance(di, int) and not isinstance(di, bool):
        return di
    date_raw = e.get("date")
    if date_raw:
        if base_date is None:
            return None
        try:
            d = coerce_date(date_raw)
        except ValueError:
            return None
        if d is None:
            return None
        return (d - base_date).days
    return 0


def normalize_event(e: Dict[str, Any], *, base_date: DateLike | None = None) -> Optional[EventInstance]:
    """JSON record -> EventInstance, or None when the record cannot be placed.

    Intervals are not checked here; the packer rejects end <= start itself.
    """
    ev_id = str(e.get("id") or e.get("uuid") or "").strip()
    if not ev_id:
        obs_log("normalize", "warn", "skipping event without id")
        return None

    start = _parse_time(e.get("start"))
    end = _parse_time(e.get("end"))
    if start is None or end is None:
        obs_log("normalize", "warn", f"invalid start/end id={ev_id!r} start={e.get('start')!r} end={e.get('end')!r}")
        return None

    day = _day_index(e, coerce_date(base_date))
    if day is None:
        obs_log("normalize", "warn", f"cannot resolve day id={ev_id!r} date={e.get('date')!r}")
        return None

    return EventInstance(
        id=ev_id,
        start=start,
        end=end,
        day_index=day,
        title=str(e.get("title") or e.get("description") or ""),
        raw=dict(e),
    )


def normalize_events(
    records: Iterable[Any],
    *,
    base_date: DateLike | None = None,
) -> Tuple[List[EventInstance], int]:
    """Returns (events, skipped_count)."""
    out: List[EventInstance] = []
    skipped = 0
    for r in records:
        if not isinstance(r, dict):
            skipped += 1
            continue
        ev = normalize_event(r, base_date=base_date)
        if ev is None:
            skipped += 1
            continue
        out.append(ev)
    return out, skipped


__all__ = ["normalize_event", "normalize_events"]
