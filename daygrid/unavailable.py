# daygrid/unavailable.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

from .model import UnavailableHoursRule, UnavailableRectangle
from .presenter import HOUR_BLOCK_HEIGHT, offset_from_time
from .util.console import obs_log
from .util.timeparse import DateLike, coerce_date


def _rule_columns(
    rule: UnavailableHoursRule,
    *,
    number_of_days: int,
    base_date: Optional[dt.date],
) -> Optional[List[int]]:
    """Columns a rule applies to; None means "all columns as one block"."""
    if not rule.targeted:
        return None

    if (rule.weekday is not None or rule.date is not None) and base_date is None:
        obs_log("unavailable", "warn", f"rule {rule!r} targets a weekday/date but no base_date was given")
        return []

    cols: List[int] = []
    for i in range(number_of_days):
        if rule.day_index is not None and rule.day_index != i:
            continue
        if base_date is not None:
            day = base_date + dt.timedelta(days=i)
            if rule.weekday is not None and day.weekday() != rule.weekday:
                continue
            if rule.date is not None and day != rule.date:
                continue
        cols.append(i)
    return cols


def build_unavailable_blocks(
    rules: Iterable[UnavailableHoursRule] | None,
    *,
    day_start: float = 0,
    day_end: float = 24,
    hour_block_height: float = HOUR_BLOCK_HEIGHT,
    width: float,
    left_inset: float = 0.0,
    number_of_days: int = 1,
    base_date: DateLike | None = None,
) -> List[UnavailableRectangle]:
    """
    Expand unavailable-hour rules into rectangles relative to the grid top.

    Rules:
      - each [start, end) is clipped to [day_start, day_end)
      - rules outside 0..24, with end <= start, or clipped away yield nothing
      - output keeps rule order (callers key blocks by position)
      - untargeted rules span all day columns; targeted ones get one block per
        matching column
      - `width` is the day-column area (inset excluded) and has no default
    """
    n = max(1, int(number_of_days))
    base = coerce_date(base_date)
    col_w = float(width) / n
    origin = offset_from_time(hour_block_height, day_start, 0)

    out: List[UnavailableRectangle] = []
    for idx, rule in enumerate(rules or ()):
        start = float(rule.start)
        end = float(rule.end)
        if start < 0 or end < 0 or start > 24 or end > 24 or end <= start:
            obs_log("unavailable", "warn", f"dropping malformed rule #{idx}: start={start} end={end}")
            continue

        start_fixed = max(start, float(day_start))
        end_fixed = min(end, float(day_end))
        if end_fixed <= start_fixed:
            continue

        # top and bottom are both measured from the grid origin so that
        # rules sharing a boundary meet exactly.
        top = offset_from_time(hour_block_height, start_fixed, 0) - origin
        bottom = offset_from_time(hour_block_height, end_fixed, 0) - origin
        height = bottom - top

        cols = _rule_columns(rule, number_of_days=n, base_date=base)
        if cols is None:
            out.append(UnavailableRectangle(top=top, height=height, left=float(left_inset), width=float(width)))
            continue
        for c in cols:
            out.append(
                UnavailableRectangle(
                    top=top,
                    height=height,
                    left=float(left_inset) + c * col_w,
                    width=col_w,
                )
            )
    return out


__all__ = ["build_unavailable_blocks"]
