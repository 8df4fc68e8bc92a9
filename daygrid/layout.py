# daygrid/layout.py
from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from .config import TimelineConfig
from .hours import TimelineHours, build_timeline_hours
from .model import EventInstance, PackedEventLayout, RejectedEvent
from .now import NowIndicator, now_indicator
from .packer import pack_days
from .util.timeparse import DateLike, coerce_date


@dataclass(frozen=True)
class TimelineLayout:
    config: TimelineConfig
    base_date: Optional[dt.date]
    column_width: float
    hours: TimelineHours
    events: Tuple[PackedEventLayout, ...]
    rejected: Tuple[RejectedEvent, ...]
    now: Optional[NowIndicator]

    def to_dict(self) -> Dict[str, Any]:
        cfg = self.config
        return {
            "cfg": {
                "start": cfg.start,
                "end": cfg.end,
                "number_of_days": cfg.number_of_days,
                "timeline_left_inset": cfg.timeline_left_inset,
                "format24h": cfg.format24h,
                "hour_block_height": cfg.hour_block_height,
                "unavailable_hours_color": cfg.unavailable_hours_color,
            },
            "base_date": self.base_date.isoformat() if self.base_date else None,
            "column_width": self.column_width,
            "total_height": cfg.total_height,
            "labels": [asdict(x) for x in self.hours.labels],
            "lines": [asdict(x) for x in self.hours.lines],
            "dividers": [asdict(x) for x in self.hours.dividers],
            "unavailable": [asdict(x) for x in self.hours.unavailable],
            "events": [asdict(x) for x in self.events],
            "rejected": [{"id": r.event.id, "reason": r.reason} for r in self.rejected],
            "now": asdict(self.now) if self.now is not None else None,
        }


def build_timeline(
    config: TimelineConfig,
    events: Iterable[EventInstance],
    *,
    width: float,
    base_date: DateLike | None = None,
    now: Optional[dt.datetime] = None,
    screen_width: float | None = None,
    show_now: bool = True,
) -> TimelineLayout:
    """
    One render pass: grid, unavailable shading, packed events, now marker.

    Event `left` values are absolute (inset + column offset + lane offset).
    The now marker is only produced when `now` falls on one of the columns;
    with no base_date it is placed on column 0.
    """
    base = coerce_date(base_date)
    n = config.number_of_days
    col_w = float(width) / n
    inset = float(config.timeline_left_inset)

    hours = build_timeline_hours(config, width=width, base_date=base, screen_width=screen_width)

    packed = pack_days(
        events,
        number_of_days=n,
        column_width=col_w,
        start=config.start,
        end=config.end,
        hour_block_height=config.hour_block_height,
    )
    placed = tuple(replace(lay, left=inset + lay.day_index * col_w + lay.left) for lay in packed.layouts)

    indicator: Optional[NowIndicator] = None
    if show_now:
        t = now if now is not None else dt.datetime.now()
        col = 0
        if base is not None:
            col = (t.date() - base).days
        if 0 <= col < n:
            indicator = now_indicator(
                config.start,
                now=t,
                end=config.end,
                hour_block_height=config.hour_block_height,
                left=inset + col * col_w,
                width=col_w,
            )

    return TimelineLayout(
        config=config,
        base_date=base,
        column_width=col_w,
        hours=hours,
        events=placed,
        rejected=packed.rejected,
        now=indicator,
    )


__all__ = ["TimelineLayout", "build_timeline"]
