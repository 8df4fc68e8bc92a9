# daygrid/hours.py
from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .config import TimelineConfig
from .model import LongPress, NewEventTime, UnavailableRectangle
from .presenter import (
    HOUR_BLOCK_HEIGHT,
    date_from_offset,
    format_time_string,
    new_event_time,
    offset_from_time,
    time_from_offset,
)
from .unavailable import build_unavailable_blocks
from .util.timeparse import DateLike, coerce_date

EVENT_DIFF = 20
LABEL_GUTTER = 16
LABEL_NUDGE = 6

PressCallback = Callable[[str, NewEventTime], None]


@dataclass(frozen=True)
class HourSlot:
    hour: int
    minutes: int
    time_text: str
    top: float


@dataclass(frozen=True)
class TimeLabel:
    text: str
    top: float
    width: float


@dataclass(frozen=True)
class Gridline:
    key: str
    top: float
    left: float
    width: float


@dataclass(frozen=True)
class DayDivider:
    index: int
    right: float


@dataclass(frozen=True)
class TimelineHours:
    slots: Tuple[HourSlot, ...]
    labels: Tuple[TimeLabel, ...]
    lines: Tuple[Gridline, ...]
    dividers: Tuple[DayDivider, ...]
    unavailable: Tuple[UnavailableRectangle, ...]
    unavailable_color: Optional[str] = None


@functools.lru_cache(maxsize=1024)
def _offset(hour_block_height: float, hour: int, minutes: int) -> float:
    return offset_from_time(hour_block_height, hour, minutes)


def format_hour_label(hour: int, minutes: int, format24h: bool) -> str:
    minute_s = "00" if minutes == 0 else f"{minutes}"
    if format24h:
        return f"{hour:02d}:{minute_s}"
    period = "AM" if hour < 12 or hour == 24 else "PM"
    if hour == 0:
        display = 12
    elif hour > 12:
        display = hour - 12
    else:
        display = hour
    return f"{display}:{minute_s} {period}"


def build_hour_slots(
    start: int = 0,
    end: int = 24,
    format24h: bool = False,
    *,
    hour_block_height: float = HOUR_BLOCK_HEIGHT,
) -> List[HourSlot]:
    """Quarter-hour rows from start:00 through end:45; the first row is unlabeled."""
    origin = _offset(hour_block_height, start, 0)
    out: List[HourSlot] = []
    for hour in range(start, end + 1):
        for quarter in range(4):
            minutes = quarter * 15
            if hour == start and minutes == 0:
                text = ""
            else:
                text = format_hour_label(hour, minutes, format24h)
            top = _offset(hour_block_height, hour, minutes) - origin
            out.append(HourSlot(hour=hour, minutes=minutes, time_text=text, top=top))
    return out


def build_timeline_hours(
    config: TimelineConfig,
    *,
    width: float,
    base_date: DateLike | None = None,
    screen_width: float | None = None,
) -> TimelineHours:
    """
    Static grid for one render pass.

    `width` is the day-column area; `screen_width` defaults to inset + width
    and sizes the horizontal gridlines.
    """
    inset = float(config.timeline_left_inset)
    screen_w = float(screen_width) if screen_width is not None else inset + float(width)

    slots = build_hour_slots(
        config.start,
        config.end,
        config.format24h,
        hour_block_height=config.hour_block_height,
    )

    labels: List[TimeLabel] = []
    lines: List[Gridline] = []
    for s in slots:
        labels.append(TimeLabel(text=s.time_text, top=s.top - LABEL_NUDGE, width=inset - LABEL_GUTTER))
        if s.hour == config.start and s.minutes == 0:
            continue
        lines.append(
            Gridline(
                key=f"{s.hour}.{s.minutes}",
                top=s.top,
                left=inset - LABEL_GUTTER,
                width=screen_w - EVENT_DIFF,
            )
        )

    n = config.number_of_days
    dividers = [DayDivider(index=i, right=(i + 1) * float(width) / n) for i in range(n)]

    blocks = build_unavailable_blocks(
        config.unavailable_hours,
        day_start=config.start,
        day_end=config.end,
        hour_block_height=config.hour_block_height,
        width=width,
        left_inset=inset,
        number_of_days=n,
        base_date=base_date,
    )

    return TimelineHours(
        slots=tuple(slots),
        labels=tuple(labels),
        lines=tuple(lines),
        dividers=tuple(dividers),
        unavailable=tuple(blocks),
        unavailable_color=config.unavailable_hours_color,
    )


class LongPressHandler:
    """
    Background long-press handling for the grid area.

    The in-flight gesture is not stored here: `long_press` returns a LongPress
    the caller holds and hands back to `press_out` on release.
    """

    def __init__(
        self,
        config: TimelineConfig,
        *,
        width: float,
        base_date: DateLike | None = None,
        on_long_press: Optional[PressCallback] = None,
        on_long_press_out: Optional[PressCallback] = None,
    ) -> None:
        self.config = config
        self.width = float(width)
        self.base_date = coerce_date(base_date)
        self.on_long_press = on_long_press
        self.on_long_press_out = on_long_press_out

    def resolve(self, x: float, y: float) -> LongPress:
        cfg = self.config
        origin = _offset(cfg.hour_block_height, cfg.start, 0)
        t = time_from_offset(
            float(y) + origin,
            cfg.quarter_block_height,
            min_hour=cfg.start,
            max_hour=cfg.end,
        )
        date = None
        if cfg.number_of_days > 1:
            date = date_from_offset(
                x,
                cfg.timeline_left_inset,
                cfg.number_of_days,
                self.base_date,
                width=self.width,
            )
        return LongPress(
            time_string=format_time_string(t.hour, t.minute, date),
            time=new_event_time(t.hour, t.minute, date),
        )

    def long_press(self, x: float, y: float) -> LongPress:
        press = self.resolve(x, y)
        if self.on_long_press is not None:
            self.on_long_press(press.time_string, press.time)
        return press

    def press_out(self, press: Optional[LongPress]) -> None:
        if press is None:
            return
        if self.on_long_press_out is not None:
            self.on_long_press_out(press.time_string, press.time)


__all__ = [
    "EVENT_DIFF",
    "HourSlot",
    "TimeLabel",
    "Gridline",
    "DayDivider",
    "TimelineHours",
    "format_hour_label",
    "build_hour_slots",
    "build_timeline_hours",
    "LongPressHandler",
]
