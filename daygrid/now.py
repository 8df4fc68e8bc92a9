# daygrid/now.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from .presenter import HOUR_BLOCK_HEIGHT, offset_from_time


@dataclass(frozen=True)
class NowIndicator:
    top: float
    left: float
    width: float
    visible: bool


def now_indicator(
    start: int = 0,
    *,
    now: Optional[dt.datetime] = None,
    end: int = 24,
    hour_block_height: float = HOUR_BLOCK_HEIGHT,
    left: float = 0.0,
    width: float = 0.0,
) -> NowIndicator:
    """Position of the live-time marker; `visible` is False outside start..end."""
    t = now if now is not None else dt.datetime.now()
    top = offset_from_time(hour_block_height, t.hour - start, t.minute)
    minutes = t.hour * 60 + t.minute
    visible = start * 60 <= minutes <= end * 60
    return NowIndicator(top=top, left=float(left), width=float(width), visible=visible)


__all__ = ["NowIndicator", "now_indicator"]
