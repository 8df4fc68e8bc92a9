# daygrid/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# Vertical pixel offset from the grid top.
PixelOffset = float


class DaygridError(ValueError):
    """Base class for input errors raised by daygrid."""


class InvalidIntervalError(DaygridError):
    """Raised when an event does not end strictly after it starts."""


class InvalidDayIndexError(DaygridError):
    """Raised when an event targets a day column outside the grid."""


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hour: int
    minute: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.hour <= 24) or not (0 <= self.minute <= 59):
            raise ValueError(f"Invalid time of day: {self.hour}:{self.minute}")
        if self.hour == 24 and self.minute != 0:
            raise ValueError(f"Invalid time of day: {self.hour}:{self.minute}")

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    @classmethod
    def from_minutes(cls, total: int) -> "TimeOfDay":
        return cls(hour=int(total) // 60, minute=int(total) % 60)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class UnavailableHoursRule:
    start: float
    end: float

    # Targeting; all None means "every column".
    day_index: Optional[int] = None
    weekday: Optional[int] = None  # Monday=0
    date: Optional[dt.date] = None

    @property
    def targeted(self) -> bool:
        return self.day_index is not None or self.weekday is not None or self.date is not None


@dataclass(frozen=True)
class UnavailableRectangle:
    top: float
    height: float
    left: float
    width: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class EventInstance:
    id: str
    start: TimeOfDay
    end: TimeOfDay
    day_index: int = 0
    title: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def duration_min(self) -> int:
        return self.end.total_minutes - self.start.total_minutes

    def overlaps(self, other: "EventInstance") -> bool:
        return (
            self.start.total_minutes < other.end.total_minutes
            and other.start.total_minutes < self.end.total_minutes
        )


@dataclass(frozen=True)
class PackedEventLayout:
    event_id: str
    day_index: int
    top: float
    height: float
    left: float
    width: float
    lane: int
    lane_count: int
    group: int


@dataclass(frozen=True)
class RejectedEvent:
    event: EventInstance
    reason: str


@dataclass(frozen=True)
class PackResult:
    layouts: Tuple[PackedEventLayout, ...]
    rejected: Tuple[RejectedEvent, ...] = ()

    def by_id(self) -> Dict[str, PackedEventLayout]:
        return {lay.event_id: lay for lay in self.layouts}


@dataclass(frozen=True)
class NewEventTime:
    hour: int
    minutes: int
    date: Optional[str] = None


@dataclass(frozen=True)
class LongPress:
    """One long-press gesture, held by the caller until the press is released."""

    time_string: str
    time: NewEventTime


__all__ = [
    "PixelOffset",
    "DaygridError",
    "InvalidIntervalError",
    "InvalidDayIndexError",
    "TimeOfDay",
    "UnavailableHoursRule",
    "UnavailableRectangle",
    "EventInstance",
    "PackedEventLayout",
    "RejectedEvent",
    "PackResult",
    "NewEventTime",
    "LongPress",
]
