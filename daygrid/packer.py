# daygrid/packer.py
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from .model import (
    EventInstance,
    InvalidDayIndexError,
    InvalidIntervalError,
    PackedEventLayout,
    PackResult,
    RejectedEvent,
)
from .presenter import HOUR_BLOCK_HEIGHT, offset_from_time
from .util.console import obs_log


def validate_event(ev: EventInstance) -> None:
    if ev.end.total_minutes <= ev.start.total_minutes:
        raise InvalidIntervalError(f"event {ev.id!r}: end {ev.end} must be after start {ev.start}")


def _sort_key(item: Tuple[int, EventInstance]) -> Tuple[int, int, int]:
    pos, ev = item
    # start asc, longer first, then input order
    return (ev.start.total_minutes, -ev.duration_min, pos)


def assign_lanes(events: Sequence[EventInstance]) -> List[Tuple[int, int, int]]:
    """
    Lane assignment over already-validated events.

    Returns (lane, lane_count, group) per event, aligned with the input order.
    A group is a maximal chain of intersecting intervals; lanes restart at 0
    for each group and the group's width is split by its own lane count.
    """
    order = sorted(enumerate(events), key=_sort_key)
    result: List[Tuple[int, int, int]] = [(0, 1, 0)] * len(events)

    groups: List[List[Tuple[int, int]]] = []  # [(input pos, lane)]
    lanes: List[int] = []  # lane -> end minute of its last event
    cur: List[Tuple[int, int]] = []
    max_end = -1

    for pos, ev in order:
        s = ev.start.total_minutes
        e = ev.end.total_minutes
        if cur and s >= max_end:
            groups.append(cur)
            cur = []
            lanes = []

        lane_index = -1
        for i, lane_end in enumerate(lanes):
            if lane_end <= s:
                lane_index = i
                break
        if lane_index < 0:
            lane_index = len(lanes)
            lanes.append(e)
        else:
            lanes[lane_index] = e

        if not cur:
            max_end = e
        else:
            max_end = max(max_end, e)
        cur.append((pos, lane_index))

    if cur:
        groups.append(cur)

    for group_id, g in enumerate(groups):
        total = max(1, max(lane for _, lane in g) + 1)
        for pos, lane in g:
            result[pos] = (lane, total, group_id)
    return result


def _vertical(
    ev: EventInstance,
    *,
    start: int,
    end: int,
    hour_block_height: float,
) -> Tuple[float, float]:
    origin = offset_from_time(hour_block_height, start, 0)
    lo = start * 60
    hi = end * 60
    s = max(lo, min(hi, ev.start.total_minutes))
    e = max(lo, min(hi, ev.end.total_minutes))
    top = offset_from_time(hour_block_height, 0, s) - origin
    bottom = offset_from_time(hour_block_height, 0, e) - origin
    return top, bottom - top


def pack_events(
    events: Iterable[EventInstance],
    *,
    column_width: float = 1.0,
    start: int = 0,
    end: int = 24,
    hour_block_height: float = HOUR_BLOCK_HEIGHT,
    strict: bool = False,
) -> PackResult:
    """
    Lay out one day column of events side by side.

    Events that do not end after they start are rejected (listed in
    PackResult.rejected) and the rest of the batch is still packed; with
    strict=True the first InvalidIntervalError is raised instead.

    Output keeps input order, one layout per accepted event. `left`/`width`
    are relative to the column; with the default column_width of 1.0 they are
    fractions of it.
    """
    valid: List[EventInstance] = []
    rejected: List[RejectedEvent] = []
    for ev in events:
        try:
            validate_event(ev)
        except InvalidIntervalError as e:
            if strict:
                raise
            obs_log("packer", "warn", f"rejected {e}")
            rejected.append(RejectedEvent(event=ev, reason=str(e)))
            continue
        valid.append(ev)

    lanes = assign_lanes(valid)

    out: List[PackedEventLayout] = []
    for ev, (lane, lane_count, group) in zip(valid, lanes):
        width = float(column_width) / max(lane_count, 1)
        top, height = _vertical(ev, start=start, end=end, hour_block_height=hour_block_height)
        out.append(
            PackedEventLayout(
                event_id=ev.id,
                day_index=ev.day_index,
                top=top,
                height=height,
                left=lane * width,
                width=width,
                lane=lane,
                lane_count=lane_count,
                group=group,
            )
        )
    return PackResult(layouts=tuple(out), rejected=tuple(rejected))


def pack_days(
    events: Iterable[EventInstance],
    *,
    number_of_days: int = 1,
    column_width: float = 1.0,
    start: int = 0,
    end: int = 24,
    hour_block_height: float = HOUR_BLOCK_HEIGHT,
    strict: bool = False,
) -> PackResult:
    """Pack each day column independently; layouts come out day by day."""
    n = max(1, int(number_of_days))
    by_day: Dict[int, List[EventInstance]] = {}
    rejected: List[RejectedEvent] = []

    for ev in events:
        if not (0 <= ev.day_index < n):
            err = InvalidDayIndexError(f"event {ev.id!r}: day_index {ev.day_index} outside 0..{n - 1}")
            if strict:
                raise err
            obs_log("packer", "warn", f"rejected {err}")
            rejected.append(RejectedEvent(event=ev, reason=str(err)))
            continue
        by_day.setdefault(ev.day_index, []).append(ev)

    layouts: List[PackedEventLayout] = []
    for day in sorted(by_day):
        res = pack_events(
            by_day[day],
            column_width=column_width,
            start=start,
            end=end,
            hour_block_height=hour_block_height,
            strict=strict,
        )
        layouts.extend(res.layouts)
        rejected.extend(res.rejected)

    return PackResult(layouts=tuple(layouts), rejected=tuple(rejected))


__all__ = ["validate_event", "assign_lanes", "pack_events", "pack_days"]
