"""daygrid.api

Stable *library* entrypoint for daygrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from daygrid.config import (
    ConfigValidationError,
    TimelineConfig,
    assert_valid_config,
    load_config,
    validate_config,
)
from daygrid.hours import LongPressHandler, build_hour_slots, build_timeline_hours
from daygrid.layout import TimelineLayout, build_timeline
from daygrid.model import (
    DaygridError,
    EventInstance,
    InvalidDayIndexError,
    InvalidIntervalError,
    LongPress,
    NewEventTime,
    PackedEventLayout,
    PackResult,
    RejectedEvent,
    TimeOfDay,
    UnavailableHoursRule,
    UnavailableRectangle,
)
from daygrid.normalize import normalize_event, normalize_events
from daygrid.now import NowIndicator, now_indicator
from daygrid.packer import pack_days, pack_events
from daygrid.presenter import (
    HOUR_BLOCK_HEIGHT,
    QUARTER_HOUR_BLOCK_HEIGHT,
    date_from_offset,
    format_time_string,
    offset_from_time,
    parse_time_string,
    time_from_offset,
)
from daygrid.unavailable import build_unavailable_blocks

__all__ = [
    # mapper
    "HOUR_BLOCK_HEIGHT",
    "QUARTER_HOUR_BLOCK_HEIGHT",
    "offset_from_time",
    "time_from_offset",
    "date_from_offset",
    "format_time_string",
    "parse_time_string",
    # resolver / packer
    "build_unavailable_blocks",
    "pack_events",
    "pack_days",
    # consumers
    "build_hour_slots",
    "build_timeline_hours",
    "LongPressHandler",
    "now_indicator",
    "NowIndicator",
    "build_timeline",
    "TimelineLayout",
    # config / input
    "TimelineConfig",
    "load_config",
    "validate_config",
    "assert_valid_config",
    "normalize_event",
    "normalize_events",
    # types
    "TimeOfDay",
    "EventInstance",
    "PackedEventLayout",
    "PackResult",
    "RejectedEvent",
    "UnavailableHoursRule",
    "UnavailableRectangle",
    "NewEventTime",
    "LongPress",
    # errors
    "DaygridError",
    "InvalidIntervalError",
    "InvalidDayIndexError",
    "ConfigValidationError",
]
