"""Timeline configuration (library-facing)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .model import DaygridError, UnavailableHoursRule
from .presenter import HOUR_BLOCK_HEIGHT
from .util.timeparse import coerce_date


class ConfigValidationError(DaygridError):
    """Raised when a timeline configuration fails validation."""


# camelCase option names -> field names
_ALIASES = {
    "numberOfDays": "number_of_days",
    "timelineLeftInset": "timeline_left_inset",
    "unavailableHours": "unavailable_hours",
    "unavailableHoursColor": "unavailable_hours_color",
    "hourBlockHeight": "hour_block_height",
}


@dataclass(frozen=True)
class TimelineConfig:
    start: int = 0
    end: int = 24
    number_of_days: int = 1
    timeline_left_inset: float = 0.0
    format24h: bool = False
    unavailable_hours: Tuple[UnavailableHoursRule, ...] = ()
    unavailable_hours_color: Optional[str] = None
    hour_block_height: float = HOUR_BLOCK_HEIGHT

    @property
    def quarter_block_height(self) -> float:
        return self.hour_block_height / 4

    @property
    def total_height(self) -> float:
        return (self.end - self.start) * self.hour_block_height

    @classmethod
    def from_dict(cls, d: Dict[str, Any] | None) -> "TimelineConfig":
        """Build a config from option names (camelCase or snake_case); validates first."""
        opts = _canonical(d or {})
        assert_valid_config(opts)
        kw: Dict[str, Any] = {}
        if "start" in opts:
            kw["start"] = int(opts["start"])
        if "end" in opts:
            kw["end"] = int(opts["end"])
        if "number_of_days" in opts:
            kw["number_of_days"] = int(opts["number_of_days"])
        if "timeline_left_inset" in opts:
            kw["timeline_left_inset"] = float(opts["timeline_left_inset"])
        if "format24h" in opts:
            kw["format24h"] = bool(opts["format24h"])
        if "hour_block_height" in opts:
            kw["hour_block_height"] = float(opts["hour_block_height"])
        color = opts.get("unavailable_hours_color")
        if isinstance(color, str) and color.strip():
            kw["unavailable_hours_color"] = color.strip()
        rules = opts.get("unavailable_hours")
        if isinstance(rules, list):
            kw["unavailable_hours"] = tuple(rule_from_dict(r) for r in rules)
        return cls(**kw)


def _canonical(d: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in d.items():
        out[_ALIASES.get(k, k)] = v
    return out


def _is_num(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _rule_weekday(r: Dict[str, Any]) -> Any:
    """`weekday` is Monday=0; camelCase `dayOfWeek` follows JS getDay() (Sunday=0)."""
    if "weekday" in r:
        return r["weekday"]
    dow = r.get("dayOfWeek")
    if _is_int(dow) and 0 <= dow <= 6:
        return (dow + 6) % 7
    return dow


def rule_from_dict(r: Dict[str, Any]) -> UnavailableHoursRule:
    day_index = r.get("day_index", r.get("dayIndex"))
    weekday = _rule_weekday(r)
    date = r.get("date")
    return UnavailableHoursRule(
        start=float(r.get("start", 0) or 0),
        end=float(r.get("end", 0) or 0),
        day_index=int(day_index) if _is_int(day_index) else None,
        weekday=int(weekday) if _is_int(weekday) else None,
        date=coerce_date(date) if date else None,
    )


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _validate_rule(i: int, r: Any, errs: List[str]) -> None:
    label = f"unavailableHours[{i}]"
    if not isinstance(r, dict):
        errs.append(f"{label} must be an object")
        return
    for k in ("start", "end"):
        if k in r:
            _require(_is_num(r[k]), f"{label}.{k} must be a number", errs)
    if "weekday" in r:
        wd = r["weekday"]
        _require(_is_int(wd) and 0 <= wd <= 6, f"{label}.weekday must be an int 0..6 (Monday=0)", errs)
    elif r.get("dayOfWeek") is not None:
        wd = r["dayOfWeek"]
        _require(_is_int(wd) and 0 <= wd <= 6, f"{label}.dayOfWeek must be an int 0..6 (Sunday=0)", errs)
    di = r.get("day_index", r.get("dayIndex"))
    if di is not None:
        _require(_is_int(di) and di >= 0, f"{label}.day_index must be an int >= 0", errs)
    d = r.get("date")
    if d is not None:
        try:
            coerce_date(d)
        except ValueError:
            errs.append(f"{label}.date must be YYYY-MM-DD")


def validate_config(d: Dict[str, Any], *, label: str = "config") -> List[str]:
    if not isinstance(d, dict):
        return [f"{label}: config must be a dict/object"]
    opts = _canonical(d)
    errs: List[str] = []

    start = opts.get("start", 0)
    end = opts.get("end", 24)
    _require(_is_int(start), f"{label}: start must be an int hour", errs)
    _require(_is_int(end), f"{label}: end must be an int hour", errs)
    if _is_int(start) and _is_int(end):
        _require(0 <= start < end <= 24, f"{label}: require 0 <= start < end <= 24 (got {start}..{end})", errs)

    n = opts.get("number_of_days", 1)
    _require(_is_int(n) and n >= 1, f"{label}: numberOfDays must be an int >= 1", errs)

    inset = opts.get("timeline_left_inset", 0)
    _require(_is_num(inset) and inset >= 0, f"{label}: timelineLeftInset must be a number >= 0", errs)

    hbh = opts.get("hour_block_height", HOUR_BLOCK_HEIGHT)
    _require(_is_num(hbh) and hbh > 0, f"{label}: hourBlockHeight must be a number > 0", errs)

    if "format24h" in opts:
        _require(isinstance(opts["format24h"], bool), f"{label}: format24h must be a bool", errs)

    color = opts.get("unavailable_hours_color")
    if color is not None:
        _require(isinstance(color, str), f"{label}: unavailableHoursColor must be a string", errs)

    rules = opts.get("unavailable_hours")
    if rules is not None:
        if not isinstance(rules, list):
            errs.append(f"{label}: unavailableHours must be a list")
        else:
            for i, r in enumerate(rules):
                _validate_rule(i, r, errs)

    return errs


def assert_valid_config(d: Dict[str, Any]) -> None:
    errs = validate_config(d)
    if errs:
        raise ConfigValidationError(errs[0])


def load_config(path: Union[str, Path]) -> TimelineConfig:
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise ConfigValidationError(f"config must be a JSON object; got {type(obj).__name__}")
    return TimelineConfig.from_dict(obj)


__all__ = [
    "ConfigValidationError",
    "TimelineConfig",
    "rule_from_dict",
    "validate_config",
    "assert_valid_config",
    "load_config",
]
