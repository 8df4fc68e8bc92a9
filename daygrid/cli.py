from __future__ import annotations

import argparse
import datetime as dt
import json
import os
import sys
from pathlib import Path
from typing import Any, List

from .config import ConfigValidationError, TimelineConfig, load_config
from .layout import build_timeline
from .normalize import normalize_events
from .util.console import eprint, obs_log
from .util.timeparse import parse_date_yyyy_mm_dd, parse_hhmm


def _die(msg: str, rc: int = 2) -> int:
    eprint(f"[daygrid] ERROR: {msg}")
    return rc


def _load_events(path: Path) -> List[Any]:
    obj = json.loads(path.read_text(encoding="utf-8", errors="replace"))
    if isinstance(obj, dict):
        obj = obj.get("events")
    if not isinstance(obj, list):
        raise ValueError("events must be a JSON list (or an object with an 'events' list)")
    return obj


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="daygrid",
        description="Lay out a day/multi-day timeline (grid, unavailable hours, packed events) as JSON.",
    )
    ap.add_argument("--events", required=True, help="Events JSON path (list of {id,start,end,day|date})")
    ap.add_argument("--config", default=None, help="Timeline config JSON path (default: 0-24, one day)")
    ap.add_argument("--width", type=float, default=300.0, help="Day-column area width in pixels (default: 300)")
    ap.add_argument(
        "--date",
        default=os.getenv("DAYGRID_DATE") or None,
        help="Date of the first column YYYY-MM-DD (default: env DAYGRID_DATE, else undated)",
    )
    ap.add_argument("--now", default=None, help="Wall-clock time for the now marker, HH:MM (default: current time)")
    ap.add_argument("--no-now", action="store_true", help="Omit the now marker")
    ap.add_argument("--out", default=None, help="Output JSON path (default: stdout)")
    ns = ap.parse_args(argv)

    try:
        cfg = load_config(Path(ns.config)) if ns.config else TimelineConfig()
    except ConfigValidationError as e:
        return _die(f"Invalid config: {e}", rc=3)
    except (OSError, ValueError) as e:
        return _die(f"Failed to load config: {ns.config} ({e})")

    try:
        base_date = parse_date_yyyy_mm_dd(ns.date) if ns.date else None
    except ValueError:
        return _die(f"Invalid --date value: {ns.date!r}")

    now = None
    if ns.now:
        try:
            hh, mm = parse_hhmm(ns.now)
        except ValueError as e:
            return _die(str(e))
        if hh == 24:
            return _die(f"--now must be within 00:00-23:59 (got {ns.now!r})")
        day = base_date or dt.date.today()
        now = dt.datetime(day.year, day.month, day.day) + dt.timedelta(hours=hh, minutes=mm)

    events_path = Path(ns.events)
    if not events_path.exists():
        return _die(f"Missing events JSON: {events_path}")
    try:
        records = _load_events(events_path)
    except (OSError, ValueError) as e:
        return _die(f"Failed to load JSON: {events_path} ({e})")

    events, skipped = normalize_events(records, base_date=base_date)
    if skipped:
        obs_log("cli", "info", f"skipped {skipped} malformed event record(s)")

    layout = build_timeline(cfg, events, width=float(ns.width), base_date=base_date, now=now, show_now=not ns.no_now)
    data = json.dumps(layout.to_dict(), ensure_ascii=False, sort_keys=True, indent=2)

    if ns.out:
        out = Path(ns.out).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(data + "\n", encoding="utf-8", newline="\n")
        print(str(out))
    else:
        sys.stdout.write(data + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
