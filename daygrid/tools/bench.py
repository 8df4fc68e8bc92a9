#!/usr/bin/env python3
from __future__ import annotations

import argparse
import random
import statistics
import sys
import time
from typing import List, Tuple

from daygrid.config import TimelineConfig
from daygrid.layout import build_timeline
from daygrid.model import EventInstance, TimeOfDay
from daygrid.packer import pack_events


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daygrid-bench] ERROR: {msg}", file=sys.stderr)
    return rc


def _time_one(fn, *, repeats: int, warmup: int) -> Tuple[float, float, float]:
    for _ in range(max(0, warmup)):
        fn()

    samples_ms: List[float] = []
    for _ in range(max(1, repeats)):
        t0 = time.perf_counter_ns()
        fn()
        t1 = time.perf_counter_ns()
        samples_ms.append((t1 - t0) / 1_000_000.0)

    return (min(samples_ms), statistics.fmean(samples_ms), max(samples_ms))


def make_events(n: int, *, seed: int = 1, number_of_days: int = 1) -> List[EventInstance]:
    """Deterministic pseudo-random quarter-hour events, 15 minutes to 4 hours long."""
    rng = random.Random(seed)
    out: List[EventInstance] = []
    for i in range(max(0, n)):
        s = rng.randrange(0, 23 * 4) * 15
        e = min(s + rng.randrange(1, 17) * 15, 24 * 60)
        out.append(
            EventInstance(
                id=f"bench-{i:06d}",
                start=TimeOfDay.from_minutes(s),
                end=TimeOfDay.from_minutes(e),
                day_index=rng.randrange(max(1, number_of_days)),
            )
        )
    return out


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="daygrid-bench", description="Micro-benchmark daygrid packing and layout.")
    ap.add_argument("--n", type=int, default=250, help="Number of events (default: 250)")
    ap.add_argument("--days", type=int, default=7, help="Day columns for the layout step (default: 7)")
    ap.add_argument("--seed", type=int, default=1, help="RNG seed")
    ap.add_argument("--repeats", type=int, default=1, help="Measurement repeats (min/avg/max over repeats)")
    ap.add_argument("--warmup", type=int, default=0, help="Warmup runs per step before measuring")
    ns = ap.parse_args(argv)

    if ns.n < 0:
        return _die("--n must be >= 0")
    if ns.days < 1:
        return _die("--days must be >= 1")

    day_events = make_events(int(ns.n), seed=int(ns.seed))
    week_events = make_events(int(ns.n), seed=int(ns.seed), number_of_days=int(ns.days))
    cfg = TimelineConfig(number_of_days=int(ns.days), timeline_left_inset=50.0)

    print(f"[daygrid-bench] n={ns.n} days={ns.days} seed={ns.seed} repeats={ns.repeats} warmup={ns.warmup}")

    def _pack() -> None:
        res = pack_events(day_events, column_width=300.0)
        if len(res.layouts) + len(res.rejected) != len(day_events):
            raise RuntimeError("pack lost events")

    def _layout() -> None:
        _ = build_timeline(cfg, week_events, width=float(ns.days) * 100.0, show_now=False)

    mn, av, mx = _time_one(_pack, repeats=int(ns.repeats), warmup=int(ns.warmup))
    print(f"[daygrid-bench] pack:   {mn:.2f}/{av:.2f}/{mx:.2f} ms (min/avg/max)")

    mn, av, mx = _time_one(_layout, repeats=int(ns.repeats), warmup=int(ns.warmup))
    print(f"[daygrid-bench] layout: {mn:.2f}/{av:.2f}/{mx:.2f} ms (min/avg/max)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
