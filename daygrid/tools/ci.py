from __future__ import annotations

import argparse
import os
import shutil
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

Step = Tuple[str, List[str]]


@dataclass(frozen=True)
class StepResult:
    label: str
    rc: int
    seconds: float

    @property
    def ok(self) -> bool:
        return self.rc == 0


def _repo_root() -> Path:
    # <repo>/daygrid/tools/ci.py
    return Path(__file__).resolve().parents[2]


def build_steps(*, repo: Path, skip_compileall: bool, skip_lint: bool, skip_tests: bool, skip_bench: bool) -> List[Step]:
    steps: List[Step] = []
    if not skip_compileall:
        steps.append(("compileall", [sys.executable, "-m", "compileall", "-q", str(repo / "daygrid")]))
    if not skip_lint:
        if shutil.which("ruff") is not None:
            steps.append(("ruff check", ["ruff", "check", "."]))
        else:
            print("[daygrid-ci] WARN: ruff not found; skipping lint")
    if not skip_tests:
        steps.append(("unittest", [sys.executable, "-m", "unittest", "discover", "-s", "tests"]))
    if not skip_bench:
        steps.append(("bench", [sys.executable, "-m", "daygrid.tools.bench", "--n", "500"]))
    return steps


def run_steps(steps: Sequence[Step], *, cwd: Path, env: Mapping[str, str], keep_going: bool = False) -> List[StepResult]:
    """
    Run steps in order with their output passed straight through.

    Stops at the first failing step unless `keep_going` is set; skipped steps
    do not appear in the result.
    """
    results: List[StepResult] = []
    for label, cmd in steps:
        print(f"[daygrid-ci] RUN: {label}", flush=True)
        t0 = time.perf_counter()
        rc = subprocess.call(cmd, cwd=str(cwd), env=dict(env))
        res = StepResult(label=label, rc=rc, seconds=time.perf_counter() - t0)
        results.append(res)
        print(f"[daygrid-ci] {'OK' if res.ok else 'FAIL'}: {label} rc={rc} ({res.seconds:.2f}s)", flush=True)
        if not res.ok and not keep_going:
            break
    return results


def summarize(results: Sequence[StepResult], *, planned: int) -> Tuple[int, str]:
    failed = [r.label for r in results if not r.ok]
    skipped = planned - len(results)
    total = sum(r.seconds for r in results)
    if failed:
        line = f"[daygrid-ci] RESULT: FAIL ({', '.join(failed)}; {skipped} not run; {total:.2f}s)"
        return 2, line
    return 0, f"[daygrid-ci] RESULT: OK ({len(results)} step(s); {total:.2f}s)"


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="daygrid-ci", description="One-command CI gate.")
    ap.add_argument("--skip-compileall", action="store_true", help="Skip python -m compileall.")
    ap.add_argument("--skip-lint", action="store_true", help="Skip ruff checks (if installed).")
    ap.add_argument("--skip-tests", action="store_true", help="Skip unit/contract tests.")
    ap.add_argument("--skip-bench", action="store_true", help="Skip the packing micro-benchmark.")
    ap.add_argument("--keep-going", action="store_true", help="Run every step even after a failure.")
    ns = ap.parse_args(argv)

    repo = _repo_root()
    env = os.environ.copy()
    env["PYTHONPATH"] = str(repo)
    # Observability lines would clutter test output.
    env.pop("DAYGRID_OBS_LOG", None)

    steps = build_steps(
        repo=repo,
        skip_compileall=bool(ns.skip_compileall),
        skip_lint=bool(ns.skip_lint),
        skip_tests=bool(ns.skip_tests),
        skip_bench=bool(ns.skip_bench),
    )
    results = run_steps(steps, cwd=repo, env=env, keep_going=bool(ns.keep_going))
    rc, line = summarize(results, planned=len(steps))
    print(line)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
