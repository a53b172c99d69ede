#!/usr/bin/env python3
"""Run pytest in Qt offscreen mode with safe defaults.

Usage:
  python scripts/run_tests_offscreen.py [--timeout SECONDS] [--] [pytest args...]

Examples:
  python scripts/run_tests_offscreen.py tests/test_backend_dispatch.py::test_save_photo_copies_and_advances
  python scripts/run_tests_offscreen.py -- -k copy -q
"""

from __future__ import annotations

import argparse
import os
import shlex
import subprocess
import sys


def main() -> int:
    p = argparse.ArgumentParser(description="Run pytest with Qt offscreen mode and safe defaults")
    p.add_argument("--timeout", type=int, default=300, help="Maximum seconds to allow the whole pytest run")
    p.add_argument("--verbose", action="store_true", help="Don't use -q (quiet)")
    p.add_argument(
        "pytest_args", nargs=argparse.REMAINDER, help="Additional pytest args (e.g. tests/test_file.py::test_name)"
    )
    args = p.parse_args()

    env = os.environ.copy()
    # No window system needed: the backend is driven without a visible QML scene in tests
    env.setdefault("QT_QPA_PLATFORM", "offscreen")
    # Keep test runs away from the user's real settings.json
    env.setdefault("PHOTO_SORTER_SETTINGS", os.path.join(os.path.abspath(".pytest_cache"), "settings.json"))

    cmd = [sys.executable, "-m", "pytest"]
    if not args.verbose:
        cmd += ["-q", "-x", "--maxfail=1"]
    # Per-test timeout via the pytest-timeout plugin
    cmd.append(f"--timeout={min(60, args.timeout)}")
    cmd += [a for a in args.pytest_args if a != "--"]

    print("Running:", " ".join(shlex.quote(c) for c in cmd))
    try:
        completed = subprocess.run(cmd, env=env, check=False, timeout=args.timeout)
        return completed.returncode
    except subprocess.TimeoutExpired:
        print(f"pytest run timed out after {args.timeout} seconds", file=sys.stderr)
        return 124


if __name__ == "__main__":
    raise SystemExit(main())
