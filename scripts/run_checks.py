#!/usr/bin/env python3
"""Run repository checks: ruff, pyright, and the offscreen test suite.

Exits non-zero on the first failing step so CI can observe status.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]


def run(cmd: list[str]) -> int:
    print("=>", " ".join(cmd))
    res = subprocess.run(cmd, check=False, cwd=_ROOT)
    return res.returncode


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--fix", action="store_true", help="Let ruff apply safe fixes")
    parser.add_argument("--no-tests", action="store_true", help="Skip running pytest")
    args = parser.parse_args()

    steps: list[tuple[str, list[str]]] = [
        ("ruff", [sys.executable, "-m", "ruff", "check", *(["--fix"] if args.fix else []), "photo_sorter", "tests"]),
        ("pyright", [sys.executable, "-m", "pyright"]),
    ]
    if not args.no_tests:
        steps.append(("pytest", [sys.executable, str(_ROOT / "scripts" / "run_tests_offscreen.py")]))

    for name, cmd in steps:
        rc = run(cmd)
        if rc != 0:
            print(f"{name} failed")
            return rc

    print("All checks passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
