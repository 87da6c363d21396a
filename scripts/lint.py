#!/usr/bin/env python3
"""
Lint script: style, formatting and type checks for splunk_mcp and its tests.
"""

import subprocess
import sys
from typing import List

TARGETS = ["splunk_mcp", "tests"]

CHECKS = [
    ["flake8", "--max-line-length", "100"],
    ["black", "--check"],
    ["isort", "--check-only"],
    ["mypy", "--ignore-missing-imports"],
]


def run_check(command: List[str]) -> bool:
    """Run one checker over the targets, printing its output on failure."""
    full = command + TARGETS
    print(f"Running: {' '.join(full)}")
    result = subprocess.run(full, capture_output=True, text=True)
    if result.returncode != 0:
        print(f"{command[0]} failed with exit code {result.returncode}")
        print(result.stdout)
        print(result.stderr)
        return False
    return True


def main() -> int:
    failed = [command[0] for command in CHECKS if not run_check(command)]
    if failed:
        print(f"Linting failed: {', '.join(failed)}")
        return 1
    print("All linting checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
