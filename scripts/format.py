#!/usr/bin/env python3
"""
Format splunk_mcp and its tests with isort and black.
"""

import subprocess
import sys

TARGETS = ["splunk_mcp", "tests", "scripts"]


def main() -> int:
    for tool in ("isort", "black"):
        print(f"Running {tool}...")
        result = subprocess.run([tool, *TARGETS], capture_output=True, text=True)
        if result.returncode != 0:
            print(result.stdout)
            print(result.stderr)
            print(f"{tool} failed with exit code {result.returncode}")
            return 1
    print("All formatting completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
