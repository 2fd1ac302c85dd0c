#!/usr/bin/env python3
"""
Test runner for claude-messages-sdk.

Allows running the test suite with:
    python -m tests

Arguments are passed straight to pytest.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def main():
    """Run the test suite using pytest."""
    import pytest

    tests_dir = Path(__file__).parent
    args = sys.argv[1:] or [str(tests_dir), "-v", "--tb=short"]

    exit_code = pytest.main(args)
    if exit_code != 0:
        print(f"\nTests failed with exit code: {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
