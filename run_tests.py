#!/usr/bin/env python
"""
Simple Test Runner for Spotlight
================================

Runs the test suite with pytest.

Usage:
    python run_tests.py              # Run all tests
    python run_tests.py --coverage   # Run with a coverage report
    python run_tests.py -k traverser # Run tests matching an expression
"""

import subprocess
import sys
import argparse
from pathlib import Path


def run_tests(coverage=False, keyword=None):
    """Run the test suite."""
    cmd = [
        sys.executable, "-m", "pytest",
        "tests",
        "--tb=short",               # Short traceback format
        "--durations=5",            # Show 5 slowest tests
        "-v"                        # Verbose output
    ]

    if coverage:
        cmd.extend(["--cov=spotlight", "--cov-report=term-missing"])
    if keyword:
        cmd.extend(["-k", keyword])

    print("Running Spotlight tests...")
    print("=" * 60)

    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def main():
    parser = argparse.ArgumentParser(description="Test runner for Spotlight")
    parser.add_argument("--coverage", action="store_true", help="Report coverage (needs pytest-cov)")
    parser.add_argument("-k", dest="keyword", help="Only run tests matching this expression")

    args = parser.parse_args()
    return run_tests(coverage=args.coverage, keyword=args.keyword)


if __name__ == "__main__":
    sys.exit(main())
