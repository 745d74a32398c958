#!/usr/bin/env python3
"""
Adyen Gateway Test Runner

Usage:
    python run_tests.py                 # Run all tests
    python run_tests.py --unit          # Run only unit tests
    python run_tests.py --integration   # Run only integration tests
    python run_tests.py --codec         # Run only codec tests
    python run_tests.py --api           # Run only HTTP API tests
    python run_tests.py --coverage      # Run with coverage report
    python run_tests.py --ci            # CI mode (no interactive output)
"""

import argparse
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Optional

CATEGORIES = ("unit", "integration", "payment", "codec", "api")


class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


class TestRunner:
    """Wraps pytest invocations for each marker category."""

    def __init__(self, ci_mode: bool = False):
        self.ci_mode = ci_mode
        self.start_time = time.time()
        self.results = {}

    def _print(self, color: str, symbol: str, message: str):
        if self.ci_mode:
            print(f"{symbol} {message}")
        else:
            print(f"{color}{symbol} {message}{Colors.RESET}")

    def print_section(self, title: str):
        if not self.ci_mode:
            print(f"\n{Colors.BOLD}{Colors.BLUE}{title}{Colors.RESET}")
            print(f"{Colors.BLUE}{'-' * len(title)}{Colors.RESET}")

    def check_environment(self) -> bool:
        if not Path("tests").exists():
            self._print(Colors.RED, "✗", "tests/ directory not found.")
            return False
        return True

    def run_linting(self) -> bool:
        self.print_section("Running Code Linting")
        try:
            result = subprocess.run(
                ["ruff", "check", "adyen_gateway/", "tests/"],
                capture_output=True,
                text=True,
                timeout=60
            )
        except subprocess.TimeoutExpired:
            self._print(Colors.RED, "✗", "Linting timed out")
            return False
        except FileNotFoundError:
            self._print(Colors.YELLOW, "⚠", "Ruff not found, skipping linting")
            return True

        if result.returncode != 0:
            self._print(Colors.RED, "✗", "Linting failed")
            if not self.ci_mode:
                print(result.stdout)
            return False
        self._print(Colors.GREEN, "✓", "Linting passed")
        return True

    def run_pytest(self, markers: Optional[List[str]] = None, coverage: bool = False) -> bool:
        cmd = [sys.executable, "-m", "pytest"]

        if markers:
            cmd.extend(["-m", " or ".join(markers)])

        if coverage:
            cmd.extend([
                "--cov=adyen_gateway",
                "--cov-report=term-missing",
                "--cov-fail-under=90"
            ])

        cmd.append("-q" if self.ci_mode else "-v")
        cmd.extend(["--tb=short", "--strict-markers"])

        try:
            result = subprocess.run(cmd, timeout=600)
        except subprocess.TimeoutExpired:
            self._print(Colors.RED, "✗", "Tests timed out after 10 minutes")
            return False
        return result.returncode == 0

    def run_category(self, name: Optional[str], coverage: bool = False) -> bool:
        label = name or ("coverage" if coverage else "all")
        self.print_section(f"Running {label.title()} Tests")
        success = self.run_pytest(markers=[name] if name else None, coverage=coverage)
        self.results[label] = success
        return success

    def print_summary(self) -> bool:
        duration = time.time() - self.start_time

        for label, success in self.results.items():
            if success:
                self._print(Colors.GREEN, "✓", f"{label.title()} tests passed")
            else:
                self._print(Colors.RED, "✗", f"{label.title()} tests failed")

        print(f"\nTotal duration: {duration:.2f} seconds")
        return all(self.results.values())


def main():
    parser = argparse.ArgumentParser(description="Adyen Gateway Test Runner")
    for category in CATEGORIES:
        parser.add_argument(f"--{category}", action="store_true", help=f"Run {category} tests only")
    parser.add_argument("--coverage", action="store_true", help="Run with coverage report")
    parser.add_argument("--ci", action="store_true", help="CI mode (minimal output)")
    parser.add_argument("--no-lint", action="store_true", help="Skip linting")

    args = parser.parse_args()

    runner = TestRunner(ci_mode=args.ci)

    if not runner.check_environment():
        sys.exit(1)

    if not args.no_lint and not runner.run_linting() and args.ci:
        sys.exit(1)

    selected = next((category for category in CATEGORIES if getattr(args, category)), None)
    runner.run_category(selected, coverage=args.coverage)

    sys.exit(0 if runner.print_summary() else 1)


if __name__ == "__main__":
    main()
