"""Development script to run checks (formatting, linting, types, tests)."""

import argparse
import subprocess
import sys


def run_command(command: list[str], step_name: str) -> None:
    """Run a shell command as a step in the development process."""
    print(f"\n--- Running Step: {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError:
        print(f"\n❌ Failed: {step_name}")
        sys.exit(1)


def main() -> None:
    """Run the development checks, optionally converting a sample crate."""
    parser = argparse.ArgumentParser(description="Run development checks.")
    parser.add_argument(
        "--ci", action="store_true", help="Check only, without rewriting any files"
    )
    parser.add_argument(
        "--sample",
        help="rustdoc JSON file to convert to stdout after the checks pass",
    )
    args = parser.parse_args()

    if args.ci:
        run_command(["ruff", "format", "--check"], "Ruff Format Check")
        run_command(["ruff", "check"], "Ruff Linting")
    else:
        run_command(["ruff", "format"], "Ruff Formatting")
        run_command(["ruff", "check", "--fix"], "Ruff Linting & Fixes")
    run_command(["mypy", "rustdoc_md"], "Type Checking")
    run_command(
        [sys.executable, "-m", "pytest", "--cov=rustdoc_md", "--cov-report=term-missing"],
        "Tests",
    )

    if args.sample:
        run_command(
            [sys.executable, "-m", "rustdoc_md", args.sample],
            "Sample Conversion",
        )

    print("\n✅ All development checks passed successfully.")


if __name__ == "__main__":
    main()
