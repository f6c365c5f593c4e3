"""Development script to run checks (formatting, linting, tests) and a sample resolution."""

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
    """Run the development checks and optionally resolve a declaration file."""
    parser = argparse.ArgumentParser(
        description="Run development checks and an optional sample resolution."
    )
    parser.add_argument(
        "--ci", action="store_true", help="Run checks and tests only, no auto-fixes"
    )
    parser.add_argument(
        "declarations",
        nargs="?",
        help="Declaration YAML to resolve once all checks pass",
    )
    args = parser.parse_args()

    if not args.ci:
        run_command(["uv", "run", "ruff", "format"], "Ruff Formatting")
        run_command(
            ["uv", "run", "ruff", "check", "--fix", "--unsafe-fixes"],
            "Ruff Linting & Fixes",
        )

    run_command(["uv", "run", "ruff", "check"], "Ruff Linting")
    run_command(["uv", "run", "pytest"], "Tests")

    if args.ci:
        print("\n✅ CI checks passed successfully.")
        return

    if args.declarations:
        run_command(
            ["uv", "run", "python", "-m", "apidoc.resolve_docs", args.declarations],
            "Sample Resolution",
        )

    print("\n✅ All development checks passed successfully.")


if __name__ == "__main__":
    main()
