"""Command line entry point for rendering opening hours schedules."""

from openinghours.cli import run_from_cli


if __name__ == "__main__":
    raise SystemExit(run_from_cli())
