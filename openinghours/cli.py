"""Command line entry point for rendering opening hours schedules."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import RuleValidationError, ScheduleNotFoundError
from .loader import RuleRepository
from .logging_config import setup_logging
from .schema import Rule
from .util import (
    get_mergeable_rules,
    rules_to_opening_hours_debug_string,
    rules_to_opening_hours_string,
)

LOGGER = logging.getLogger(__name__)

MODES = ("canonical", "debug", "groups")


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render opening hours schedules stored as JSON rules")
    parser.add_argument("path", type=Path, help="JSON file holding one or more schedules")
    parser.add_argument(
        "--schedule",
        default=None,
        help="Name of the schedule to render (defaults to every schedule in the file)",
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default=os.getenv("OPENINGHOURS_MODE", "canonical"),
        help="canonical opening hours text, debug text, or one line per mergeable group",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("OPENINGHOURS_LOG_LEVEL", "INFO"),
        help="Logging level, e.g. DEBUG or WARNING",
    )
    return parser


def format_rules(rules: Sequence[Rule], mode: str) -> List[str]:
    """Return the output lines for ``rules`` in the requested ``mode``."""

    if mode == "canonical":
        return [rules_to_opening_hours_string(rules)]
    if mode == "debug":
        return [rules_to_opening_hours_debug_string(rules)]
    if mode == "groups":
        return [rules_to_opening_hours_string(group) for group in get_mergeable_rules(rules)]
    raise ValueError(f"Unsupported output mode '{mode}'")


def run_from_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)
    # argparse does not check environment defaults against choices.
    if args.mode not in MODES:
        parser.error(f"invalid mode '{args.mode}' (choose from {', '.join(MODES)})")

    try:
        setup_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    repository = RuleRepository()
    try:
        repository.load_from_json(args.path)
        names = [args.schedule] if args.schedule else repository.names()
        schedules = [repository.get(name) for name in names]
    except (OSError, RuleValidationError, ScheduleNotFoundError) as exc:
        LOGGER.error("Unable to load schedules from %s: %s", args.path, exc)
        parser.error(str(exc))

    for schedule in schedules:
        LOGGER.debug("Rendering schedule '%s' (%d rules)", schedule.name, len(schedule.rules))
        lines = format_rules(schedule.rules, args.mode)
        if len(schedules) > 1:
            print(f"{schedule.name}:")
            lines = [f"  {line}" for line in lines]
        for line in lines:
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(run_from_cli())
