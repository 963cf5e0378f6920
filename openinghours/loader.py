"""Helpers for loading and caching rule schedules from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from pydantic import RootModel, ValidationError

from .errors import RuleValidationError, ScheduleNotFoundError
from .schema import Rule, Schedule

LOGGER = logging.getLogger(__name__)


class ScheduleCollection(RootModel[List[Schedule]]):
    """Helper root model to validate arrays of schedules."""


class RuleRepository:
    """In-memory registry of :class:`Schedule` objects with simple caching."""

    def __init__(self) -> None:
        self._schedules: Dict[str, Schedule] = {}
        self._json_cache: Dict[Path, int] = {}

    # ------------------------------------------------------------------ loading
    def load_from_json(self, path: Path, *, force: bool = False) -> None:
        """Load schedules from a JSON file on disk.

        The file holds either a list of schedules or an object with a
        ``schedules`` list. Unchanged files are skipped unless ``force`` is set.
        """

        path = Path(path)
        current_timestamp = path.stat().st_mtime_ns
        if not force and path in self._json_cache and self._json_cache[path] >= current_timestamp:
            LOGGER.debug("Skipping unchanged schedule file %s", path)
            return
        try:
            payload = json.loads(path.read_text(encoding="utf8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RuleValidationError(f"{path} is not valid UTF-8 JSON: {exc}") from exc
        count = self._store_collection(payload)
        self._json_cache[path] = current_timestamp
        LOGGER.info("Loaded %d schedule(s) from %s", count, path)

    # ------------------------------------------------------------------- access
    def get(self, name: str) -> Schedule:
        try:
            return self._schedules[name]
        except KeyError as exc:
            raise ScheduleNotFoundError(name) from exc

    def rules(self, name: str) -> List[Rule]:
        """Return the rules of schedule ``name`` in their declared order."""

        return list(self.get(name).rules)

    def names(self) -> List[str]:
        return sorted(self._schedules)

    def __contains__(self, name: object) -> bool:
        return name in self._schedules

    def __len__(self) -> int:
        return len(self._schedules)

    def _store_collection(self, payload: Any) -> int:
        if isinstance(payload, Mapping) and "schedules" in payload:
            payload = payload["schedules"]
        try:
            collection = ScheduleCollection.model_validate(payload)
        except ValidationError as exc:
            raise RuleValidationError(str(exc)) from exc
        for schedule in collection.root:
            self._schedules[schedule.name] = schedule
        return len(collection.root)


__all__ = ["RuleRepository", "ScheduleCollection"]
