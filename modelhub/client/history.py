from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from modelhub.models.history import HistoryEntry, HistoryList

logger = logging.getLogger(__name__)

HISTORY_FILENAME = "chatHistory.json"


class HistoryStore:
    """Bounded query/response history persisted as a JSON list, newest last."""

    def __init__(self, path: Path, capacity: int = 10):
        if capacity <= 0:
            raise ValueError("history capacity must be positive")
        self._path = path
        self._capacity = capacity
        self._entries: list[HistoryEntry] = self.load()

    @classmethod
    def in_directory(cls, directory: str | Path, capacity: int = 10) -> HistoryStore:
        return cls(Path(directory).expanduser() / HISTORY_FILENAME, capacity=capacity)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def load(self) -> list[HistoryEntry]:
        if not self._path.exists():
            return []
        try:
            entries = HistoryList.validate_json(self._path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("Error loading history from %s: %s", self._path, e)
            return []
        return entries[-self._capacity:]

    def recent(self, n: int = 1) -> list[HistoryEntry]:
        if n <= 0:
            return []
        return self._entries[-n:]

    def append(self, query: str, response: str) -> HistoryEntry:
        entry = HistoryEntry(query=query, response=response)
        self._entries.append(entry)
        while len(self._entries) > self._capacity:
            self._entries.pop(0)
        self._save()
        return entry

    def clear(self) -> None:
        self._entries = []
        try:
            self._path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Failed to remove history file %s", self._path)

    def _save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(HistoryList.dump_json(self._entries))
        except OSError:
            logger.exception("Failed to save history to %s", self._path)
