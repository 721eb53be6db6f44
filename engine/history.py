"""Bounded undo/redo history over grid snapshots."""

import logging
from typing import List, Optional

from models.history import GridSnapshot, HistoryEntry
from config.defaults import MAX_HISTORY_SIZE

logger = logging.getLogger(__name__)


class HistoryManager:
    """LIFO of pre-mutation snapshots.

    `index` points at the entry undo() will return next; -1 means nothing to
    undo. record() is called before the mutation it protects.
    """

    def __init__(self, max_size: int = MAX_HISTORY_SIZE):
        self.max_size = max_size
        self.entries: List[HistoryEntry] = []
        self.index = -1

    def record(self, action: str, source) -> HistoryEntry:
        """Snapshot `source` (a GridModel or GridSnapshot) and push it."""
        if isinstance(source, GridSnapshot):
            snapshot = GridSnapshot.capture(source.rows, source.cols, source.seats)
        else:
            snapshot = source.snapshot()

        self.entries = self.entries[:self.index + 1]
        entry = HistoryEntry(action=action, snapshot=snapshot)
        self.entries.append(entry)

        if len(self.entries) > self.max_size:
            self.entries = self.entries[len(self.entries) - self.max_size:]
            self.index = len(self.entries) - 1
        else:
            self.index += 1

        logger.debug("History record %s (%d/%d)", action, self.index + 1, len(self.entries))
        return entry

    def undo(self) -> Optional[HistoryEntry]:
        if self.index < 0:
            return None
        entry = self.entries[self.index]
        self.index -= 1
        return entry

    def redo(self) -> Optional[HistoryEntry]:
        if self.index >= len(self.entries) - 1:
            return None
        self.index += 1
        return self.entries[self.index]

    def can_undo(self) -> bool:
        return self.index >= 0

    def can_redo(self) -> bool:
        return self.index < len(self.entries) - 1

    def clear(self):
        self.entries = []
        self.index = -1

    def __len__(self) -> int:
        return len(self.entries)

    def to_record(self) -> dict:
        return {
            "entries": [e.to_record() for e in self.entries],
            "index": self.index,
        }

    @classmethod
    def from_record(cls, record: dict, max_size: int = MAX_HISTORY_SIZE) -> "HistoryManager":
        history = cls(max_size=max_size)
        history.entries = [HistoryEntry.from_record(e) for e in record.get("entries", [])]
        index = int(record.get("index", len(history.entries) - 1))
        history.index = max(-1, min(index, len(history.entries) - 1))
        return history
