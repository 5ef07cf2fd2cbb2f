"""Record-level helpers on top of the history document.

Records are JSON objects, newest first. Read-modify-write cycles made
through one repository are serialized with a lock; writers in other
repositories or processes are not coordinated.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from drawlots.storage import DocumentStore, WriteResult

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 200


class HistoryRepository:
    """Save, update and delete draw records."""

    def __init__(self, store: DocumentStore, limit: int = DEFAULT_LIMIT) -> None:
        self.store = store
        self.limit = limit
        self._lock = threading.Lock()

    def all(self) -> list[Any]:
        return self.store.read()

    def save(self, record: dict[str, Any]) -> WriteResult:
        """Prepend ``record`` and drop the oldest entries beyond ``limit``."""
        with self._lock:
            history = self.store.read()
            history.insert(0, record)
            if self.limit > 0 and len(history) > self.limit:
                logger.debug("Trimming history from %d to %d records", len(history), self.limit)
                del history[self.limit :]
            return self.store.write(history)

    def delete(self, record_id: Any) -> bool:
        """Remove every record whose ``id`` matches. Returns True if any was removed."""
        with self._lock:
            history = self.store.read()
            kept = [r for r in history if not (isinstance(r, dict) and r.get("id") == record_id)]
            if len(kept) == len(history):
                return False
            self.store.write(kept)
            return True

    def update(self, record_id: Any, patch: dict[str, Any]) -> bool:
        """Merge ``patch`` into the first record with a matching ``id``."""
        with self._lock:
            history = self.store.read()
            for index, record in enumerate(history):
                if isinstance(record, dict) and record.get("id") == record_id:
                    history[index] = {**record, **patch}
                    self.store.write(history)
                    return True
            logger.warning("History record %r not found for update", record_id)
            return False
