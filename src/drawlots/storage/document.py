"""Read and crash-safe write of the history document.

Write protocol:
    1. serialize to pretty-printed JSON
    2. write ``draw_history.json.tmp`` and fsync it
    3. copy the current ``draw_history.json`` to ``draw_history.bak`` (best effort)
    4. ``os.replace`` the temp file over ``draw_history.json``

Readers of ``draw_history.json`` see either the old or the new content,
never a partial file. Concurrent writers are not coordinated; the last
replace wins.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from drawlots.storage.errors import InvalidDocumentShape, IoFailure
from drawlots.storage.initializer import BACKUP_FILE_NAME, HISTORY_FILE_NAME, TEMP_FILE_NAME
from drawlots.storage.locator import ResolvedLocation, StorageLocator

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    active_directory: Path
    is_fallback: bool
    backup_path: Path | None = None


class DocumentStore:
    """History document I/O against the locator's active directory."""

    def __init__(self, locator: StorageLocator | None = None) -> None:
        self.locator = locator or StorageLocator()

    def location(self) -> ResolvedLocation:
        return self.locator.resolve()

    def history_path(self) -> Path:
        return self.location().active_directory / HISTORY_FILE_NAME

    # ── Read ────────────────────────────────────────────────

    def read(self) -> list[Any]:
        """Return the stored history, or [] when it is missing or unusable."""
        path = self.history_path()
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read history %s: %s", path, e)
            return []

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.warning("History %s is not valid JSON (%s); treating as empty", path, e)
            return []

        if not isinstance(data, list):
            logger.warning("History %s root is not an array; treating as empty", path)
            return []
        return data

    # ── Write ───────────────────────────────────────────────

    def write(self, document: Any) -> WriteResult:
        """Replace the stored history with ``document`` (must be a list)."""
        if not isinstance(document, list):
            raise InvalidDocumentShape(document)

        try:
            payload = json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError, RecursionError) as e:
            raise InvalidDocumentShape(document, str(e)) from e

        location = self.location()
        directory = location.active_directory
        history = directory / HISTORY_FILE_NAME
        backup = directory / BACKUP_FILE_NAME
        tmp = directory / TEMP_FILE_NAME

        try:
            with open(tmp, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            self._discard(tmp)
            raise IoFailure(f"writing {tmp}", e) from e

        backup_written = self._backup(history, backup)

        try:
            os.replace(tmp, history)
        except OSError as e:
            self._discard(tmp)
            raise IoFailure(f"replacing {history}", e) from e

        logger.debug("Wrote %d history records to %s", len(document), history)
        return WriteResult(
            active_directory=directory,
            is_fallback=location.is_fallback,
            backup_path=backup_written,
        )

    def _backup(self, history: Path, backup: Path) -> Path | None:
        """Copy the current document aside. Failure is logged, not raised."""
        if not history.exists():
            return None
        try:
            shutil.copyfile(history, backup)
        except OSError as e:
            logger.warning("Failed to back up history to %s: %s", backup, e)
            return None
        return backup

    def _discard(self, tmp: Path) -> None:
        try:
            tmp.unlink(missing_ok=True)
        except OSError as e:
            logger.debug("Cannot remove temp file %s: %s", tmp, e)
