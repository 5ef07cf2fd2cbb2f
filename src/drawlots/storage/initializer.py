"""Prepare a directory to hold the history document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

HISTORY_FILE_NAME = "draw_history.json"
BACKUP_FILE_NAME = "draw_history.bak"
TEMP_FILE_NAME = HISTORY_FILE_NAME + ".tmp"

_EMPTY_DOCUMENT = "[]"


@dataclass
class CandidateAttempt:
    """Outcome of preparing one directory. ``error`` is None on success."""

    path: Path
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def prepare_dir(path: Path) -> None:
    """Ensure ``path`` exists and holds a history document. Idempotent.

    Raises OSError. The document is only written once the directory exists.
    """
    path.mkdir(parents=True, exist_ok=True)

    history = path / HISTORY_FILE_NAME
    if not history.exists():
        history.write_text(_EMPTY_DOCUMENT, encoding="utf-8")
        logger.debug("Created empty history at %s", history)


def attempt(path: Path) -> CandidateAttempt:
    try:
        prepare_dir(path)
    except OSError as e:
        return CandidateAttempt(path, e)
    return CandidateAttempt(path)
