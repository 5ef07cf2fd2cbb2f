"""History storage: locate a writable directory, then read/write one JSON array.

Layout of the active directory:
    <data dir>/
    ├── draw_history.json        # current history (JSON array, pretty-printed)
    ├── draw_history.bak         # previous snapshot, best effort
    └── draw_history.json.tmp    # transient, only during a write

The data dir is the first usable of ``<project root>/data``,
``<executable dir>/data`` and ``<cwd>/data``, else the per-user data
directory (``platformdirs.user_data_dir``) joined with ``data``.
"""

from drawlots.storage.candidates import PathCandidateResolver
from drawlots.storage.document import DocumentStore, WriteResult
from drawlots.storage.errors import (
    InvalidDocumentShape,
    IoFailure,
    LocationUnavailable,
    StorageError,
)
from drawlots.storage.initializer import CandidateAttempt, attempt, prepare_dir
from drawlots.storage.locator import LocationCell, ResolvedLocation, StorageLocator

__all__ = [
    "CandidateAttempt",
    "DocumentStore",
    "InvalidDocumentShape",
    "IoFailure",
    "LocationCell",
    "LocationUnavailable",
    "PathCandidateResolver",
    "ResolvedLocation",
    "StorageError",
    "StorageLocator",
    "WriteResult",
    "attempt",
    "prepare_dir",
]
