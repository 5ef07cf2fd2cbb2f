"""Terminal storage errors.

Per-candidate failures during location resolution are not exceptions; they
are recorded as ``CandidateAttempt`` values. Only the conditions below end
an operation.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base class for storage failures surfaced to callers."""


class LocationUnavailable(StorageError):
    """No system data directory could be determined for the fallback."""

    def __init__(self, detail: str = "") -> None:
        message = "Cannot locate the executable or home context for app data"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class IoFailure(StorageError):
    """A filesystem step failed (mkdir, read, write, sync, rename)."""

    def __init__(self, action: str, cause: OSError) -> None:
        super().__init__(f"I/O error while {action}: {cause}")
        self.action = action
        self.cause = cause


class InvalidDocumentShape(StorageError):
    """The history payload is not a JSON array."""

    def __init__(self, got: object, detail: str = "") -> None:
        if detail:
            message = f"History data is not a serializable JSON array: {detail}"
        else:
            message = f"History data must be a JSON array, got {type(got).__name__}"
        super().__init__(message)
