"""Pick the active data directory once per process and remember it.

Candidates are tried in order; the first one that can be prepared wins.
When every candidate fails, the per-user data directory reported by
platformdirs is used instead and the first failure is kept for the
advisory message. Once a location is cached it is trusted for the rest of
the locator's life, even if the filesystem changes underneath it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

from drawlots.storage.candidates import PathCandidateResolver
from drawlots.storage.errors import IoFailure, LocationUnavailable
from drawlots.storage.initializer import CandidateAttempt, attempt, prepare_dir

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "drawlots"
DEFAULT_FALLBACK_SUBDIR = "data"


@dataclass(frozen=True)
class ResolvedLocation:
    active_directory: Path
    is_fallback: bool = False
    original_candidate: Path | None = None
    advisory_message: str | None = None


class LocationCell:
    """Thread-safe holder for the resolved location."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: ResolvedLocation | None = None

    def get(self) -> ResolvedLocation | None:
        with self._lock:
            return self._value

    def get_or_init(
        self, factory: Callable[[], ResolvedLocation]
    ) -> tuple[ResolvedLocation, bool]:
        """Return ``(value, created)``, running ``factory`` under the lock if empty."""
        with self._lock:
            if self._value is not None:
                return self._value, False
            self._value = factory()
            return self._value, True

    def replace(self, value: ResolvedLocation | None) -> None:
        with self._lock:
            self._value = value


def system_data_dir(app_name: str = DEFAULT_APP_NAME) -> Path | None:
    raw = user_data_dir(app_name, appauthor=False)
    return Path(raw) if raw else None


class StorageLocator:
    """Resolve and cache the directory holding the history document."""

    def __init__(
        self,
        resolver: PathCandidateResolver | None = None,
        fallback_provider: Callable[[], Path | None] | None = None,
        fallback_subdir: str = DEFAULT_FALLBACK_SUBDIR,
        app_name: str = DEFAULT_APP_NAME,
    ) -> None:
        self.resolver = resolver or PathCandidateResolver()
        self._fallback_provider = fallback_provider or (lambda: system_data_dir(app_name))
        self.fallback_subdir = fallback_subdir
        self._cell = LocationCell()

    @property
    def cached(self) -> ResolvedLocation | None:
        return self._cell.get()

    def reset(self) -> None:
        """Forget the cached location; the next resolve() resolves again."""
        self._cell.replace(None)

    def resolve(self) -> ResolvedLocation:
        return self._cell.get_or_init(self._resolve_uncached)[0]

    def resolve_fresh(self) -> tuple[ResolvedLocation, bool]:
        """Like resolve(), also reporting whether this call did the resolving."""
        return self._cell.get_or_init(self._resolve_uncached)

    # ── Resolution ──────────────────────────────────────────

    def _resolve_uncached(self) -> ResolvedLocation:
        attempts: list[CandidateAttempt] = []
        for candidate in self.resolver.candidates():
            result = attempt(candidate)
            if result.ok:
                logger.info("Using data directory: %s", candidate)
                return ResolvedLocation(active_directory=candidate)
            logger.warning("Cannot prepare data directory %s: %s", candidate, result.error)
            attempts.append(result)

        fallback = self._fallback_dir()
        try:
            prepare_dir(fallback)
        except OSError as e:
            raise IoFailure(f"preparing fallback directory {fallback}", e) from e

        first_failure = attempts[0] if attempts else None
        message = self._advisory(first_failure, fallback)
        logger.warning("%s", message)
        return ResolvedLocation(
            active_directory=fallback,
            is_fallback=True,
            original_candidate=first_failure.path if first_failure else None,
            advisory_message=message,
        )

    def _fallback_dir(self) -> Path:
        try:
            base = self._fallback_provider()
        except (OSError, KeyError, RuntimeError) as e:
            raise LocationUnavailable(str(e)) from e
        if base is None:
            raise LocationUnavailable()
        return Path(base) / self.fallback_subdir

    @staticmethod
    def _advisory(failure: CandidateAttempt | None, fallback: Path) -> str:
        if failure is None:
            return f"No preferred data directory available; using system data directory: {fallback}"
        return (
            f"Preferred data directory is not writable ({failure.path}): {failure.error}; "
            f"using system data directory: {fallback}"
        )
