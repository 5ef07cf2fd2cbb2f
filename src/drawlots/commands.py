"""Storage operations exposed to the UI layer.

Each operation resolves the data directory first (cached after the first
success) and returns a plain response record. Failures reach the caller as
``CommandError`` carrying a human-readable message.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from drawlots.storage import (
    DocumentStore,
    PathCandidateResolver,
    ResolvedLocation,
    StorageError,
    StorageLocator,
)

if TYPE_CHECKING:
    from drawlots.config import DrawlotsConfig

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """An operation failed; ``str(error)`` is the message for the user."""


def _str_or_none(path: Path | None) -> str | None:
    return str(path) if path is not None else None


@dataclass
class EnsureResponse:
    data_dir: str
    using_fallback: bool
    fallback_dir: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ReadResponse:
    data_dir: str
    using_fallback: bool
    history: list[Any] = field(default_factory=list)
    fallback_dir: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class WriteResponse:
    data_dir: str
    using_fallback: bool
    backup_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class StorageCommands:
    """ensure / read / write operations around one document store."""

    def __init__(self, store: DocumentStore | None = None) -> None:
        self.store = store or DocumentStore()

    @classmethod
    def from_config(cls, config: DrawlotsConfig) -> StorageCommands:
        locator = StorageLocator(
            resolver=PathCandidateResolver(override=config.storage.data_dir),
            fallback_subdir=config.storage.fallback_subdir,
            app_name=config.storage.app_name,
        )
        return cls(DocumentStore(locator))

    def _resolve(self) -> tuple[ResolvedLocation, bool]:
        try:
            return self.store.locator.resolve_fresh()
        except StorageError as e:
            logger.error("Cannot resolve data directory: %s", e)
            raise CommandError(str(e)) from e

    def ensure_data_dir(self) -> EnsureResponse:
        # The advisory is only reported by the call that resolved the location.
        location, fresh = self._resolve()
        return EnsureResponse(
            data_dir=str(location.active_directory),
            using_fallback=location.is_fallback,
            fallback_dir=_str_or_none(location.original_candidate),
            message=location.advisory_message if fresh else None,
        )

    def read_history_file(self) -> ReadResponse:
        location, _ = self._resolve()
        return ReadResponse(
            history=self.store.read(),
            data_dir=str(location.active_directory),
            using_fallback=location.is_fallback,
            fallback_dir=_str_or_none(location.original_candidate),
        )

    def write_history_file(self, data: Any) -> WriteResponse:
        try:
            result = self.store.write(data)
        except StorageError as e:
            logger.error("Failed to write history: %s", e)
            raise CommandError(str(e)) from e
        return WriteResponse(
            data_dir=str(result.active_directory),
            backup_path=_str_or_none(result.backup_path),
            using_fallback=result.is_fallback,
        )


def get_storage_commands(commands: StorageCommands) -> dict[str, Callable[..., Any]]:
    """Return a dict of command_name -> callable for a UI bridge.

    Callables return plain dicts so they can be serialized directly.
    """

    def ensure_data_dir() -> dict[str, Any]:
        return commands.ensure_data_dir().to_dict()

    def read_history_file() -> dict[str, Any]:
        return commands.read_history_file().to_dict()

    def write_history_file(data: Any) -> dict[str, Any]:
        return commands.write_history_file(data).to_dict()

    return {
        "ensure_data_dir": ensure_data_dir,
        "read_history_file": read_history_file,
        "write_history_file": write_history_file,
    }
