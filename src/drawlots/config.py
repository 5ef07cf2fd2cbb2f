"""Configuration loading from environment variables and drawlots.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from platformdirs import user_config_dir

_APP_NAME = "drawlots"
_CONFIG_FILENAME = "drawlots.toml"


@dataclass
class StorageConfig:
    """Where the history document lives."""

    app_name: str = _APP_NAME
    fallback_subdir: str = "data"
    data_dir: Path | None = None


@dataclass
class HistoryConfig:
    """Record-level history behaviour."""

    limit: int = 200


@dataclass
class DrawlotsConfig:
    """Top-level configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    log_level: str = "INFO"


def _optional_path(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None


def load_config(config_path: Path | None = None) -> DrawlotsConfig:
    """Load configuration from environment variables and optional drawlots.toml.

    Priority: environment variables > drawlots.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    else:
        # Search current dir and the per-user config dir
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path(user_config_dir(_APP_NAME, appauthor=False)) / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text(encoding="utf-8"))
                break

    storage_data = file_data.get("storage", {})
    history_data = file_data.get("history", {})

    return DrawlotsConfig(
        storage=StorageConfig(
            app_name=os.getenv("DRAWLOTS_APP_NAME", storage_data.get("app_name", _APP_NAME)),
            fallback_subdir=storage_data.get("fallback_subdir", "data"),
            data_dir=_optional_path(
                os.getenv("DRAWLOTS_DATA_DIR", storage_data.get("data_dir"))
            ),
        ),
        history=HistoryConfig(
            limit=int(os.getenv("DRAWLOTS_HISTORY_LIMIT", history_data.get("limit", 200))),
        ),
        log_level=os.getenv("DRAWLOTS_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
