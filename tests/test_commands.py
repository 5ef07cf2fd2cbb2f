"""Tests for the UI-facing storage commands."""

from __future__ import annotations

from pathlib import Path

import pytest

from drawlots.commands import CommandError, StorageCommands, get_storage_commands
from drawlots.config import DrawlotsConfig, StorageConfig
from drawlots.storage import DocumentStore


@pytest.fixture
def commands(store: DocumentStore) -> StorageCommands:
    return StorageCommands(store)


@pytest.fixture
def fallback_commands(blocked: Path, static_locator) -> StorageCommands:
    return StorageCommands(DocumentStore(static_locator([blocked])))


class TestEnsure:
    def test_preferred_directory(self, commands: StorageCommands, workdir: Path):
        resp = commands.ensure_data_dir()
        assert resp.data_dir == str(workdir / "data")
        assert resp.using_fallback is False
        assert resp.fallback_dir is None
        assert resp.message is None

    def test_fallback_reports_failed_candidate(
        self, fallback_commands: StorageCommands, tmp_path: Path, blocked: Path
    ):
        resp = fallback_commands.ensure_data_dir()
        assert resp.data_dir == str(tmp_path / "system" / "data")
        assert resp.using_fallback is True
        assert resp.fallback_dir == str(blocked)
        assert resp.message and str(blocked) in resp.message

    def test_message_only_on_resolving_call(
        self, fallback_commands: StorageCommands, blocked: Path
    ):
        first = fallback_commands.ensure_data_dir()
        second = fallback_commands.ensure_data_dir()
        assert first.message
        assert second.message is None
        assert second.using_fallback is True
        assert second.fallback_dir == str(blocked)
        assert second.data_dir == first.data_dir

    def test_no_message_after_read_resolved(self, fallback_commands: StorageCommands):
        fallback_commands.read_history_file()
        resp = fallback_commands.ensure_data_dir()
        assert resp.using_fallback is True
        assert resp.message is None

    def test_location_error_becomes_command_error(self, blocked: Path, static_locator):
        commands = StorageCommands(DocumentStore(static_locator([blocked], fallback=None)))
        with pytest.raises(CommandError, match="Cannot locate"):
            commands.ensure_data_dir()


class TestReadWrite:
    def test_read_empty(self, commands: StorageCommands, workdir: Path):
        resp = commands.read_history_file()
        assert resp.history == []
        assert resp.data_dir == str(workdir / "data")
        assert resp.using_fallback is False

    def test_write_then_read(self, commands: StorageCommands):
        first = commands.write_history_file([{"id": 1}])
        assert first.backup_path is not None
        commands.write_history_file([{"id": 2}])
        assert commands.read_history_file().history == [{"id": 2}]

    def test_write_rejects_object(self, commands: StorageCommands):
        with pytest.raises(CommandError, match="JSON array"):
            commands.write_history_file({"id": 1})

    def test_fallback_flag_on_write(self, fallback_commands: StorageCommands):
        resp = fallback_commands.write_history_file([])
        assert resp.using_fallback is True

    def test_read_reports_fallback_dir(self, fallback_commands: StorageCommands, blocked: Path):
        resp = fallback_commands.read_history_file()
        assert resp.fallback_dir == str(blocked)


class TestCommandMapping:
    def test_returns_plain_dicts(self, commands: StorageCommands):
        mapping = get_storage_commands(commands)
        assert set(mapping) == {"ensure_data_dir", "read_history_file", "write_history_file"}

        written = mapping["write_history_file"]([{"id": "x"}])
        assert set(written) == {"data_dir", "backup_path", "using_fallback"}

        read = mapping["read_history_file"]()
        assert read["history"] == [{"id": "x"}]
        assert set(read) == {"history", "data_dir", "using_fallback", "fallback_dir"}

        ensured = mapping["ensure_data_dir"]()
        assert set(ensured) == {"data_dir", "using_fallback", "fallback_dir", "message"}


class TestFromConfig:
    def test_data_dir_override_used(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        target = tmp_path / "configured"
        config = DrawlotsConfig(storage=StorageConfig(data_dir=target))
        commands = StorageCommands.from_config(config)
        assert commands.ensure_data_dir().data_dir == str(target)
