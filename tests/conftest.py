"""Shared fixtures for storage tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from drawlots.storage import DocumentStore, PathCandidateResolver, StorageLocator


class StaticResolver:
    """Resolver stand-in returning a fixed candidate list."""

    def __init__(self, candidates: list[Path]) -> None:
        self._candidates = candidates
        self.calls = 0

    def candidates(self) -> list[Path]:
        self.calls += 1
        return list(self._candidates)


@pytest.fixture
def blocked(tmp_path: Path) -> Path:
    """A path that can never become a directory (its parent is a file).

    Permission bits do not stop root, so tests use this instead of chmod.
    """
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    return blocker / "data"


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    d = tmp_path / "work"
    d.mkdir()
    return d


@pytest.fixture
def env_resolver():
    """Build a PathCandidateResolver with fixed cwd / executable dirs."""

    def make(cwd: Path | None = None, exe: Path | None = None, **kwargs) -> PathCandidateResolver:
        return PathCandidateResolver(cwd_provider=lambda: cwd, exe_provider=lambda: exe, **kwargs)

    return make


@pytest.fixture
def static_locator(tmp_path: Path):
    """Build a StorageLocator over a fixed candidate list and fallback base."""

    def make(candidates: list[Path], fallback: Path | None = tmp_path / "system", **kwargs):
        return StorageLocator(
            resolver=StaticResolver(candidates), fallback_provider=lambda: fallback, **kwargs
        )

    return make


@pytest.fixture
def locator(workdir: Path, tmp_path: Path, env_resolver) -> StorageLocator:
    return StorageLocator(
        resolver=env_resolver(cwd=workdir), fallback_provider=lambda: tmp_path / "system"
    )


@pytest.fixture
def store(locator: StorageLocator) -> DocumentStore:
    return DocumentStore(locator)
