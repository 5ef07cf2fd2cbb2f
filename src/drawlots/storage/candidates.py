"""Candidate data directories, in precedence order.

Precedence: configured override, ``<project root>/data``,
``<executable dir>/data``, ``<cwd>/data``. Candidates inside the installed
package or the project's own source/build subtree are skipped, and each
absolute path is emitted once.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

DATA_DIRNAME = "data"

# Project root marker: a file and a directory that must both be present.
_ROOT_MARKER_FILE = "pyproject.toml"
_ROOT_MARKER_DIR = "src"

# Subtrees of the project root that must never hold live data.
_EXCLUDED_SUBDIRS = ("src", "build", "dist")

# The installed drawlots package itself (site-packages or a source checkout).
_PACKAGE_DIR = Path(__file__).resolve().parents[1]

PathProvider = Callable[[], Path | None]


def current_dir() -> Path | None:
    return Path.cwd()


def executable_dir() -> Path | None:
    """Directory of the running application.

    Frozen builds report the bundled executable; otherwise the launched
    script stands in for it.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    script = sys.argv[0] if sys.argv else ""
    if not script or script == "-c":
        return None
    return Path(script).resolve().parent


def is_project_root(path: Path) -> bool:
    return (path / _ROOT_MARKER_FILE).is_file() and (path / _ROOT_MARKER_DIR).is_dir()


def _absolute(path: Path) -> Path:
    return Path(os.path.abspath(path))


class PathCandidateResolver:
    """Enumerate candidate data directories from the process environment."""

    def __init__(
        self,
        override: Path | None = None,
        cwd_provider: PathProvider = current_dir,
        exe_provider: PathProvider = executable_dir,
        package_dir: Path = _PACKAGE_DIR,
    ) -> None:
        self.package_dir = package_dir
        self.override = override
        self._cwd_provider = cwd_provider
        self._exe_provider = exe_provider

    def _lookup(self, provider: PathProvider, label: str) -> Path | None:
        try:
            path = provider()
        except OSError as e:
            logger.debug("Cannot read %s: %s", label, e)
            return None
        return _absolute(path) if path is not None else None

    def find_project_root(self, bases: list[Path]) -> Path | None:
        """Walk up from each base in turn; first marked ancestor wins."""
        for base in bases:
            for ancestor in (base, *base.parents):
                if is_project_root(ancestor):
                    return ancestor
        return None

    def candidates(self) -> list[Path]:
        cwd = self._lookup(self._cwd_provider, "working directory")
        exe_dir = self._lookup(self._exe_provider, "executable directory")

        bases = [p for p in (cwd, exe_dir) if p is not None]
        root = self.find_project_root(bases)

        ordered: list[Path] = []
        if self.override is not None:
            ordered.append(Path(self.override).expanduser())
        if root is not None:
            ordered.append(root / DATA_DIRNAME)
        if exe_dir is not None:
            ordered.append(exe_dir / DATA_DIRNAME)
        if cwd is not None:
            ordered.append(cwd / DATA_DIRNAME)

        excluded = [_absolute(self.package_dir)]
        if root is not None:
            excluded.extend(root / name for name in _EXCLUDED_SUBDIRS)
        seen: set[Path] = set()
        result: list[Path] = []
        for raw in ordered:
            candidate = _absolute(raw)
            real = Path(os.path.realpath(candidate))
            if any(candidate.is_relative_to(ex) or real.is_relative_to(ex) for ex in excluded):
                logger.debug("Skipping candidate inside application tree: %s", candidate)
                continue
            if candidate in seen:
                continue
            seen.add(candidate)
            result.append(candidate)
        return result
