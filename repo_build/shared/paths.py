"""Monorepo root detection and relative path arithmetic."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import PathResolutionError

ROOT_ENV_VAR = "LERNA_ROOT_PATH"

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
BUILTIN_CONFIG_DIR = PACKAGE_ROOT / "config"
TEMPLATES_DIR = PACKAGE_ROOT / "templates"


def relative_to(root: Path | str, path: Path | str) -> str:
    """Return ``path`` relative to ``root``.

    Both arguments must be absolute. The result may climb out of ``root``
    with ``..`` segments, like any relative path computation.

    Raises:
        PathResolutionError: If either argument is not absolute.
    """
    root_str = os.fspath(root)
    path_str = os.fspath(path)
    if not os.path.isabs(root_str):
        raise PathResolutionError(root_str, "Root")
    if not os.path.isabs(path_str):
        raise PathResolutionError(path_str, "Path")
    return os.path.relpath(path_str, root_str)


def is_descendant(path: Path | str, base: Path | str) -> bool:
    """Check that ``path`` lies strictly below ``base``.

    The comparison is lexical: ``..`` segments are collapsed but symlinks are
    not followed.
    """
    base_str = os.path.normpath(os.path.abspath(os.fspath(base)))
    path_str = os.path.normpath(os.path.abspath(os.fspath(path)))
    if path_str == base_str:
        return False
    try:
        return os.path.commonpath([base_str, path_str]) == base_str
    except ValueError:
        # Different drives on Windows
        return False


@dataclass(frozen=True, slots=True)
class ResolvedPaths:
    """Directories a single invocation resolves against."""

    package_dir: Path
    monorepo_root: Path | None = None

    @property
    def is_monorepo(self) -> bool:
        return self.monorepo_root is not None

    @property
    def root_or_package(self) -> Path:
        """Base directory for root-relative paths."""
        return self.monorepo_root if self.monorepo_root is not None else self.package_dir

    def package_file(self, name: str) -> Path:
        return self.package_dir / name

    def display(self, path: Path, base: Path | None = None) -> str:
        """Render ``path`` relative to ``base`` when inside it, absolute otherwise."""
        base = base if base is not None else self.package_dir
        if is_descendant(path, base):
            return relative_to(base, path)
        return str(path)


class PathResolver:
    """Resolve the directories of one invocation.

    The environment is passed in explicitly so callers (and tests) decide
    what the monorepo root override is.
    """

    __slots__ = ("_environ", "_cwd")

    def __init__(self, environ: Mapping[str, str], cwd: Path | str) -> None:
        self._environ = environ
        self._cwd = Path(os.path.abspath(os.fspath(cwd)))

    def resolve_monorepo_root(self) -> Path | None:
        """Return the monorepo root from the override variable, if set.

        The value is used as given; no existence check is made. Relative
        values are taken relative to the invocation directory.
        """
        value = self._environ.get(ROOT_ENV_VAR, "").strip()
        if not value:
            return None
        return Path(os.path.normpath(os.path.join(self._cwd, value)))

    def resolve(self) -> ResolvedPaths:
        return ResolvedPaths(
            package_dir=self._cwd,
            monorepo_root=self.resolve_monorepo_root(),
        )
