#!/usr/bin/env python3
"""
Remove build artifacts from the current package.

Usage:
    rb-clean [--dry-run] <path or glob>...

Example:
    rb-clean dist* api-docs tsconfig.json

Only paths inside the current working directory are removed. Anything that
resolves outside of it (`../x`, absolute paths elsewhere, or the directory
itself) is skipped.
"""

from __future__ import annotations

import argparse
import glob
import os
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from repo_build.shared.context import dry_run_requested
from repo_build.shared.paths import is_descendant

GLOB_CHARS = frozenset("*?[")


@dataclass
class CleanResult:
    """Outcome of a clean request."""

    accepted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    freed: int = 0

    def render(self) -> str:
        if not self.accepted:
            return "Nothing to remove"
        return "rm -rf " + " ".join(self.accepted)


def get_size(path: Path) -> int:
    """Get total size of a file or directory in bytes."""
    if path.is_symlink() or path.is_file():
        return path.lstat().st_size
    if not path.exists():
        return 0
    total = 0
    try:
        for item in path.rglob("*"):
            if item.is_file() and not item.is_symlink():
                total += item.stat().st_size
    except OSError:
        pass
    return total


def format_size(size_bytes: float) -> str:
    """Format size in human-readable form."""
    for unit in ("B", "KB", "MB", "GB"):
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def expand_pattern(pattern: str, cwd: Path) -> list[Path]:
    """Expand a path or glob against cwd.

    Literal paths are returned even when they do not exist.
    """
    absolute = os.path.normpath(os.path.join(cwd, pattern))
    if GLOB_CHARS.isdisjoint(pattern):
        return [Path(absolute)]
    return [Path(match) for match in sorted(glob.glob(absolute))]


def is_inside(path: Path, cwd: Path) -> bool:
    """Check that removing ``path`` cannot touch anything outside ``cwd``.

    The path itself is compared lexically, so a symlink directly inside cwd
    still qualifies and is unlinked. Its parent directories are resolved, so
    a symlinked directory in the middle of the path cannot lead outside.
    """
    if not is_descendant(path, cwd):
        return False
    real_cwd = os.path.realpath(cwd)
    real_parent = os.path.realpath(path.parent)
    return real_parent == real_cwd or is_descendant(real_parent, real_cwd)


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree without following symlinks."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def clean(
    patterns: Sequence[str],
    cwd: Path | str,
    *,
    dry_run: bool = False,
) -> CleanResult:
    """Remove every path matched by patterns that lies inside cwd.

    Patterns escaping cwd are recorded as skipped and never touched.
    """
    cwd = Path(os.path.abspath(cwd))
    result = CleanResult()

    for pattern in patterns:
        if not is_descendant(os.path.join(cwd, pattern), cwd):
            print(f"  Skipping {pattern} (outside {cwd})")
            result.skipped.append(pattern)
            continue

        result.accepted.append(pattern)
        for path in expand_pattern(pattern, cwd):
            if not is_inside(path, cwd):
                print(f"  Skipping {path} (outside {cwd})")
                continue
            if not path.exists() and not path.is_symlink():
                continue
            size = get_size(path)
            if dry_run:
                print(f"  Would remove: {path} - {format_size(size)}")
            else:
                print(f"  Removing: {path} - {format_size(size)}")
                remove_path(path)
            result.removed.append(path)
            result.freed += size

    return result


def main(
    argv: Sequence[str] | None = None,
    *,
    cwd: Path | str | None = None,
    dry_run: bool | None = None,
) -> int:
    parser = argparse.ArgumentParser(
        prog="rb-clean",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        help="Paths or globs to remove, relative to the current directory",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be removed without removing anything",
    )
    args = parser.parse_args(argv)

    if dry_run is None:
        dry_run = args.dry_run or dry_run_requested()

    try:
        result = clean(args.patterns, cwd if cwd is not None else os.getcwd(), dry_run=dry_run)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.render())
    action = "Would free" if dry_run else "Freed"
    print(f"{action}: {format_size(result.freed)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
