#!/usr/bin/env python3
"""
Copy non-TypeScript resources into the build output.

Usage:
    rb-copy-resources [--outDir <dir>] [--rootDir <dir>]

Every file below --rootDir (default: src) that is not a .ts or .js source is
copied into --outDir (default: dist), keeping its path relative to the
package directory. src/views/index.html therefore lands in
dist/src/views/index.html, next to the compiled sources.
"""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path
from typing import Iterator, Sequence

from repo_build.shared.context import BuildContext, dry_run_requested
from repo_build.shared.errors import ArgumentError, BuildToolError
from repo_build.shared.options import (
    Option,
    OptionSpec,
    merge_options,
    parse_invocation,
    render_options,
)
from repo_build.shared.paths import ResolvedPaths, is_descendant, relative_to
from repo_build.shared.process import Command

TOOL = "copy-resources"
SOURCE_SUFFIXES = (".ts", ".js")

OPTION_SPECS = (
    OptionSpec("outDir", ("--outDir",)),
    OptionSpec("rootDir", ("--rootDir",)),
)

DEFAULTS = {
    "outDir": Option.flag("outDir", "--outDir", "dist"),
    "rootDir": Option.flag("rootDir", "--rootDir", "src"),
}


def _merged_options(argv: Sequence[str], context: BuildContext) -> dict[str, Option]:
    invocation = parse_invocation(argv, OPTION_SPECS, tool=TOOL)
    if invocation.passthrough:
        raise ArgumentError(f"Unexpected arguments: {' '.join(invocation.passthrough)}", TOOL)
    configured = parse_invocation(context.settings.default_args(TOOL), OPTION_SPECS, tool=TOOL)
    merged = merge_options(DEFAULTS, configured.options, invocation.options)
    for key, option in merged.items():
        if not isinstance(option.value, str) or not option.value:
            raise ArgumentError("expects a directory", TOOL, f"--{key}")
        merged[key] = Option.flag(key, f"--{key}", os.path.normpath(option.value))
    return merged


def resolve_dirs(argv: Sequence[str], context: BuildContext) -> tuple[Path, Path]:
    """Return the absolute (root_dir, out_dir) pair for an invocation."""
    merged = _merged_options(argv, context)
    package_dir = context.paths.package_dir
    return (
        package_dir / str(merged["rootDir"].value),
        package_dir / str(merged["outDir"].value),
    )


def synthesize(argv: Sequence[str], context: BuildContext) -> Command:
    merged = _merged_options(argv, context)
    return Command(
        tool=TOOL,
        argv=(TOOL, *render_options(merged)),
        cwd=context.paths.package_dir,
    )


def find_resources(root_dir: Path) -> Iterator[Path]:
    """Find all non-source files under root_dir."""
    for path in sorted(root_dir.rglob("*")):
        if path.is_file() and path.suffix not in SOURCE_SUFFIXES:
            yield path


def copy_resources(paths: ResolvedPaths, root_dir: Path, out_dir: Path) -> list[Path]:
    """Copy resources from root_dir into out_dir, returning the new files."""
    if not root_dir.is_dir():
        print(f"Warning: Resource directory not found: {root_dir}")
        return []

    copied: list[Path] = []
    for resource in find_resources(root_dir):
        if is_descendant(resource, paths.package_dir):
            destination = out_dir / relative_to(paths.package_dir, resource)
        else:
            destination = out_dir / resource.relative_to(root_dir)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(resource, destination)
        copied.append(destination)
    return copied


def main(
    argv: Sequence[str] | None = None,
    *,
    context: BuildContext | None = None,
    dry_run: bool | None = None,
) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    if dry_run is None:
        dry_run = dry_run_requested()
    try:
        if context is None:
            context = BuildContext.from_environment()
        command = synthesize(argv, context)
        if dry_run:
            print(command.render())
            return 0
        root_dir, out_dir = resolve_dirs(argv, context)
        copied = copy_resources(context.paths, root_dir, out_dir)
    except (BuildToolError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Copied {len(copied)} resource(s) to {out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
