#!/usr/bin/env python3
"""
Format sources with prettier.

Usage:
    rb-prettier <glob>... [-- <prettier options>]

Globs come first; anything after `--` is handed to prettier as options,
e.g. `rb-prettier "**/src/*.ts" -- -l`. Unless given explicitly, --config
points at .prettierrc and --ignore-path at .prettierignore, taken from the
package, the monorepo root or the built-in config.
"""

from __future__ import annotations

import sys
from typing import Sequence

from repo_build.shared.context import BuildContext
from repo_build.shared.options import Option, OptionSpec, find_config_file
from repo_build.shared.process import Command
from repo_build.shared.tool import ToolSpec, run_wrapper

SEPARATOR = "--"

PRETTIER = ToolSpec(
    name="prettier",
    program="prettier",
    options=(
        OptionSpec("config", ("--config",)),
        OptionSpec("ignore_path", ("--ignore-path",)),
    ),
)


def split_arguments(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split an argument vector into (globs, options) around `--`."""
    argv = list(argv)
    if SEPARATOR not in argv:
        return argv, []
    index = argv.index(SEPARATOR)
    return argv[:index], argv[index + 1 :]


def synthesize(argv: Sequence[str], context: BuildContext) -> Command:
    paths = context.paths
    globs, flags = split_arguments(argv)
    invocation = PRETTIER.parse([*flags, *globs])

    config: dict[str, Option] = {}
    prettier_config = find_config_file(paths, ".prettierrc")
    if prettier_config is not None:
        config["config"] = Option.flag("config", "--config", paths.display(prettier_config))
    ignore_file = find_config_file(paths, ".prettierignore")
    if ignore_file is not None:
        config["ignore_path"] = Option.flag("ignore_path", "--ignore-path", paths.display(ignore_file))

    return PRETTIER.command(context, invocation, config=config)


def main(
    argv: Sequence[str] | None = None,
    *,
    context: BuildContext | None = None,
    dry_run: bool | None = None,
) -> int:
    return run_wrapper(synthesize, argv, context=context, dry_run=dry_run)


if __name__ == "__main__":
    sys.exit(main())
