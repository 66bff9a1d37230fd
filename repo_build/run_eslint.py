#!/usr/bin/env python3
"""
Check code style with eslint.

Usage:
    rb-eslint [-c|--config <file>] [--ignore-path <file>|--no-ignore] [--ext <exts>] [eslint options]

Defaults: -c from .eslintrc.js or .eslintrc.json, --ignore-path from
.eslintignore when one is found, and --ext .js,.ts.
"""

from __future__ import annotations

import sys
from typing import Sequence

from repo_build.shared.context import BuildContext
from repo_build.shared.options import Option, OptionSpec, find_config_file
from repo_build.shared.process import Command
from repo_build.shared.tool import ToolSpec, run_wrapper

DEFAULT_EXTENSIONS = ".js,.ts"

ESLINT = ToolSpec(
    name="eslint",
    program="eslint",
    options=(
        OptionSpec("config", ("-c", "--config")),
        OptionSpec("ignore", ("--ignore-path",)),
        OptionSpec("ignore", ("--no-ignore",), takes_value=False),
        OptionSpec("ext", ("--ext",)),
    ),
)


def synthesize(argv: Sequence[str], context: BuildContext) -> Command:
    paths = context.paths
    invocation = ESLINT.parse(argv)

    defaults = {"ext": Option.flag("ext", "--ext", DEFAULT_EXTENSIONS)}

    config: dict[str, Option] = {}
    eslint_config = find_config_file(paths, ".eslintrc.js", ".eslintrc.json")
    if eslint_config is not None:
        config["config"] = Option.flag("config", "-c", paths.display(eslint_config))
    ignore_file = find_config_file(paths, ".eslintignore")
    if ignore_file is not None:
        config["ignore"] = Option.flag("ignore", "--ignore-path", paths.display(ignore_file))

    return ESLINT.command(context, invocation, defaults=defaults, config=config)


def main(
    argv: Sequence[str] | None = None,
    *,
    context: BuildContext | None = None,
    dry_run: bool | None = None,
) -> int:
    return run_wrapper(synthesize, argv, context=context, dry_run=dry_run)


if __name__ == "__main__":
    sys.exit(main())
