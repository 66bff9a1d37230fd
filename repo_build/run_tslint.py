#!/usr/bin/env python3
"""
Lint TypeScript sources with tslint.

Usage:
    rb-tslint [-c|--config <tslint.json>] [-p|--project <tsconfig>] [tslint options]

Without -c the lint config is tslint.build.json or tslint.json from the
package, the monorepo root or the built-in config, in that order. Without -p
the project is tsconfig.build.json or tsconfig.json, looked up the same way.
"""

from __future__ import annotations

import sys
from typing import Sequence

from repo_build.shared.context import BuildContext
from repo_build.shared.options import Option, OptionSpec, find_config_file
from repo_build.shared.process import Command
from repo_build.shared.tool import ToolSpec, run_wrapper

TSLINT = ToolSpec(
    name="tslint",
    program="tslint",
    options=(
        OptionSpec("config", ("-c", "--config")),
        OptionSpec("project", ("-p", "--project")),
    ),
)


def synthesize(argv: Sequence[str], context: BuildContext) -> Command:
    paths = context.paths
    invocation = TSLINT.parse(argv)

    config: dict[str, Option] = {}
    tslint_config = find_config_file(paths, "tslint.build.json", "tslint.json")
    if tslint_config is not None:
        config["config"] = Option.flag("config", "-c", paths.display(tslint_config))
    tsconfig = find_config_file(paths, "tsconfig.build.json", "tsconfig.json")
    if tsconfig is not None:
        config["project"] = Option.flag("project", "-p", paths.display(tsconfig))

    return TSLINT.command(context, invocation, config=config)


def main(
    argv: Sequence[str] | None = None,
    *,
    context: BuildContext | None = None,
    dry_run: bool | None = None,
) -> int:
    return run_wrapper(synthesize, argv, context=context, dry_run=dry_run)


if __name__ == "__main__":
    sys.exit(main())
