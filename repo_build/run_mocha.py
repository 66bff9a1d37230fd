#!/usr/bin/env python3
"""
Run tests with mocha.

Usage:
    rb-mocha [--config <file>|--package <file>|--no-config] [mocha options] <test globs>

The built-in .mocharc.json is passed with --config unless the package brings
its own mocha configuration (.mocharc.js/.json/.yaml/.yml or a "mocha" key in
package.json) or one of --config, --package or --no-config is given.
"""

from __future__ import annotations

import sys
from typing import Sequence

from repo_build.shared.context import BuildContext
from repo_build.shared.manifest import load_manifest
from repo_build.shared.options import Option, OptionSpec
from repo_build.shared.paths import BUILTIN_CONFIG_DIR, ResolvedPaths
from repo_build.shared.process import Command
from repo_build.shared.tool import ToolSpec, run_wrapper

MOCHARC_NAMES = (".mocharc.js", ".mocharc.json", ".mocharc.yaml", ".mocharc.yml")
BUILTIN_MOCHARC = BUILTIN_CONFIG_DIR / ".mocharc.json"

MOCHA = ToolSpec(
    name="mocha",
    program="mocha",
    options=(
        OptionSpec("config", ("--config",)),
        OptionSpec("package", ("--package",)),
        OptionSpec("no_config", ("--no-config",), takes_value=False),
    ),
)


def mocha_configured_for_project(paths: ResolvedPaths) -> bool:
    """Check whether the package carries its own mocha configuration."""
    if any(paths.package_file(name).is_file() for name in MOCHARC_NAMES):
        return True
    return "mocha" in load_manifest(paths.package_dir)


def synthesize(argv: Sequence[str], context: BuildContext) -> Command:
    paths = context.paths
    invocation = MOCHA.parse(argv)

    config: dict[str, Option] = {}
    if not invocation.has("config", "package", "no_config") and not mocha_configured_for_project(paths):
        config["config"] = Option.flag("config", "--config", str(BUILTIN_MOCHARC))

    return MOCHA.command(context, invocation, config=config)


def main(
    argv: Sequence[str] | None = None,
    *,
    context: BuildContext | None = None,
    dry_run: bool | None = None,
) -> int:
    return run_wrapper(synthesize, argv, context=context, dry_run=dry_run)


if __name__ == "__main__":
    sys.exit(main())
