#!/usr/bin/env python3
"""
Generate API documentation for a TypeScript package.

Usage:
    rb-apidocs [--tsconfig <file>] [--tstarget <target>] [--out <dir>]
               [--skip-public-assets] [--html-file[=<file>]] [sdocs options]

Defaults: --tsconfig from tsconfig.build.json or tsconfig.json, --tstarget
es2017 and --out api-docs. Inside a monorepo (LERNA_ROOT_PATH set) the public
assets are skipped and the HTML file is named after the package, so that all
packages can publish into one shared docs site.
"""

from __future__ import annotations

import sys
from typing import Sequence

from repo_build.shared.context import BuildContext
from repo_build.shared.manifest import package_name, unscoped_name
from repo_build.shared.options import Option, OptionSpec, find_config_file
from repo_build.shared.process import Command
from repo_build.shared.tool import ToolSpec, run_wrapper

DEFAULT_TSTARGET = "es2017"
DEFAULT_OUT_DIR = "api-docs"

SDOCS = ToolSpec(
    name="sdocs",
    program="sdocs",
    options=(
        OptionSpec("tsconfig", ("--tsconfig",)),
        OptionSpec("tstarget", ("--tstarget",)),
        OptionSpec("out", ("--out",)),
        OptionSpec("skip_public_assets", ("--skip-public-assets",), takes_value=False),
        OptionSpec("html_file", ("--html-file",)),
    ),
)


def html_file_name(context: BuildContext) -> str:
    """Default HTML file for a package: ``<package-name>.html``."""
    return unscoped_name(package_name(context.paths.package_dir)) + ".html"


def synthesize(argv: Sequence[str], context: BuildContext) -> Command:
    paths = context.paths
    invocation = SDOCS.parse(argv)

    defaults: dict[str, Option] = {
        "tstarget": Option.flag("tstarget", "--tstarget", DEFAULT_TSTARGET),
        "out": Option.flag("out", "--out", DEFAULT_OUT_DIR),
    }
    if paths.is_monorepo:
        defaults["skip_public_assets"] = Option.flag("skip_public_assets", "--skip-public-assets")
        if not invocation.has("html_file"):
            defaults["html_file"] = Option.flag("html_file", "--html-file", html_file_name(context))

    config: dict[str, Option] = {}
    tsconfig = find_config_file(paths, "tsconfig.build.json", "tsconfig.json")
    if tsconfig is not None:
        config["tsconfig"] = Option.flag("tsconfig", "--tsconfig", paths.display(tsconfig))

    return SDOCS.command(context, invocation, defaults=defaults, config=config)


def main(
    argv: Sequence[str] | None = None,
    *,
    context: BuildContext | None = None,
    dry_run: bool | None = None,
) -> int:
    return run_wrapper(synthesize, argv, context=context, dry_run=dry_run)


if __name__ == "__main__":
    sys.exit(main())
