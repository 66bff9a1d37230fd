#!/usr/bin/env python3
"""
Compile a TypeScript package with tsc.

Usage:
    rb-tsc [target] [-p|--project <tsconfig>] [--target <target>] [--outDir <dir>] [tsc options]

The compiler config is taken from tsconfig.build.json or, failing that,
tsconfig.json in the package directory. When neither exists a tsconfig.json
extending the built-in common config is generated before tsc runs.

A bare compilation target such as `es2015` is shorthand for `--target es2015`
and also picks the default output directory (dist6, dist8 or dist10).

With LERNA_ROOT_PATH set, tsc runs from the monorepo root and every path on
its command line is relative to that root.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Mapping, Sequence

from repo_build.shared.context import BuildContext
from repo_build.shared.errors import ArgumentError
from repo_build.shared.options import (
    Option,
    OptionSpec,
    ParsedInvocation,
    Shorthand,
    find_config_file,
)
from repo_build.shared.paths import BUILTIN_CONFIG_DIR, ResolvedPaths, relative_to
from repo_build.shared.process import Command, GeneratedFile
from repo_build.shared.templates import render_template
from repo_build.shared.tool import ToolSpec, run_wrapper

TARGET_PATTERN = re.compile(r"^es(3|5|20\d\d|next)$", re.IGNORECASE)

DISTRIBUTIONS: dict[str, str] = {
    "es2015": "dist6",
    "es2017": "dist8",
    "es2018": "dist10",
}
DEFAULT_DISTRIBUTION = "dist"

TSCONFIG_INCLUDE = ("src", "test")
TSCONFIG_EXCLUDE = ("node_modules/**", "packages/*/node_modules/**", "**/*.d.ts")


def is_target(token: str) -> bool:
    """Check whether a positional argument names a compilation target."""
    return TARGET_PATTERN.match(token) is not None


def get_distribution(target: str | None) -> str:
    """Map a compilation target to its output directory name."""
    if not target:
        return DEFAULT_DISTRIBUTION
    return DISTRIBUTIONS.get(target.lower(), DEFAULT_DISTRIBUTION)


TSC = ToolSpec(
    name="tsc",
    program="tsc",
    options=(
        OptionSpec("project", ("-p", "--project")),
        OptionSpec("target", ("--target",)),
        OptionSpec("outDir", ("--outDir",)),
    ),
    shorthand=Shorthand("target", "--target", is_target),
)


def render_tsconfig(paths: ResolvedPaths) -> str:
    """Render the tsconfig.json generated for packages that have none."""
    common = BUILTIN_CONFIG_DIR / "tsconfig.common.json"
    extends = Path(relative_to(paths.package_dir, common)).as_posix()
    return render_template(
        "tsconfig.json.jinja",
        extends=extends,
        include=list(TSCONFIG_INCLUDE),
        exclude=list(TSCONFIG_EXCLUDE),
    )


def _with_value(option: Option, value: str) -> Option:
    flag = option.tokens[0].split("=", 1)[0]
    return Option.flag(option.key, flag, value)


def _path_value(option: Option) -> str:
    if not isinstance(option.value, str) or not option.value:
        raise ArgumentError("expects a path", TSC.name, option.tokens[0].split("=", 1)[0])
    return option.value


def _rebase(paths: ResolvedPaths, base: Path, value: str) -> str:
    """Re-express a package-relative path relative to ``base``."""
    absolute = os.path.normpath(os.path.join(paths.package_dir, value))
    return relative_to(base, absolute)


def _rebase_paths(
    options: Mapping[str, Option], paths: ResolvedPaths, base: Path
) -> dict[str, Option]:
    """Rebase the path options of one layer onto the directory tsc runs from."""
    rebased = dict(options)
    if "outDir" in rebased:
        option = rebased["outDir"]
        rebased["outDir"] = _with_value(option, _rebase(paths, base, _path_value(option)))
    if "project" in rebased and base != paths.package_dir:
        option = rebased["project"]
        rebased["project"] = _with_value(option, _rebase(paths, base, _path_value(option)))
    return rebased


def synthesize(argv: Sequence[str], context: BuildContext) -> Command:
    paths = context.paths
    base = paths.root_or_package
    invocation = TSC.parse(argv)
    configured = TSC.parse(context.settings.default_args(TSC.name))

    target = invocation.value("target") or configured.value("target")
    out_dir = paths.package_dir / get_distribution(target if isinstance(target, str) else None)
    defaults = {"outDir": Option.flag("outDir", "--outDir", relative_to(base, out_dir))}

    explicit = _rebase_paths(invocation.options, paths, base)
    configured = ParsedInvocation(
        options=_rebase_paths(configured.options, paths, base),
        passthrough=configured.passthrough,
    )

    config: dict[str, Option] = {}
    generated: tuple[GeneratedFile, ...] = ()
    if not invocation.has("project") and not configured.has("project"):
        tsconfig = find_config_file(
            paths,
            "tsconfig.build.json",
            "tsconfig.json",
            include_root=False,
            include_builtin=False,
        )
        if tsconfig is None:
            tsconfig = paths.package_file("tsconfig.json")
            generated = (GeneratedFile(tsconfig, render_tsconfig(paths)),)
        config["project"] = Option.flag("project", "-p", relative_to(base, tsconfig))

    return TSC.command(
        context,
        invocation,
        defaults=defaults,
        configured=configured,
        config=config,
        explicit=explicit,
        cwd=base,
        generated_files=generated,
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    context: BuildContext | None = None,
    dry_run: bool | None = None,
) -> int:
    return run_wrapper(synthesize, argv, context=context, dry_run=dry_run)


if __name__ == "__main__":
    sys.exit(main())
