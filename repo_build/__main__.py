#!/usr/bin/env python3
"""
Unified build tools CLI for TypeScript packages in a monorepo.

Usage:
    python -m repo_build [--dry-run] <command> [options]
    repo-build [--dry-run] <command> [options]

Commands:
    compile         Compile TypeScript with tsc
    copy-resources  Copy non-TypeScript resources into the build output
    apidocs         Generate API documentation
    tslint          Lint TypeScript with tslint
    eslint          Check code style with eslint
    prettier        Format sources with prettier
    mocha           Run tests with mocha
    clean           Remove build artifacts inside the package

With --dry-run the synthesized command is printed instead of executed.
Set LERNA_ROOT_PATH to the monorepo root to enable monorepo defaults.

Examples:
    repo-build compile es2017
    repo-build --dry-run apidocs --tsconfig tsconfig.my.json
    repo-build prettier "**/src/*.ts" -- -l
    repo-build clean dist* api-docs
"""

from __future__ import annotations

import importlib
import sys
from typing import Sequence

COMMANDS: dict[str, tuple[str, str]] = {
    "compile": ("compile_package", "Compile TypeScript with tsc"),
    "copy-resources": ("copy_resources", "Copy non-TypeScript resources into the build output"),
    "apidocs": ("generate_apidocs", "Generate API documentation"),
    "tslint": ("run_tslint", "Lint TypeScript with tslint"),
    "eslint": ("run_eslint", "Check code style with eslint"),
    "prettier": ("run_prettier", "Format sources with prettier"),
    "mocha": ("run_mocha", "Run tests with mocha"),
    "clean": ("clean", "Remove build artifacts inside the package"),
}


def run_command(command: str, args: list[str], *, dry_run: bool = False) -> int:
    """Dispatch to a command module, returning its exit code."""
    module_name, _ = COMMANDS[command]
    module = importlib.import_module(f"repo_build.{module_name}")
    try:
        return module.main(args, dry_run=dry_run or None)
    except SystemExit as e:
        # argparse exits on --help and usage errors
        return e.code if isinstance(e.code, int) else 1


def print_help() -> None:
    print(__doc__)
    print("Available commands:")
    for name, (_, desc) in COMMANDS.items():
        print(f"  {name:16} {desc}")
    print("\nUse '<command> --help' for command-specific options.")


def main(argv: Sequence[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    dry_run = False
    while args and args[0] == "--dry-run":
        dry_run = True
        args = args[1:]

    if not args or args[0] in ("-h", "--help"):
        print_help()
        return 0

    command, rest = args[0], args[1:]
    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    return run_command(command, rest, dry_run=dry_run)


if __name__ == "__main__":
    sys.exit(main())
