"""Command values and their execution."""

from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import ToolNotFoundError
from .paths import ResolvedPaths


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    """A file that must exist before a command runs."""

    path: Path
    content: str


@dataclass(frozen=True, slots=True)
class Command:
    """A fully synthesized tool invocation."""

    tool: str
    argv: tuple[str, ...]
    cwd: Path
    generated_files: tuple[GeneratedFile, ...] = ()

    def render(self) -> str:
        return " ".join(str(c) for c in self.argv)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class ExitResult:
    """Result of executing a command."""

    command: Command
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def resolve_executable(program: str, paths: ResolvedPaths) -> str:
    """Locate a tool in ``node_modules/.bin`` of the package or monorepo root.

    Falls back to the bare program name, leaving the lookup to ``PATH``.
    """
    names = [program]
    if sys.platform == "win32":
        names.append(program + ".cmd")
    directories = [paths.package_dir]
    if paths.monorepo_root is not None:
        directories.append(paths.monorepo_root)
    for directory in directories:
        for name in names:
            candidate = directory / "node_modules" / ".bin" / name
            if candidate.is_file():
                return str(candidate)
    return program


def write_generated_files(command: Command) -> None:
    for generated in command.generated_files:
        generated.path.parent.mkdir(parents=True, exist_ok=True)
        generated.path.write_text(generated.content, encoding="utf-8")
        print(f"  Wrote {generated.path}")


def execute(
    command: Command,
    *,
    quiet: bool = False,
    echo: bool = True,
    env: Mapping[str, str] | None = None,
) -> ExitResult:
    """Run a command and wait for it, returning the tool's exit code.

    The code is passed through unchanged, except that a tool killed by a
    signal reports ``128 + signum`` like a shell would.

    Raises:
        ToolNotFoundError: If the executable does not exist.
    """
    write_generated_files(command)
    if echo:
        print(f"\n$ {command.render()}")
    # On Windows, resolve the executable path to handle .cmd/.bat files
    resolved_cmd = list(command.argv)
    if sys.platform == "win32" and resolved_cmd:
        resolved = shutil.which(resolved_cmd[0])
        if resolved:
            resolved_cmd[0] = resolved
    try:
        completed = subprocess.run(
            resolved_cmd,
            cwd=command.cwd,
            check=False,
            stdout=subprocess.DEVNULL if quiet else None,
            env=None if env is None else dict(env),
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(command.argv[0], command.tool) from e
    returncode = completed.returncode
    if returncode < 0:
        # -N means the tool was killed by signal N
        returncode = 128 - returncode
    return ExitResult(command, returncode)
