"""Generic command synthesis for the wrapped tools.

Every wrapper merges the same four layers, from lowest to highest
precedence:

1. built-in defaults of the wrapper
2. ``defaults`` from ``repo-build.yaml``
3. options derived from config files found on disk
4. explicit flags from the argument vector

Only the tables fed into each layer differ between tools.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Sequence

from .context import BuildContext, dry_run_requested
from .errors import BuildToolError
from .options import (
    Option,
    OptionSpec,
    ParsedInvocation,
    Shorthand,
    merge_options,
    parse_invocation,
    render_options,
)
from .process import Command, GeneratedFile, execute, resolve_executable

Synthesizer = Callable[[Sequence[str], BuildContext], Command]


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Static description of a wrapped tool."""

    name: str
    program: str
    options: tuple[OptionSpec, ...] = ()
    shorthand: Shorthand | None = None

    def parse(self, argv: Sequence[str]) -> ParsedInvocation:
        return parse_invocation(argv, self.options, tool=self.name, shorthand=self.shorthand)

    def command(
        self,
        context: BuildContext,
        invocation: ParsedInvocation,
        *,
        defaults: Mapping[str, Option | None] | None = None,
        configured: ParsedInvocation | None = None,
        config: Mapping[str, Option | None] | None = None,
        explicit: Mapping[str, Option | None] | None = None,
        cwd: Path | None = None,
        generated_files: tuple[GeneratedFile, ...] = (),
    ) -> Command:
        if configured is None:
            configured = parse_invocation(
                context.settings.default_args(self.name), self.options, tool=self.name
            )
        options = merge_options(
            defaults or {},
            configured.options,
            config or {},
            invocation.options if explicit is None else explicit,
        )
        argv = (
            resolve_executable(self.program, context.paths),
            *render_options(options),
            *configured.passthrough,
            *invocation.passthrough,
        )
        return Command(
            tool=self.name,
            argv=argv,
            cwd=cwd if cwd is not None else context.paths.package_dir,
            generated_files=generated_files,
        )


def run_wrapper(
    synthesize: Synthesizer,
    argv: Sequence[str] | None = None,
    *,
    context: BuildContext | None = None,
    dry_run: bool | None = None,
    quiet: bool = False,
) -> int:
    """Synthesize a command and either print it (dry run) or execute it."""
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
        return execute(command, quiet=quiet, echo=context.settings.echo).returncode
    except (BuildToolError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted.")
        return 130
