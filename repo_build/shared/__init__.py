"""Shared utilities for the tool wrappers."""

from .context import BuildContext
from .errors import (
    ArgumentError,
    BuildToolError,
    ManifestError,
    PathResolutionError,
    SettingsError,
    ToolNotFoundError,
)
from .options import (
    Option,
    OptionSpec,
    ParsedInvocation,
    Shorthand,
    find_config_file,
    merge_options,
    parse_invocation,
)
from .paths import PathResolver, ResolvedPaths, is_descendant, relative_to
from .process import Command, ExitResult, GeneratedFile, execute

__all__ = [
    # Context
    "BuildContext",
    # Paths
    "PathResolver",
    "ResolvedPaths",
    "is_descendant",
    "relative_to",
    # Options
    "Option",
    "OptionSpec",
    "ParsedInvocation",
    "Shorthand",
    "find_config_file",
    "merge_options",
    "parse_invocation",
    # Commands
    "Command",
    "ExitResult",
    "GeneratedFile",
    "execute",
    # Errors
    "ArgumentError",
    "BuildToolError",
    "ManifestError",
    "PathResolutionError",
    "SettingsError",
    "ToolNotFoundError",
]
