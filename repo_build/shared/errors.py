"""Custom exceptions for build tools."""

from __future__ import annotations


class BuildToolError(Exception):
    """Base exception for wrapper errors."""

    def __init__(self, message: str, tool: str | None = None) -> None:
        self.tool = tool
        full_message = f"{message}" if not tool else f"[{tool}] {message}"
        super().__init__(full_message)


class ArgumentError(BuildToolError):
    """Raised when an argument vector cannot be turned into a command."""

    def __init__(
        self,
        message: str,
        tool: str | None = None,
        option: str | None = None,
    ) -> None:
        self.option = option
        if option:
            message = f"Option '{option}': {message}"
        super().__init__(message, tool)


class PathResolutionError(BuildToolError):
    """Raised when relative path arithmetic gets a non-absolute path."""

    def __init__(self, path: str, role: str) -> None:
        self.path = path
        super().__init__(f"{role} must be an absolute path, got '{path}'")


class SettingsError(BuildToolError):
    """Raised when a settings file cannot be read or is invalid."""

    def __init__(self, message: str, settings_path: str | None = None) -> None:
        self.settings_path = settings_path
        if settings_path:
            message = f"{settings_path}: {message}"
        super().__init__(message)


class ToolNotFoundError(BuildToolError):
    """Raised when the executable of a wrapped tool cannot be found."""

    def __init__(self, executable: str, tool: str | None = None) -> None:
        self.executable = executable
        super().__init__(f"Command not found: {executable}", tool)


class ManifestError(BuildToolError):
    """Raised when a package manifest cannot be parsed."""

    def __init__(self, message: str, manifest_path: str) -> None:
        self.manifest_path = manifest_path
        super().__init__(f"{manifest_path}: {message}")
