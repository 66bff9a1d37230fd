"""Optional YAML settings for the build wrappers.

Settings are read from ``repo-build.yaml`` (or ``repo-build.yml``) in the
monorepo root and then in the package directory; package values win.

Example::

    defaults:
      tsc: ["--pretty"]
      mocha: ["--timeout", "5000"]
    echo: false
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import SettingsError
from .paths import ResolvedPaths

SETTINGS_FILENAMES = ("repo-build.yaml", "repo-build.yml")
KNOWN_KEYS = frozenset({"defaults", "echo"})


@dataclass(frozen=True)
class Settings:
    """Per-repository wrapper settings."""

    defaults: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    echo: bool = True

    def default_args(self, tool: str) -> tuple[str, ...]:
        return tuple(self.defaults.get(tool, ()))


def load_settings_file(settings_path: Path) -> dict[str, Any]:
    """Load and validate a settings file.

    Raises:
        SettingsError: If the file cannot be read, parsed or validated.
    """
    try:
        content = settings_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Failed to read settings file: {e}", str(settings_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML: {e}", str(settings_path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError("Settings root must be a mapping", str(settings_path))

    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise SettingsError(f"Unknown settings: {', '.join(unknown)}", str(settings_path))

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise SettingsError("'defaults' must map tool names to argument lists", str(settings_path))
    for tool, args in defaults.items():
        if not isinstance(args, list) or not all(isinstance(a, (str, int, float)) for a in args):
            raise SettingsError(f"'defaults.{tool}' must be a list of arguments", str(settings_path))

    if "echo" in data and not isinstance(data["echo"], bool):
        raise SettingsError("'echo' must be true or false", str(settings_path))

    return data


def find_settings_file(directory: Path) -> Path | None:
    for name in SETTINGS_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_settings(paths: ResolvedPaths) -> Settings:
    """Load settings for one invocation, package values overriding root ones."""
    directories: list[Path] = []
    if paths.monorepo_root is not None and paths.monorepo_root != paths.package_dir:
        directories.append(paths.monorepo_root)
    directories.append(paths.package_dir)

    defaults: dict[str, tuple[str, ...]] = {}
    echo = True
    for directory in directories:
        settings_path = find_settings_file(directory)
        if settings_path is None:
            continue
        data = load_settings_file(settings_path)
        for tool, args in (data.get("defaults") or {}).items():
            defaults[str(tool)] = tuple(str(a) for a in args)
        echo = data.get("echo", echo)

    return Settings(defaults=defaults, echo=echo)
