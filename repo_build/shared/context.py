"""Per-invocation context shared by the tool wrappers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .paths import PathResolver, ResolvedPaths
from .settings import Settings, load_settings

DRY_RUN_ENV_VAR = "REPO_BUILD_DRY_RUN"


@dataclass(frozen=True)
class BuildContext:
    """Resolved directories and settings for one invocation."""

    paths: ResolvedPaths
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        cwd: Path | str | None = None,
    ) -> BuildContext:
        environ = os.environ if environ is None else environ
        paths = PathResolver(environ, cwd if cwd is not None else os.getcwd()).resolve()
        return cls(paths=paths, settings=load_settings(paths))


def dry_run_requested(environ: Mapping[str, str] | None = None) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get(DRY_RUN_ENV_VAR, "").strip().lower() in ("1", "true", "yes", "on")
