"""Package manifest (package.json) access."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import ManifestError

MANIFEST_NAME = "package.json"


def load_manifest(package_dir: Path) -> dict[str, Any]:
    """Load the package manifest, returning an empty mapping when absent.

    Raises:
        ManifestError: If the manifest exists but is not a JSON object.
    """
    manifest_path = package_dir / MANIFEST_NAME
    if not manifest_path.is_file():
        return {}
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ManifestError(f"Invalid manifest: {e}", str(manifest_path)) from e
    if not isinstance(data, dict):
        raise ManifestError("Manifest root must be an object", str(manifest_path))
    return data


def package_name(package_dir: Path) -> str:
    """Return the manifest name, or the directory name when there is none."""
    name = load_manifest(package_dir).get("name")
    if isinstance(name, str) and name:
        return name
    return package_dir.name


def unscoped_name(name: str) -> str:
    """Strip an npm scope: ``@scope/pkg`` becomes ``pkg``."""
    if name.startswith("@") and "/" in name:
        return name.split("/", 1)[1]
    return name
