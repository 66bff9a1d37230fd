"""Shared fixtures: a throwaway package inside a throwaway monorepo.

Tools are never spawned; execution tests patch ``subprocess.run``.
"""

from __future__ import annotations

import json

import pytest

from repo_build.shared.context import BuildContext
from repo_build.shared.paths import ResolvedPaths


@pytest.fixture
def package_dir(tmp_path):
    path = tmp_path / "packages" / "ts-test-proj"
    path.mkdir(parents=True)
    (path / "package.json").write_text(
        json.dumps({"name": "ts-test-proj", "version": "1.0.0"}), encoding="utf-8"
    )
    return path


@pytest.fixture
def context(package_dir):
    return BuildContext(paths=ResolvedPaths(package_dir))


@pytest.fixture
def monorepo_context(package_dir, tmp_path):
    return BuildContext(paths=ResolvedPaths(package_dir, tmp_path))
