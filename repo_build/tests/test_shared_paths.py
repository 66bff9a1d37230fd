import os

import pytest

from repo_build.shared.errors import PathResolutionError
from repo_build.shared.paths import (
    ROOT_ENV_VAR,
    PathResolver,
    ResolvedPaths,
    is_descendant,
    relative_to,
)


class TestRelativeTo:
    def test_relative_to_child(self, tmp_path):
        target = tmp_path / "packages" / "core" / "tsconfig.json"
        assert relative_to(tmp_path, target) == os.path.join("packages", "core", "tsconfig.json")

    def test_relative_to_sibling(self, tmp_path):
        assert relative_to(tmp_path / "a", tmp_path / "b") == os.path.join("..", "b")

    def test_relative_to_same_dir(self, tmp_path):
        assert relative_to(tmp_path, tmp_path) == "."

    def test_relative_root_rejected(self, tmp_path):
        with pytest.raises(PathResolutionError) as excinfo:
            relative_to("relative", tmp_path)
        assert excinfo.value.path == "relative"

    def test_relative_path_rejected(self, tmp_path):
        with pytest.raises(PathResolutionError):
            relative_to(tmp_path, "dist")


class TestIsDescendant:
    @pytest.mark.parametrize(
        "relative,expected",
        [
            ("dist", True),
            ("./dist", True),
            ("dist/lib/index.js", True),
            ("src/../dist", True),
            (".", False),
            ("../x", False),
            ("dist/../../x", False),
        ],
    )
    def test_is_descendant(self, tmp_path, relative, expected):
        base = tmp_path / "proj"
        assert is_descendant(os.path.join(base, relative), base) is expected

    def test_absolute_elsewhere(self, tmp_path):
        assert is_descendant(tmp_path / "other", tmp_path / "proj") is False

    def test_prefix_is_not_containment(self, tmp_path):
        assert is_descendant(tmp_path / "proj-old" / "x", tmp_path / "proj") is False


class TestPathResolver:
    def test_no_override(self, tmp_path):
        resolver = PathResolver({}, tmp_path)
        assert resolver.resolve_monorepo_root() is None

    def test_empty_override(self, tmp_path):
        resolver = PathResolver({ROOT_ENV_VAR: ""}, tmp_path)
        assert resolver.resolve_monorepo_root() is None

    def test_absolute_override_used_verbatim(self, tmp_path):
        root = tmp_path / "does-not-exist"
        resolver = PathResolver({ROOT_ENV_VAR: str(root)}, tmp_path / "pkg")
        assert resolver.resolve_monorepo_root() == root

    def test_relative_override_resolved_against_cwd(self, tmp_path):
        package = tmp_path / "packages" / "core"
        resolver = PathResolver({ROOT_ENV_VAR: "../.."}, package)
        assert resolver.resolve_monorepo_root() == tmp_path

    def test_resolve(self, tmp_path):
        paths = PathResolver({ROOT_ENV_VAR: str(tmp_path)}, tmp_path / "pkg").resolve()
        assert paths.package_dir == tmp_path / "pkg"
        assert paths.monorepo_root == tmp_path
        assert paths.is_monorepo is True


class TestResolvedPaths:
    def test_single_package_mode(self, tmp_path):
        paths = ResolvedPaths(tmp_path)
        assert paths.is_monorepo is False
        assert paths.root_or_package == tmp_path
        assert paths.package_file("tsconfig.json") == tmp_path / "tsconfig.json"

    def test_monorepo_mode(self, tmp_path):
        package = tmp_path / "packages" / "core"
        paths = ResolvedPaths(package, tmp_path)
        assert paths.root_or_package == tmp_path
        assert paths.is_monorepo is True
        assert paths.package_file("tslint.json") == package / "tslint.json"

    def test_display_inside_and_outside(self, tmp_path):
        package = tmp_path / "pkg"
        paths = ResolvedPaths(package)
        assert paths.display(package / ".prettierrc") == ".prettierrc"
        assert paths.display(tmp_path / "shared" / ".prettierrc") == str(
            tmp_path / "shared" / ".prettierrc"
        )

    def test_frozen(self, tmp_path):
        paths = ResolvedPaths(tmp_path)
        with pytest.raises(AttributeError):
            paths.monorepo_root = tmp_path
