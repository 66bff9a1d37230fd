import os
import sys

import pytest

from repo_build.clean import (
    CleanResult,
    clean,
    expand_pattern,
    format_size,
    get_size,
    is_inside,
    main,
)


@pytest.fixture
def project(tmp_path):
    path = tmp_path / "proj"
    (path / "dist").mkdir(parents=True)
    (path / "dist" / "index.js").write_text("module.exports = {};")
    (path / "dist6").mkdir()
    (path / "src").mkdir()
    (path / "src" / "index.ts").write_text("export {};")
    (path / "tsconfig.json").write_text("{}")
    (tmp_path / "x").write_text("outside")
    return path


class TestClean:
    def test_does_not_remove_outside_the_project(self, project, tmp_path):
        result = clean(["../x", "./dist"], project)

        assert not (project / "dist").exists()
        assert (tmp_path / "x").exists()
        assert result.skipped == ["../x"]
        assert result.render() == "rm -rf ./dist"

    def test_absolute_path_outside(self, project, tmp_path):
        result = clean([str(tmp_path / "x")], project)

        assert (tmp_path / "x").exists()
        assert result.accepted == []

    def test_absolute_path_inside(self, project):
        clean([str(project / "dist")], project)

        assert not (project / "dist").exists()

    def test_project_dir_itself_is_skipped(self, project):
        result = clean([".", "dist/.."], project)

        assert project.exists()
        assert result.skipped == [".", "dist/.."]

    def test_removes_files_and_directories(self, project):
        result = clean(["tsconfig.json", "dist", "api-docs"], project)

        assert result.render() == "rm -rf tsconfig.json dist api-docs"
        assert not (project / "tsconfig.json").exists()
        assert not (project / "dist").exists()
        assert (project / "src" / "index.ts").exists()
        assert result.removed == [project / "tsconfig.json", project / "dist"]

    def test_glob(self, project):
        clean(["dist*"], project)

        assert not (project / "dist").exists()
        assert not (project / "dist6").exists()
        assert (project / "src").exists()

    def test_dry_run(self, project):
        result = clean(["dist", "../x"], project, dry_run=True)

        assert (project / "dist").exists()
        assert result.removed == [project / "dist"]
        assert result.render() == "rm -rf dist"

    @pytest.mark.skipif(sys.platform == "win32", reason="Symlinks need privileges on Windows")
    def test_symlink_not_followed(self, project, tmp_path):
        outside = tmp_path / "shared"
        outside.mkdir()
        (outside / "keep.txt").write_text("keep")
        os.symlink(outside, project / "link", target_is_directory=True)

        clean(["link"], project)

        assert not (project / "link").exists()
        assert (outside / "keep.txt").exists()

    @pytest.mark.skipif(sys.platform == "win32", reason="Symlinks need privileges on Windows")
    @pytest.mark.parametrize("pattern", ["link/dist", "link/dist*", "link/*"])
    def test_symlinked_parent_not_followed(self, project, tmp_path, pattern):
        sibling = tmp_path / "sibling"
        (sibling / "dist").mkdir(parents=True)
        (sibling / "dist" / "index.js").write_text("module.exports = {};")
        os.symlink(sibling, project / "link", target_is_directory=True)

        result = clean([pattern], project)

        assert (sibling / "dist" / "index.js").exists()
        assert (project / "link").is_symlink()
        assert result.removed == []

    @pytest.mark.skipif(sys.platform == "win32", reason="Symlinks need privileges on Windows")
    def test_is_inside(self, project, tmp_path):
        os.symlink(tmp_path, project / "link", target_is_directory=True)

        assert is_inside(project / "dist" / "index.js", project)
        assert is_inside(project / "link", project)
        assert not is_inside(project / "link" / "x", project)
        assert not is_inside(project, project)


class TestExpandPattern:
    def test_literal_missing_path(self, tmp_path):
        assert expand_pattern("missing", tmp_path) == [tmp_path / "missing"]

    def test_glob_without_matches(self, tmp_path):
        assert expand_pattern("dist*", tmp_path) == []


class TestSizes:
    @pytest.mark.parametrize(
        "size_bytes,expected",
        [
            (0, "0.0 B"),
            (512, "512.0 B"),
            (1536, "1.5 KB"),
            (1048576, "1.0 MB"),
            (1099511627776, "1.0 TB"),
        ],
    )
    def test_format_size(self, size_bytes, expected):
        assert format_size(size_bytes) == expected

    def test_get_size(self, tmp_path):
        (tmp_path / "a.txt").write_text("hello")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.txt").write_text("world!")
        assert get_size(tmp_path) == 11
        assert get_size(tmp_path / "a.txt") == 5
        assert get_size(tmp_path / "missing") == 0


class TestCleanResult:
    def test_render_empty(self):
        assert CleanResult().render() == "Nothing to remove"

    def test_render_all_skipped(self, project):
        assert clean(["../x", "."], project).render() == "Nothing to remove"


class TestMain:
    def test_main(self, project, capsys):
        assert main(["dist", "../x"], cwd=project) == 0

        out = capsys.readouterr().out
        assert "Removing:" in out
        assert "Skipping ../x" in out
        assert "rm -rf dist" in out
        assert not (project / "dist").exists()

    def test_main_dry_run_flag(self, project, capsys):
        assert main(["--dry-run", "dist"], cwd=project) == 0

        assert "Would remove:" in capsys.readouterr().out
        assert (project / "dist").exists()

    def test_main_dry_run_env(self, project, monkeypatch):
        monkeypatch.setenv("REPO_BUILD_DRY_RUN", "1")

        assert main(["dist"], cwd=project) == 0
        assert (project / "dist").exists()
