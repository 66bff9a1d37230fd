from unittest.mock import patch

from repo_build import __main__


class TestMain:
    def test_help(self, capsys):
        assert __main__.main([]) == 0
        assert "Available commands:" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert __main__.main(["deploy"]) == 1
        assert "Unknown command: deploy" in capsys.readouterr().out

    @patch("repo_build.compile_package.main")
    def test_dispatch(self, mock_main):
        mock_main.return_value = 2

        assert __main__.main(["compile", "es2015"]) == 2
        mock_main.assert_called_once_with(["es2015"], dry_run=None)

    @patch("repo_build.run_mocha.main")
    def test_dry_run_flag(self, mock_main):
        mock_main.return_value = 0

        assert __main__.main(["--dry-run", "mocha", "dist/__tests__"]) == 0
        mock_main.assert_called_once_with(["dist/__tests__"], dry_run=True)

    @patch("repo_build.clean.main")
    def test_system_exit(self, mock_main):
        mock_main.side_effect = SystemExit(2)

        assert __main__.main(["clean", "--bogus"]) == 2

    def test_dry_run_end_to_end(self, package_dir, monkeypatch, capsys):
        monkeypatch.chdir(package_dir)
        monkeypatch.delenv("LERNA_ROOT_PATH", raising=False)

        assert __main__.main(["--dry-run", "compile", "es2015"]) == 0

        out = capsys.readouterr().out
        assert "--target es2015" in out
        assert "-p tsconfig.json" in out
        assert not (package_dir / "tsconfig.json").exists()

    def test_monorepo_end_to_end(self, package_dir, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(package_dir)
        monkeypatch.setenv("LERNA_ROOT_PATH", str(tmp_path))

        assert __main__.main(["--dry-run", "apidocs"]) == 0

        out = capsys.readouterr().out
        assert "--skip-public-assets" in out
        assert "--html-file ts-test-proj.html" in out
