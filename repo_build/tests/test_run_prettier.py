from unittest.mock import MagicMock, patch

from repo_build.run_prettier import main, split_arguments, synthesize
from repo_build.shared.paths import BUILTIN_CONFIG_DIR


class TestSplitArguments:
    def test_with_separator(self):
        assert split_arguments(["**/src/*.ts", "--", "-l"]) == (["**/src/*.ts"], ["-l"])

    def test_without_separator(self):
        assert split_arguments(["**/src/*.ts"]) == (["**/src/*.ts"], [])

    def test_only_first_separator_splits(self):
        assert split_arguments(["a", "--", "b", "--", "c"]) == (["a"], ["b", "--", "c"])


class TestSynthesize:
    def test_defaults(self, context):
        command = synthesize(["**/src/*.ts", "--", "-l"], context)

        rendered = command.render()
        assert f"--config {BUILTIN_CONFIG_DIR / '.prettierrc'}" in rendered
        assert f"--ignore-path {BUILTIN_CONFIG_DIR / '.prettierignore'}" in rendered
        assert command.argv[-2:] == ("-l", "**/src/*.ts")

    def test_package_config(self, context, package_dir):
        (package_dir / ".prettierrc").write_text("{}")

        assert "--config .prettierrc" in synthesize(["src"], context).render()

    def test_honors_config_after_separator(self, context):
        rendered = synthesize(["src", "--", "--config", "my.prettierrc"], context).render()

        assert "--config my.prettierrc" in rendered
        assert rendered.count("--config") == 1


class TestMain:
    @patch("subprocess.run")
    def test_runs_prettier(self, mock_run, context):
        mock_run.return_value = MagicMock(returncode=0)

        assert main(["**/src/*.ts", "--", "-l"], context=context, dry_run=False) == 0

        args, kwargs = mock_run.call_args
        assert args[0][0] == "prettier"
        assert args[0][-2:] == ["-l", "**/src/*.ts"]
