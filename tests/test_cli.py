"""Tests for argument parsing, settings loading and the CLI entry point."""

import logging
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

import ec0lint_init
from args import parse_args
from cli_config import apply_overrides, collect_answers, load_config_file
from config_init.errors import ConfigWriteError, InstallError, InstalledQueryError
from config_init.initializer import InitResult
from constants import Constants, ExitCodes


class TestParseArgs:
    """Tests for parse_args()."""

    def test_defaults(self):
        args = parse_args([])

        assert args.PURPOSE is None
        assert args.ENV is None
        assert args.LOG_LEVEL == "INFO"
        assert args.YES is False
        assert args.NO_INSTALL is False

    def test_answers(self):
        args = parse_args([
            "--purpose", "syntax-only", "--env", "node", "--env", "browser",
            "-f", "YAML", "--indent", "2", "--typescript",
        ])

        assert args.PURPOSE == "syntax-only"
        assert args.ENV == ["node", "browser"]
        assert args.FORMAT == "YAML"
        assert args.INDENT == 2
        assert args.TYPESCRIPT is True

    def test_tab_indent(self):
        assert parse_args(["--indent", "tab"]).INDENT == "tab"

    def test_bad_indent(self):
        with pytest.raises(SystemExit):
            parse_args(["--indent", "wide"])

    def test_yes_and_no_install_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["--yes", "--no-install"])

    def test_unknown_format(self):
        with pytest.raises(SystemExit):
            parse_args(["--format", "TOML"])


class TestLoadConfigFile:
    """Tests for load_config_file()."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("registry_url: https://npm.example.test/\nanswers:\n  format: YAML\n", encoding="utf-8")

        cfg = load_config_file(str(path))

        assert cfg == {"registry_url": "https://npm.example.test/", "answers": {"format": "YAML"}}

    def test_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{"request_timeout": 5}', encoding="utf-8")

        assert load_config_file(str(path)) == {"request_timeout": 5}

    def test_missing_explicit_file(self, tmp_path):
        assert load_config_file(str(tmp_path / "nope.yml")) == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("a: [unclosed", encoding="utf-8")

        assert load_config_file(str(path)) == {}

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        assert load_config_file(str(path)) == {}

    def test_default_locations(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        target = tmp_path / "ec0lint-init" / "config.yml"
        target.parent.mkdir()
        target.write_text("request_timeout: 7\n", encoding="utf-8")

        assert load_config_file() == {"request_timeout": 7}


class TestApplyOverrides:
    """Tests for apply_overrides()."""

    @pytest.fixture(autouse=True)
    def _restore_constants(self, monkeypatch):
        monkeypatch.setattr(Constants, "REGISTRY_URL_NPM", "https://registry.npmjs.org/")
        monkeypatch.setattr(Constants, "REQUEST_TIMEOUT", 30)
        monkeypatch.delenv(Constants.ENV_REGISTRY_URL, raising=False)

    def test_file_values(self):
        apply_overrides(parse_args([]), {"registry_url": "https://file.test/", "request_timeout": "12"})

        assert Constants.REGISTRY_URL_NPM == "https://file.test/"
        assert Constants.REQUEST_TIMEOUT == 12

    def test_env_beats_file(self, monkeypatch):
        monkeypatch.setenv(Constants.ENV_REGISTRY_URL, "https://env.test/")

        apply_overrides(parse_args([]), {"registry_url": "https://file.test/"})

        assert Constants.REGISTRY_URL_NPM == "https://env.test/"

    def test_cli_beats_env(self, monkeypatch):
        monkeypatch.setenv(Constants.ENV_REGISTRY_URL, "https://env.test/")

        apply_overrides(parse_args(["--registry", "https://cli.test/"]), {})

        assert Constants.REGISTRY_URL_NPM == "https://cli.test/"

    def test_invalid_value_ignored(self):
        apply_overrides(parse_args([]), {"request_timeout": "soon"})

        assert Constants.REQUEST_TIMEOUT == 30


class TestCollectAnswers:
    """Tests for collect_answers()."""

    def test_cli_beats_settings(self):
        args = parse_args(["--format", "JSON", "--env", "node"])
        cfg = {"answers": {"format": "YAML", "purpose": "syntax-only"}}

        answers = collect_answers(args, cfg)

        assert answers == {"format": "JSON", "purpose": "syntax-only", "env": ["node"]}

    def test_only_given_answers_present(self):
        assert collect_answers(parse_args([]), {}) == {}

    def test_typescript_flag(self):
        assert collect_answers(parse_args(["--typescript"]), None) == {"typescript": True}


class TestMain:
    """Tests for the ec0lint_init.main() entry point."""

    ARGV = ["--purpose", "syntax-only", "--env", "node", "--format", "JSON", "--indent", "tab"]

    @pytest.fixture(autouse=True)
    def _isolate(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setattr(Constants, "REGISTRY_URL_NPM", Constants.REGISTRY_URL_NPM)
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "INFO")
        monkeypatch.delenv(Constants.ENV_REGISTRY_URL, raising=False)
        yield
        logging.getLogger().setLevel(logging.WARNING)

    def _run_main(self, argv, outcome):
        async def fake_run(args, answers):
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        with patch.object(ec0lint_init, "run_initializer", side_effect=fake_run) as run:
            with pytest.raises(SystemExit) as excinfo:
                ec0lint_init.main(argv)
        return excinfo.value.code, run

    def test_success(self):
        result = InitResult(config={}, path=Path(".ec0lintrc.json"))

        code, run = self._run_main(self.ARGV, result)

        assert code == ExitCodes.SUCCESS.value
        answers = run.call_args.args[1]
        assert answers == {"purpose": "syntax-only", "env": ["node"], "format": "JSON", "indent": "tab"}

    def test_installed_query_failure(self):
        code, _ = self._run_main(self.ARGV, InstalledQueryError("no package.json", packages=["ec0lint"]))
        assert code == ExitCodes.FILE_ERROR.value

    def test_install_failure(self):
        code, _ = self._run_main(self.ARGV, InstallError("npm failed", packages=["ec0lint@latest"]))
        assert code == ExitCodes.INSTALL_ERROR.value

    def test_write_failure(self):
        code, _ = self._run_main(self.ARGV, ConfigWriteError("denied", path="/x/.ec0lintrc.json"))
        assert code == ExitCodes.FILE_ERROR.value

    def test_does_not_prompt_without_terminal(self):
        result = InitResult(config={}, path=Path(".ec0lintrc.js"))

        with patch.object(ec0lint_init.sys, "stdin", Mock(isatty=Mock(return_value=False))):
            code, run = self._run_main(["--format", "JavaScript"], result)

        assert code == ExitCodes.SUCCESS.value
        assert run.call_args.args[1] == {"format": "JavaScript"}
