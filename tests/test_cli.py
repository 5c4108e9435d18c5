"""Tests for the tabjump CLI."""

from importlib.metadata import version
from pathlib import Path
from unittest.mock import MagicMock, patch

import click
import pytest
from click.testing import CliRunner

import tabjump
from tabjump.cli import main, parse_options, run_switcher
from tabjump.config import IGNORE_CASE_ENV, Config, load_config
from tabjump.host import HostCommandError, HostNotFoundError, NotInsideHostError


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch):
    """Point the config file at a temp dir and clear env overrides."""
    monkeypatch.setattr("tabjump.config.CONFIG_FILE", tmp_path / "config.toml")
    monkeypatch.delenv(IGNORE_CASE_ENV, raising=False)
    return tmp_path / "config.toml"


class TestParseOptions:
    def test_key_value_pairs(self):
        assert parse_options(("ignore_case=false",)) == {"ignore_case": "false"}

    def test_whitespace_around_key_and_value_is_stripped(self):
        assert parse_options(("x = y",)) == {"x": "y"}

    def test_value_may_contain_equals(self):
        assert parse_options(("a=b=c",)) == {"a": "b=c"}

    def test_missing_equals(self):
        with pytest.raises(click.BadParameter):
            parse_options(("ignore_case",))


class TestMain:
    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "tabjump v" in result.output

    def test_version_comes_from_package_metadata(self):
        assert tabjump.__version__ == version("tabjump")

    @patch("tabjump.cli.configure_logging")
    @patch("tabjump.cli.run_switcher")
    def test_runs_switcher_with_default_config(self, mock_run, mock_logging):
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 0
        mock_run.assert_called_once_with(Config(ignore_case=True))
        mock_logging.assert_called_once_with(False)

    @patch("tabjump.cli.configure_logging")
    @patch("tabjump.cli.run_switcher")
    def test_option_map_is_applied(self, mock_run, mock_logging):
        result = CliRunner().invoke(main, ["-o", "ignore_case=false"])
        assert result.exit_code == 0
        mock_run.assert_called_once_with(Config(ignore_case=False))

    @patch("tabjump.cli.configure_logging")
    @patch("tabjump.cli.run_switcher")
    def test_invalid_option_value_falls_back(self, mock_run, mock_logging):
        result = CliRunner().invoke(main, ["-o", "ignore_case=perhaps"])
        assert result.exit_code == 0
        mock_run.assert_called_once_with(Config(ignore_case=True))

    @patch("tabjump.cli.configure_logging")
    @patch("tabjump.cli.run_switcher")
    def test_flag_beats_option_map(self, mock_run, mock_logging):
        result = CliRunner().invoke(main, ["-o", "ignore_case=false", "--ignore-case"])
        assert result.exit_code == 0
        mock_run.assert_called_once_with(Config(ignore_case=True))

    @patch("tabjump.cli.run_switcher")
    def test_malformed_option_is_usage_error(self, mock_run):
        result = CliRunner().invoke(main, ["-o", "ignore_case"])
        assert result.exit_code == 2
        mock_run.assert_not_called()


class TestRunSwitcher:
    @pytest.mark.parametrize(
        "error", [NotInsideHostError("no"), HostNotFoundError("no"), HostCommandError("no")]
    )
    def test_host_errors_exit_1(self, error):
        host = MagicMock()
        host.check_available.side_effect = error

        with pytest.raises(SystemExit) as exc_info:
            run_switcher(Config(), host=host)
        assert exc_info.value.code == 1
        host.list_tabs.assert_not_called()

    @patch("tabjump.cli.TabJumpApp")
    def test_runs_app_with_config(self, mock_app_cls):
        host = MagicMock()
        mock_app_cls.return_value.error = None

        run_switcher(Config(ignore_case=False), host=host)

        mock_app_cls.assert_called_once_with(host, ignore_case=False)
        mock_app_cls.return_value.run.assert_called_once()

    @patch("tabjump.cli.TabJumpApp")
    def test_switch_error_exits_1(self, mock_app_cls):
        mock_app_cls.return_value.error = HostCommandError("can't find window")

        with pytest.raises(SystemExit) as exc_info:
            run_switcher(Config(), host=MagicMock())
        assert exc_info.value.code == 1


class TestPopup:
    @patch("tabjump.cli.TmuxHost")
    def test_opens_popup(self, mock_host_cls):
        result = CliRunner().invoke(main, ["popup", "--width", "60", "--no-ignore-case"])
        assert result.exit_code == 0
        mock_host_cls.return_value.open_popup.assert_called_once_with(
            "tabjump --no-ignore-case", width="60", height="50%"
        )

    @patch("tabjump.cli.TmuxHost")
    def test_forwards_options_and_debug_logging(self, mock_host_cls):
        result = CliRunner().invoke(
            main, ["popup", "-o", "ignore_case=false", "-o", "x=a b", "--debug-logging"]
        )
        assert result.exit_code == 0
        mock_host_cls.return_value.open_popup.assert_called_once_with(
            "tabjump -o ignore_case=false -o 'x=a b' --debug-logging", width="40%", height="50%"
        )

    @patch("tabjump.cli.TmuxHost")
    def test_malformed_option_is_usage_error(self, mock_host_cls):
        result = CliRunner().invoke(main, ["popup", "-o", "ignore_case"])
        assert result.exit_code == 2
        mock_host_cls.return_value.open_popup.assert_not_called()

    @patch("tabjump.cli.TmuxHost")
    def test_outside_tmux(self, mock_host_cls):
        mock_host_cls.return_value.check_available.side_effect = NotInsideHostError("no")
        result = CliRunner().invoke(main, ["popup"])
        assert result.exit_code == 1
        assert "inside a tmux session" in result.output
        mock_host_cls.return_value.open_popup.assert_not_called()


class TestConfigCommand:
    def test_show(self):
        result = CliRunner().invoke(main, ["config", "--show"])
        assert result.exit_code == 0
        assert "Ignore Case" in result.output
        assert "True" in result.output

    def test_save(self, _isolated_config: Path):
        result = CliRunner().invoke(main, ["config", "--no-ignore-case"])
        assert result.exit_code == 0
        assert "Configuration saved" in result.output
        assert _isolated_config.exists()
        assert load_config().ignore_case is False

    def test_no_flags_prints_help(self, _isolated_config: Path):
        result = CliRunner().invoke(main, ["config"])
        assert result.exit_code == 0
        assert "--show" in result.output
        assert not _isolated_config.exists()
