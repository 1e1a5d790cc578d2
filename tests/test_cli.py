"""Tests for the lighttimer CLI layer.

The window is mocked out; ``countdown`` runs against a patched clock so no
test sleeps.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import click.testing
import pytest

import lighttimer
from lighttimer.cli.main import cli


@pytest.fixture()
def runner() -> click.testing.CliRunner:
    """Return a Click CliRunner for invoking CLI commands."""
    return click.testing.CliRunner()


# ---------------------------------------------------------------------------
# lighttimer run
# ---------------------------------------------------------------------------


class TestRunCommand:
    """Tests for ``lighttimer run``."""

    @patch("lighttimer.cli.main.TimerApp")
    def test_run_defaults(self, mock_app_cls: MagicMock, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run"])
        assert result.exit_code == 0
        controller = mock_app_cls.call_args.kwargs["controller"]
        assert controller.timer.configured_duration == 300
        mock_app_cls.return_value.run.assert_called_once_with()

    @patch("lighttimer.cli.main.TimerApp")
    def test_run_with_duration(self, mock_app_cls: MagicMock, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--minutes", "25", "--seconds", "30"])
        assert result.exit_code == 0
        controller = mock_app_cls.call_args.kwargs["controller"]
        assert controller.timer.configured_duration == 25 * 60 + 30
        assert (controller.set_minutes, controller.set_seconds) == (25, 30)

    @patch("lighttimer.cli.main.TimerApp")
    def test_run_zero_duration_is_clamped(
        self, mock_app_cls: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        result = runner.invoke(cli, ["run", "-m", "0", "-s", "0"])
        assert result.exit_code == 0
        controller = mock_app_cls.call_args.kwargs["controller"]
        assert controller.timer.configured_duration == 1

    @pytest.mark.parametrize("args", [["--minutes", "1000"], ["--seconds", "60"], ["--minutes", "-1"]])
    def test_run_out_of_range(self, runner: click.testing.CliRunner, args: list[str]) -> None:
        result = runner.invoke(cli, ["run", *args])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# lighttimer countdown
# ---------------------------------------------------------------------------


class TestCountdownCommand:
    """Tests for ``lighttimer countdown MINUTES [SECONDS]``."""

    @patch("lighttimer.cli.main.time")
    def test_countdown_to_completion(
        self, mock_time: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        mock_time.monotonic.side_effect = [0.0, 1.0, 2.0, 3.0]
        result = runner.invoke(cli, ["countdown", "0", "3"])
        assert result.exit_code == 0
        assert "00:03" in result.output
        assert "00:02" in result.output
        assert "00:01" in result.output
        assert result.output.rstrip().endswith("Time's up")

    @patch("lighttimer.cli.main.time")
    def test_countdown_sleeps_one_frame(
        self, mock_time: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        mock_time.monotonic.side_effect = [0.0, 5.0]
        result = runner.invoke(cli, ["countdown", "0", "1"])
        assert result.exit_code == 0
        mock_time.sleep.assert_called_once_with(0.016)

    @patch("lighttimer.cli.main.time")
    def test_countdown_interrupted(
        self, mock_time: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        mock_time.monotonic.side_effect = [0.0]
        mock_time.sleep.side_effect = KeyboardInterrupt
        result = runner.invoke(cli, ["countdown", "2"])
        assert result.exit_code == 1
        assert "Stopped with 02:00 remaining" in result.output

    @patch("lighttimer.cli.main.time")
    def test_countdown_interrupted_before_first_frame(
        self, mock_time: MagicMock, runner: click.testing.CliRunner
    ) -> None:
        mock_time.monotonic.side_effect = KeyboardInterrupt
        result = runner.invoke(cli, ["countdown", "2"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, UnboundLocalError)
        assert "Aborted!" in result.output

    def test_countdown_missing_argument(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["countdown"])
        assert result.exit_code != 0

    def test_countdown_invalid_argument(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["countdown", "abc"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------


class TestGlobalOptions:
    """Tests for ``--version``, ``--help`` and logging options."""

    def test_version(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert lighttimer.__version__ in result.output

    def test_help_lists_commands(self, runner: click.testing.CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "run" in result.output
        assert "countdown" in result.output

    @patch("lighttimer.cli.main.TimerApp")
    @patch("lighttimer.cli.main.logging.basicConfig")
    def test_log_file_logs_info(
        self,
        mock_basic_config: MagicMock,
        _mock_app_cls: MagicMock,
        runner: click.testing.CliRunner,
    ) -> None:
        result = runner.invoke(cli, ["--log-file", "timer.log", "run"])
        assert result.exit_code == 0
        kwargs = mock_basic_config.call_args.kwargs
        assert kwargs["filename"] == "timer.log"
        assert kwargs["level"] == 20

    @patch("lighttimer.cli.main.TimerApp")
    @patch("lighttimer.cli.main.logging.basicConfig")
    def test_verbose_logs_debug(
        self,
        mock_basic_config: MagicMock,
        _mock_app_cls: MagicMock,
        runner: click.testing.CliRunner,
    ) -> None:
        result = runner.invoke(cli, ["-v", "run"])
        assert result.exit_code == 0
        assert mock_basic_config.call_args.kwargs["level"] == 10
