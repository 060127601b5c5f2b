# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from rj_lib.core.config import CFG
from rj_lib.core.error import RJDuplicateJobsError, RJNotReadyError
from rj_lib.properties.connection import ConnectionInfo
from rj_lib.submit import submit


def _submitter_mock(run_return=None, run_side_effect=None) -> MagicMock:
    submitter_mock = MagicMock()
    submitter_mock.run.return_value = run_return
    submitter_mock.run.side_effect = run_side_effect
    return submitter_mock


def test_submit_prints_connection_info(monkeypatch):
    monkeypatch.setenv("RJ_BATCH_SYSTEM", "VBS")
    info = ConnectionInfo("1000", 7777, "node1", "http://node1:7777/lab")
    submitter_mock = _submitter_mock(run_return=info)

    runner = CliRunner()
    with (
        patch(
            "rj_lib.submit.cli.Submitter", return_value=submitter_mock
        ) as mock_class,
        patch("rj_lib.submit.cli.logger"),
    ):
        result = runner.invoke(submit, ["-l", "h_rt=1:0:0", "-cwd", "-now", "y"])

    assert result.exit_code == 0
    assert "JOB_ID=1000\nPORT=7777\nNODE=node1\nURL=http://node1:7777/lab" in result.output

    batch_system, parsed = mock_class.call_args.args
    assert str(batch_system) == "VBS"
    assert parsed.options.get("-l") == "h_rt=1:0:0"
    assert parsed.options.has("-cwd")
    assert parsed.options.get("-now") == "y"
    submitter_mock.run.assert_called_once()


def test_submit_not_ready_exit_code(monkeypatch):
    monkeypatch.setenv("RJ_BATCH_SYSTEM", "VBS")
    submitter_mock = _submitter_mock(
        run_side_effect=RJNotReadyError("Gave up waiting.")
    )

    runner = CliRunner()
    with (
        patch("rj_lib.submit.cli.Submitter", return_value=submitter_mock),
        patch("rj_lib.submit.cli.logger") as mock_logger,
    ):
        result = runner.invoke(submit, [])

    assert result.exit_code == CFG.exit_codes.not_ready
    assert "JOB_ID=" not in result.output
    error_messages = [str(call.args[0]) for call in mock_logger.error.call_args_list]
    assert any("Gave up waiting" in msg for msg in error_messages)


def test_submit_duplicate_jobs_exit_code(monkeypatch):
    monkeypatch.setenv("RJ_BATCH_SYSTEM", "VBS")
    submitter_mock = _submitter_mock(
        run_side_effect=RJDuplicateJobsError("Found 2 jobs named 'jupyter.9h'.")
    )

    runner = CliRunner()
    with (
        patch("rj_lib.submit.cli.Submitter", return_value=submitter_mock),
        patch("rj_lib.submit.cli.logger") as mock_logger,
    ):
        result = runner.invoke(submit, [])

    assert result.exit_code == CFG.exit_codes.default
    mock_logger.error.assert_called_once()


def test_submit_unexpected_error(monkeypatch):
    monkeypatch.setenv("RJ_BATCH_SYSTEM", "VBS")
    submitter_mock = _submitter_mock(run_side_effect=RuntimeError("boom"))

    runner = CliRunner()
    with (
        patch("rj_lib.submit.cli.Submitter", return_value=submitter_mock),
        patch("rj_lib.submit.cli.logger") as mock_logger,
    ):
        result = runner.invoke(submit, [])

    assert result.exit_code == CFG.exit_codes.unexpected_error
    mock_logger.critical.assert_called_once()


def test_submit_unknown_option():
    runner = CliRunner()
    with (
        patch("rj_lib.submit.cli.Submitter") as mock_class,
        patch("rj_lib.submit.cli.logger") as mock_logger,
    ):
        result = runner.invoke(submit, ["-bogus"])

    assert result.exit_code == CFG.exit_codes.default
    mock_class.assert_not_called()
    error_messages = [str(call.args[0]) for call in mock_logger.error.call_args_list]
    assert any("Unrecognized option '-bogus'" in msg for msg in error_messages)


def test_submit_rejects_remote():
    runner = CliRunner()
    with (
        patch("rj_lib.submit.cli.Submitter") as mock_class,
        patch("rj_lib.submit.cli.logger"),
    ):
        result = runner.invoke(submit, ["-remote", "grid"])

    assert result.exit_code == CFG.exit_codes.default
    mock_class.assert_not_called()


def test_submit_help_flag():
    runner = CliRunner()
    with patch("rj_lib.submit.cli.Submitter") as mock_class:
        result = runner.invoke(submit, ["-help"])

    assert result.exit_code == 0
    mock_class.assert_not_called()
    assert "rj options" in result.output
    assert "qsub options" in result.output
    assert "-hold_jid" in result.output
    assert "-remote" not in result.output


def test_submit_long_help_option():
    runner = CliRunner()
    result = runner.invoke(submit, ["--help"])

    assert result.exit_code == 0
    assert "qsub options" in result.output
