import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from common.command_utils import command_exists, log_installer, run_command
from installer.config_models import AppSettings


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def app_settings():
    """Fixture to provide a basic AppSettings object."""
    return AppSettings(symbols={"gear": "G", "error": "E"})


@pytest.mark.parametrize(
    "level, method",
    [
        ("debug", "debug"),
        ("info", "info"),
        ("success", "info"),
        ("warning", "warning"),
        ("error", "error"),
        ("critical", "critical"),
    ],
)
def test_log_installer_levels(mock_logger, level, method):
    log_installer("hello", level, mock_logger)

    getattr(mock_logger, method).assert_called_once_with("hello", exc_info=False)


def test_run_command_success(mocker, mock_logger, app_settings):
    mock_run = mocker.patch(
        "common.command_utils.subprocess.run",
        return_value=subprocess.CompletedProcess(["echo", "hi"], 0, "hi\n", ""),
    )

    result = run_command(
        ["echo", "hi"],
        app_settings,
        capture_output=True,
        current_logger=mock_logger,
        cwd="/tmp",
    )

    assert result.returncode == 0
    mock_run.assert_called_once_with(
        ["echo", "hi"],
        check=True,
        capture_output=True,
        text=True,
        cwd="/tmp",
        env=None,
    )
    mock_logger.info.assert_any_call("G Executing: echo hi (in /tmp)", exc_info=False)
    mock_logger.debug.assert_any_call("   stdout: hi", exc_info=False)


def test_run_command_failure_logs_and_raises(mocker, mock_logger, app_settings):
    mocker.patch(
        "common.command_utils.subprocess.run",
        side_effect=subprocess.CalledProcessError(2, ["false"], output="", stderr="nope\n"),
    )

    with pytest.raises(subprocess.CalledProcessError):
        run_command(["false"], app_settings, current_logger=mock_logger)

    mock_logger.error.assert_any_call("E Command `false` failed (rc 2).", exc_info=False)
    mock_logger.error.assert_any_call("   stderr: nope", exc_info=False)


def test_run_command_missing_executable(mocker, mock_logger):
    mocker.patch(
        "common.command_utils.subprocess.run",
        side_effect=FileNotFoundError(2, "No such file", "nonexistent"),
    )

    with pytest.raises(FileNotFoundError):
        run_command(["nonexistent"], None, current_logger=mock_logger)

    mock_logger.error.assert_called_once()
    assert "nonexistent" in mock_logger.error.call_args.args[0]


def test_command_exists(mocker):
    mocker.patch("common.command_utils.shutil.which", return_value="/usr/bin/go")
    assert command_exists("go") is True

    mocker.patch("common.command_utils.shutil.which", return_value=None)
    assert command_exists("go") is False
