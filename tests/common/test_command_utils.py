import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from common.command_utils import (
    command_exists,
    get_symbols,
    log_bootstrap,
    run_command,
    run_elevated_command,
)
from installer.config_models import SYMBOLS_DEFAULT, AppSettings


def test_log_bootstrap_levels(mock_logger):
    log_bootstrap("hello", "warning", mock_logger)
    log_bootstrap("boom", "error", mock_logger, exc_info=True)
    log_bootstrap("done", "success", mock_logger)
    log_bootstrap("details", "debug", mock_logger)

    mock_logger.warning.assert_called_once_with("hello", exc_info=False)
    mock_logger.error.assert_called_once_with("boom", exc_info=True)
    mock_logger.info.assert_called_once_with("done", exc_info=False)
    mock_logger.debug.assert_called_once_with("details", exc_info=False)


def test_get_symbols_falls_back_to_defaults():
    assert get_symbols(None) == SYMBOLS_DEFAULT
    settings = AppSettings(symbols={"error": "E"})
    assert get_symbols(settings) == {"error": "E"}


def test_run_command_success_with_capture(mocker, app_settings, mock_logger):
    run_mock = mocker.patch(
        "common.command_utils.subprocess.run",
        return_value=MagicMock(returncode=0, stdout="PHP 8.2.7\n", stderr=""),
    )

    result = run_command(
        ["php", "-v"],
        app_settings,
        capture_output=True,
        current_logger=mock_logger,
    )

    assert result.stdout == "PHP 8.2.7\n"
    run_mock.assert_called_once_with(
        ["php", "-v"],
        check=True,
        capture_output=True,
        text=True,
        cwd=None,
        env=None,
    )
    mock_logger.debug.assert_any_call("   stdout: PHP 8.2.7", exc_info=False)


def test_run_command_string_is_split(mocker, app_settings):
    run_mock = mocker.patch(
        "common.command_utils.subprocess.run",
        return_value=MagicMock(returncode=0, stdout="", stderr=""),
    )

    run_command("composer global show", app_settings, check=False)

    assert run_mock.call_args[0][0] == ["composer", "global", "show"]


def test_run_command_called_process_error_is_logged_and_raised(
    mocker, app_settings, mock_logger
):
    error = subprocess.CalledProcessError(
        2, ["composer", "global", "require", "x/y"], stderr="nope"
    )
    mocker.patch("common.command_utils.subprocess.run", side_effect=error)

    with pytest.raises(subprocess.CalledProcessError):
        run_command(
            ["composer", "global", "require", "x/y"],
            app_settings,
            current_logger=mock_logger,
        )

    mock_logger.error.assert_any_call(
        "❌ Command `composer global require x/y` failed (rc 2).", exc_info=False
    )
    mock_logger.error.assert_any_call("   stderr: nope", exc_info=False)


def test_run_command_missing_executable(mocker, app_settings, mock_logger):
    error = FileNotFoundError(2, "No such file", "php")
    mocker.patch("common.command_utils.subprocess.run", side_effect=error)

    with pytest.raises(FileNotFoundError):
        run_command(["php", "-v"], app_settings, current_logger=mock_logger)

    mock_logger.error.assert_called_once_with(
        "❌ Command not found: php. Ensure it's installed and in PATH.",
        exc_info=False,
    )


@pytest.mark.parametrize("euid, expected_prefix", [(0, []), (1000, ["sudo"])])
def test_run_elevated_command_prefix(mocker, app_settings, euid, expected_prefix):
    mocker.patch("common.command_utils.os.geteuid", return_value=euid)
    run_mock = mocker.patch("common.command_utils.run_command")

    run_elevated_command(["install", "a", "b"], app_settings)

    assert run_mock.call_args[0][0] == expected_prefix + ["install", "a", "b"]


def test_command_exists(mocker):
    which = mocker.patch("common.command_utils.shutil.which")
    which.return_value = "/usr/bin/php"
    assert command_exists("php") is True

    which.return_value = None
    assert command_exists("php") is False


def test_command_exists_never_raises(mocker):
    mocker.patch(
        "common.command_utils.shutil.which", side_effect=OSError("broken PATH")
    )
    assert command_exists("php") is False
