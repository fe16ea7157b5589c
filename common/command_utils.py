# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing external commands and logging their output.
"""

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional, Union

from installer.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)


def log_bootstrap(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Log a message at the named level.

    Args:
        message (str): The log message to be recorded.
        level (str): "debug", "info", "success", "warning", "error" or
            "critical". "success" is logged at INFO. Defaults to "info".
        current_logger (Optional[logging.Logger]): Logger to use. Falls back
            to the module logger.
        app_settings (Optional[AppSettings]): Accepted for call-site symmetry
            with the other helpers of this module.
        exc_info (bool): Include exception information. Defaults to False.
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    else:
        effective_logger.info(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Return the configured log symbols, or the defaults."""
    if app_settings and app_settings.symbols:
        return app_settings.symbols
    return SYMBOLS_DEFAULT


def _get_elevated_command_prefix() -> List[str]:
    """Return ["sudo"] unless the process already runs as root."""
    return [] if os.geteuid() == 0 else ["sudo"]


def run_command(
    command: Union[List[str], str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    text: bool = True,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    log_output: bool = True,
) -> subprocess.CompletedProcess:
    """
    Executes a system command and logs the process details and results.

    Args:
        command (Union[List[str], str]): The command to execute. A string is
            split on whitespace; prefer the list form.
        app_settings (Optional[AppSettings]): Settings providing the log symbols.
        check (bool): Raise CalledProcessError on a non-zero exit code.
            Defaults to True.
        capture_output (bool): Capture stdout and stderr. Defaults to False.
        text (bool): Decode output streams as text. Defaults to True.
        current_logger (Optional[logging.Logger]): Logger for command details.
        cwd (Optional[str]): Working directory for the command.
        env (Optional[Dict[str, str]]): Environment for the command.
        log_output (bool): Log captured stdout/stderr at DEBUG level. Disable
            for commands whose output is large and parsed by the caller.

    Returns:
        subprocess.CompletedProcess: The completed process instance.

    Raises:
        subprocess.CalledProcessError: Non-zero exit code with check=True.
        FileNotFoundError: The executable is not found.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if isinstance(command, str):
        command_to_run = command.split()
        command_to_log_str = command
    else:
        command_to_run = list(command)
        command_to_log_str = subprocess.list2cmdline(command_to_run)

    log_bootstrap(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log_str} {f'(in {cwd})' if cwd else ''}",
        "debug",
        effective_logger,
        app_settings,
    )
    try:
        result = subprocess.run(
            command_to_run,
            check=check,
            capture_output=capture_output,
            text=text,
            cwd=cwd,
            env=env,
        )
        if capture_output and log_output:
            if result.stdout and result.stdout.strip():
                log_bootstrap(
                    f"   stdout: {result.stdout.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
            if result.stderr and result.stderr.strip():
                log_bootstrap(
                    f"   stderr: {result.stderr.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
        return result
    except subprocess.CalledProcessError as e:
        cmd_executed_str = (
            subprocess.list2cmdline(e.cmd)
            if isinstance(e.cmd, list)
            else str(e.cmd)
        )
        log_bootstrap(
            f"{symbols.get('error', '❌')} Command `{cmd_executed_str}` failed (rc {e.returncode}).",
            "error",
            effective_logger,
            app_settings,
        )
        if e.stderr and hasattr(e.stderr, "strip") and e.stderr.strip():
            log_bootstrap(
                f"   stderr: {e.stderr.strip()}",
                "error",
                effective_logger,
                app_settings,
            )
        raise
    except FileNotFoundError as e:
        log_bootstrap(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command with elevated permissions (sudo unless already root).

    Returns:
        subprocess.CompletedProcess: The result of the command execution.

    Raises:
        subprocess.CalledProcessError: check is True and the command fails.
    """
    elevated_command_list = _get_elevated_command_prefix() + list(command)
    return run_command(
        elevated_command_list,
        app_settings,
        check=check,
        capture_output=capture_output,
        current_logger=current_logger,
        cwd=cwd,
    )


def command_exists(command_name: str) -> bool:
    """
    Check if a command resolves on the current PATH.

    Never raises: any lookup failure is reported as False.
    """
    try:
        return shutil.which(command_name) is not None
    except (OSError, TypeError, ValueError):
        return False
