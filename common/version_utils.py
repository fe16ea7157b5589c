# common/version_utils.py
# -*- coding: utf-8 -*-
"""
Version detection and minimum-version checks for installed tools.
"""

import logging
import re
import subprocess
from typing import Optional, Sequence

from packaging.version import InvalidVersion, Version

from installer.config_models import AppSettings

from .command_utils import log_bootstrap, run_command

module_logger = logging.getLogger(__name__)

# major.minor with an optional patch component; anything after it is ignored
VERSION_TOKEN_PATTERN = re.compile(r"(?<![\d.])(\d+)\.(\d+)(?:\.(\d+))?")


def extract_version(text: Optional[str]) -> Optional[str]:
    """
    Return the first version-shaped token in `text`.

    `PHP 8.2.7 (cli) (built: Jun  8 2023)` yields "8.2.7" and
    `8.1.2-1ubuntu2.14` yields "8.1.2". A missing patch component is kept
    missing ("7.4").
    """
    if not text:
        return None
    match = VERSION_TOKEN_PATTERN.search(text)
    if not match:
        return None
    major, minor, patch = match.groups()
    if patch is None:
        return f"{major}.{minor}"
    return f"{major}.{minor}.{patch}"


def get_tool_version(
    tool: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
    version_args: Sequence[str] = ("-v",),
) -> Optional[str]:
    """
    Run a tool's self-report and extract its version.

    Args:
        tool: Executable name or path.
        app_settings: Optional application settings.
        current_logger: Optional logger instance.
        version_args: Arguments that make the tool print its version.

    Returns:
        The version string, or None if the tool could not be run or printed
        nothing version-shaped.
    """
    logger_to_use = current_logger if current_logger else module_logger
    try:
        result = run_command(
            [tool, *version_args],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=logger_to_use,
        )
    except (FileNotFoundError, PermissionError, subprocess.SubprocessError) as e:
        log_bootstrap(
            f"Could not run '{tool}' to read its version: {e}",
            "debug",
            logger_to_use,
            app_settings,
        )
        return None

    # Only the first line carries the version for php; fall back to the whole output
    output = result.stdout or ""
    first_line = output.strip().splitlines()[0] if output.strip() else ""
    return extract_version(first_line) or extract_version(output)


def is_version_acceptable(version: str, minimum: str) -> bool:
    """
    Compare two dotted versions numerically.

    "7.10.0" is greater than "7.9.0"; equal versions are acceptable.

    Raises:
        ValueError: If either argument is not a version.
    """
    try:
        return Version(version) >= Version(minimum)
    except InvalidVersion as e:
        raise ValueError(str(e)) from e
