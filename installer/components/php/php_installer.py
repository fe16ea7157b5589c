"""
PHP runtime step.

PHP is never installed by the bootstrap. This step only verifies that a
built-in PHP is present and recent enough, and stops the run with an
instructive message otherwise.
"""

import logging
from typing import Optional

from common.command_utils import command_exists
from common.errors import MissingPrerequisiteError, VersionTooLowError
from common.version_utils import get_tool_version, is_version_acceptable
from installer.base_component import BaseComponent
from installer.config_models import AppSettings


class PhpRuntimeComponent(BaseComponent):
    """
    Version gate for the PHP runtime.

    `is_installed` is True only for a PHP at or above the configured minimum.
    `install` reports why the runtime is unusable; it never installs anything.
    """

    name = "php"
    title = "Install PHP"
    skip_message = "We'll rely on your built-in PHP for now."
    metadata = {
        "dependencies": [],
        "description": "Built-in PHP runtime (verified, not installed)",
    }

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app_settings, logger)
        self.php_command = app_settings.php.command
        self.minimum_version = app_settings.php.minimum_version
        self.detected_version: Optional[str] = None

    def is_installed(self) -> bool:
        if not command_exists(self.php_command):
            return False

        self.detected_version = get_tool_version(
            self.php_command, self.app_settings, self.logger
        )
        if self.detected_version is None:
            self.logger.warning(
                f"{self.symbols.get('warning', '⚠️')} Could not read the version reported by '{self.php_command} -v'."
            )
            return False

        self.logger.debug(f"Detected PHP {self.detected_version}")
        return is_version_acceptable(self.detected_version, self.minimum_version)

    def install(self) -> Optional[str]:
        if not command_exists(self.php_command):
            raise MissingPrerequisiteError(
                "Sorry, only programmed for built-in PHP so far. "
                f"Please install PHP {self.minimum_version} or newer and run this installer again.",
                step_name=self.name,
            )

        raise VersionTooLowError(
            f"Sorry, your built-in PHP is too old. We require {self.minimum_version} "
            f"and yours is {self.detected_version or 'unknown'}",
            required=self.minimum_version,
            detected=self.detected_version,
            step_name=self.name,
        )
