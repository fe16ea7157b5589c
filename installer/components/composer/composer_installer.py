"""
Composer installer step.

Downloads the official Composer installer, verifies it against the published
signature, runs it and moves the resulting composer.phar into the binary
directory.

See https://getcomposer.org/doc/faqs/how-to-install-composer-programmatically.md
"""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from common.command_utils import command_exists, log_bootstrap
from common.errors import SubprocessFailureError
from common.file_utils import install_executable, temporary_payload
from common.integrity_utils import fetch_and_verify, run_payload
from installer.base_component import BaseComponent
from installer.config_models import AppSettings


class ComposerComponent(BaseComponent):
    """
    Installer for the Composer dependency manager.

    Skipped when a `composer` executable already resolves on PATH.
    """

    name = "composer"
    title = "Install Composer"
    skip_message = "Composer already installed; skipping."
    metadata = {
        "dependencies": ["php"],
        "description": "Composer dependency manager",
    }

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app_settings, logger)
        self.composer_settings = app_settings.composer
        self.php_command = app_settings.php.command
        self.bin_dir = Path(app_settings.bin_dir)

    def is_installed(self) -> bool:
        return command_exists(self.composer_settings.command)

    def install(self) -> Optional[str]:
        settings = self.composer_settings

        # The work dir holds the payload and composer.phar; it is removed on every path
        with tempfile.TemporaryDirectory(prefix="laravel-init-") as work_dir:
            log_bootstrap("Downloading Composer...", "info", self.logger, self.app_settings)
            payload_path = fetch_and_verify(
                str(settings.installer_url),
                str(settings.signature_url),
                settings.hash_algorithm,
                work_dir,
                app_settings=self.app_settings,
                current_logger=self.logger,
                payload_filename=settings.setup_filename,
                timeout=settings.download_timeout,
            )

            log_bootstrap(
                "Running Composer setup script...", "info", self.logger, self.app_settings
            )
            with temporary_payload(payload_path, self.logger):
                returncode = run_payload(
                    payload_path,
                    self.php_command,
                    ("--quiet",),
                    cwd=work_dir,
                    app_settings=self.app_settings,
                    current_logger=self.logger,
                )

            if returncode != 0:
                raise SubprocessFailureError(
                    f"Error installing Composer (setup script exited with {returncode}).",
                    command=[self.php_command, settings.setup_filename, "--quiet"],
                    returncode=returncode,
                    step_name=self.name,
                )

            try:
                target = install_executable(
                    Path(work_dir) / settings.artifact_filename,
                    self.bin_dir,
                    settings.command,
                    app_settings=self.app_settings,
                    current_logger=self.logger,
                )
            except FileNotFoundError as e:
                raise SubprocessFailureError(
                    f"Error installing Composer: {e}",
                    command=[self.php_command, settings.setup_filename, "--quiet"],
                    returncode=returncode,
                    step_name=self.name,
                    original_error=e,
                ) from e
            except (OSError, subprocess.CalledProcessError) as e:
                raise SubprocessFailureError(
                    f"Error installing Composer into {self.bin_dir}: {e}",
                    command=["install", str(self.bin_dir / settings.command)],
                    returncode=getattr(e, "returncode", None),
                    step_name=self.name,
                    original_error=e,
                ) from e

        self.logger.debug(f"Composer installed at {target}")
        return "Composer installed!"
