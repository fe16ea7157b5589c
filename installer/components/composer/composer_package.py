"""
Global Composer package step.

Ensures a package is registered in Composer's global (machine-wide) project.
Presence is decided by a substring test over `composer global show`, so a
listing containing "tightenco/takeout-extra" also satisfies
"tightenco/takeout". The loose match is kept on purpose; it mirrors how the
bootstrap has always behaved.
"""

import logging
import subprocess
from typing import Optional

from common.command_utils import log_bootstrap, run_command
from common.errors import SubprocessFailureError
from installer.base_component import BaseComponent
from installer.config_models import AppSettings


def composer_global_listing(
    composer_command: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Return the output of `composer global show`.

    An empty string is returned when the listing cannot be produced (no
    global project yet, composer missing); callers treat that as "nothing
    installed".
    """
    try:
        result = run_command(
            [composer_command, "global", "show"],
            app_settings,
            check=False,
            capture_output=True,
            current_logger=current_logger,
            log_output=False,
        )
    except (FileNotFoundError, PermissionError):
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout or ""


def composer_has_package(
    package_id: str,
    composer_command: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """True if `package_id` appears anywhere in the global listing."""
    return package_id in composer_global_listing(
        composer_command, app_settings, current_logger
    )


class ComposerPackageComponent(BaseComponent):
    """
    Ensures one global Composer package is present.
    """

    metadata = {
        "dependencies": ["composer"],
        "description": "Global Composer package",
    }

    def __init__(
        self,
        package_id: str,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        title: Optional[str] = None,
    ):
        super().__init__(app_settings, logger)
        self.package_id = package_id
        self.composer_command = app_settings.composer.command
        self.name = name or package_id
        self.title = title or f"Install {package_id}"
        self.skip_message = f"{package_id} already installed; skipping."

    def is_installed(self) -> bool:
        return composer_has_package(
            self.package_id, self.composer_command, self.app_settings, self.logger
        )

    def install(self) -> Optional[str]:
        log_bootstrap(
            f"{self.symbols.get('package', '📦')} Installing {self.package_id}...",
            "info",
            self.logger,
            self.app_settings,
        )
        command = [
            self.composer_command,
            "global",
            "require",
            self.package_id,
            "--quiet",
        ]
        try:
            run_command(
                command,
                self.app_settings,
                check=True,
                current_logger=self.logger,
            )
        except subprocess.CalledProcessError as e:
            raise SubprocessFailureError(
                f"Error installing {self.package_id} (composer exited with {e.returncode}).",
                command=command,
                returncode=e.returncode,
                step_name=self.name,
                original_error=e,
            ) from e
        except (FileNotFoundError, PermissionError) as e:
            raise SubprocessFailureError(
                f"Error installing {self.package_id}: could not run {self.composer_command}.",
                command=command,
                returncode=None,
                step_name=self.name,
                original_error=e,
            ) from e
        return f"{self.package_id} installed!"
