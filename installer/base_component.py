"""
Base component class for all installation steps.

This module provides the base class that all install steps inherit from.
A step checks whether its work is already done before acting, so running the
whole sequence twice is safe.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set

from common.command_utils import get_symbols, log_bootstrap
from common.errors import BootstrapError
from common.orchestrator import StepResult
from installer.config_models import AppSettings


class BaseComponent(ABC):
    """
    Base class for all install steps.

    Subclasses implement `is_installed` and `install`; `run` ties them
    together and turns fatal errors into a failed StepResult.
    """

    name: str = ""
    title: str = ""
    skip_message: str = "Already installed; skipping."

    # Class-level metadata that can be overridden by subclasses
    metadata: Dict[str, Any] = {
        "dependencies": [],  # Names of steps that must complete first
        "description": "",
    }

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the component.

        Args:
            app_settings: The application settings.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.symbols = get_symbols(app_settings)

    @abstractmethod
    def is_installed(self) -> bool:
        """
        Check if the component is already in place.

        Returns:
            True if there is nothing to do, False otherwise.
        """

    @abstractmethod
    def install(self) -> Optional[str]:
        """
        Install the component.

        Returns:
            An optional success message.

        Raises:
            BootstrapError: On any fatal condition.
        """

    def get_dependencies(self) -> Set[str]:
        """
        Get the names of the steps this step depends on.
        """
        return set(self.metadata.get("dependencies", []))

    def run(self) -> StepResult:
        """
        Skip if already installed, otherwise install.

        Returns:
            StepResult with status "skipped", "installed" or "failed".
        """
        try:
            if self.is_installed():
                log_bootstrap(self.skip_message, "info", self.logger, self.app_settings)
                return StepResult(
                    step=self.name, status="skipped", message=self.skip_message
                )

            message = self.install() or f"{self.name} installed!"
            log_bootstrap(
                f"{self.symbols.get('success', '✅')} {message}",
                "info",
                self.logger,
                self.app_settings,
            )
            return StepResult(step=self.name, status="installed", message=message)
        except BootstrapError as e:
            if e.step_name is None:
                e.step_name = self.name
            log_bootstrap(
                f"{self.symbols.get('error', '❌')} {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            return StepResult(
                step=self.name,
                status="failed",
                message=str(e),
                exit_code=e.exit_code,
            )
