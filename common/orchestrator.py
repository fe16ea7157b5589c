# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Centralized orchestrator for running the ordered installation steps.

Steps run strictly in sequence on the calling thread. The first failed step
halts the run; nothing after it is attempted and there are no retries.
"""

import logging
from typing import Any, Callable, Dict, List, Literal, Optional, Protocol, Sequence, Set

from pydantic import BaseModel, ConfigDict

from installer.config import EXIT_STEP_FAILURE, EXIT_SUCCESS

StepStatus = Literal["installed", "skipped", "failed"]


class StepResult(BaseModel):
    """Outcome of a single installation step."""

    model_config = ConfigDict(frozen=True)

    step: str
    status: StepStatus
    message: str = ""
    exit_code: int = EXIT_SUCCESS

    @property
    def ok(self) -> bool:
        return self.status != "failed"


class RunResult(BaseModel):
    """Outcome of a whole orchestration."""

    model_config = ConfigDict(frozen=True)

    results: List[StepResult]
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == EXIT_SUCCESS

    @property
    def failed_step(self) -> Optional[StepResult]:
        for result in self.results:
            if not result.ok:
                return result
        return None


class InstallStep(Protocol):
    """What the orchestrator needs from a step."""

    name: str
    title: str

    def get_dependencies(self) -> Set[str]: ...

    def run(self) -> StepResult: ...


class Orchestrator:
    """Runs a sequence of install steps, halting on the first failure."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
        on_step_start: Optional[Callable[[str], None]] = None,
    ):
        """
        Initializes the Orchestrator.

        Args:
            app_settings: The application settings object.
            orchestrator_logger: An optional logger instance.
            on_step_start: Called with each step's title before it runs.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.on_step_start = on_step_start
        self.completed: Dict[str, StepResult] = {}

    def _missing_dependencies(self, step: InstallStep) -> Set[str]:
        return {
            dependency
            for dependency in step.get_dependencies()
            if dependency not in self.completed
        }

    def run(self, steps: Sequence[InstallStep]) -> RunResult:
        """
        Executes the steps in order.

        Returns:
            RunResult with one StepResult per attempted step. Its exit_code is
            0 when every step succeeded, otherwise the failing step's code.
        """
        results: List[StepResult] = []
        self.logger.debug("Orchestration started.")

        for i, step in enumerate(steps):
            missing = self._missing_dependencies(step)
            if missing:
                message = f"Step '{step.name}' requires {', '.join(sorted(missing))} to complete first."
                self.logger.critical(f"🔥 {message}")
                results.append(
                    StepResult(
                        step=step.name,
                        status="failed",
                        message=message,
                        exit_code=EXIT_STEP_FAILURE,
                    )
                )
                return RunResult(results=results, exit_code=EXIT_STEP_FAILURE)

            if self.on_step_start:
                self.on_step_start(step.title)
            self.logger.debug(f"--- Stage {i + 1}: Running step '{step.name}' ---")

            try:
                result = step.run()
            except Exception as e:
                self.logger.critical(
                    f"🔥 Step '{step.name}' failed unexpectedly: {e}",
                    exc_info=True,
                )
                result = StepResult(
                    step=step.name,
                    status="failed",
                    message=str(e),
                    exit_code=EXIT_STEP_FAILURE,
                )

            results.append(result)
            if not result.ok:
                self.logger.error(
                    "A fatal error occurred. Halting the installation."
                )
                return RunResult(
                    results=results,
                    exit_code=result.exit_code or EXIT_STEP_FAILURE,
                )

            self.completed[step.name] = result

        self.logger.debug("✨ Orchestration finished successfully.")
        return RunResult(results=results, exit_code=EXIT_SUCCESS)
