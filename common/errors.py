# common/errors.py
# -*- coding: utf-8 -*-
"""
Exception hierarchy for fatal installer conditions.

Every fatal condition carries the process exit code it maps to, so that the
orchestrator and the entry point never have to guess.
"""

from typing import List, Optional, Union

from installer.config import EXIT_INTEGRITY_FAILURE, EXIT_STEP_FAILURE


class BootstrapError(Exception):
    """Base exception for all fatal installer errors."""

    exit_code: int = EXIT_STEP_FAILURE

    def __init__(
        self,
        message: str,
        step_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.step_name = step_name
        self.original_error = original_error
        super().__init__(message)


class MissingPrerequisiteError(BootstrapError):
    """A required base runtime is not installed."""


class VersionTooLowError(BootstrapError):
    """A base runtime is installed but older than the required minimum."""

    def __init__(
        self,
        message: str,
        required: str,
        detected: Optional[str],
        step_name: Optional[str] = None,
    ):
        self.required = required
        self.detected = detected
        super().__init__(message, step_name=step_name)


class IntegrityMismatchError(BootstrapError):
    """A downloaded payload does not match its trusted checksum."""

    exit_code = EXIT_INTEGRITY_FAILURE

    def __init__(
        self,
        message: str,
        expected: str,
        actual: str,
        step_name: Optional[str] = None,
    ):
        self.expected = expected
        self.actual = actual
        super().__init__(message, step_name=step_name)


class SubprocessFailureError(BootstrapError):
    """An external tool exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        command: Union[List[str], str],
        returncode: Optional[int],
        step_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.command = command
        self.returncode = returncode
        super().__init__(
            message, step_name=step_name, original_error=original_error
        )


class DownloadError(BootstrapError):
    """A remote resource could not be fetched."""

    def __init__(
        self,
        message: str,
        url: str,
        original_error: Optional[Exception] = None,
    ):
        self.url = url
        super().__init__(message, original_error=original_error)
