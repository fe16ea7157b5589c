# common/integrity_utils.py
# -*- coding: utf-8 -*-
"""
Checksum-verified download and execution of installer payloads.

A payload is only ever handed back to the caller after its digest matched the
one published at a trusted second URL. On a mismatch the payload is deleted
and IntegrityMismatchError is raised, so it can never be executed.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union
from urllib.parse import urlparse

from installer.config_models import AppSettings

from .command_utils import get_symbols, log_bootstrap, run_command
from .errors import IntegrityMismatchError, SubprocessFailureError
from .file_utils import compute_file_hash, hash_algorithm_available
from .network_utils import DEFAULT_TIMEOUT, download_file, fetch_text

module_logger = logging.getLogger(__name__)


def _payload_filename(payload_url: str) -> str:
    name = Path(urlparse(payload_url).path).name
    return name or "payload"


def fetch_and_verify(
    payload_url: str,
    signature_url: str,
    hash_algorithm: str,
    download_dir: Union[str, Path],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
    payload_filename: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Path:
    """
    Download a payload and verify it against its published checksum.

    Args:
        payload_url: URL of the installer payload.
        signature_url: URL serving the expected hex digest of the payload.
        hash_algorithm: hashlib algorithm name, e.g. "sha384".
        download_dir: Directory the payload is written to.
        app_settings: Optional application settings.
        current_logger: Optional logger instance.
        payload_filename: Local file name. Defaults to the URL's last path
            segment.
        timeout: Timeout in seconds for each request.

    Returns:
        Path of the verified payload. The caller owns it from here on.

    Raises:
        DownloadError: If the payload or the checksum cannot be fetched.
        IntegrityMismatchError: If the digests differ. The payload has been
            deleted by then.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    payload_path = Path(download_dir) / (
        payload_filename or _payload_filename(payload_url)
    )

    download_file(
        payload_url, payload_path, timeout=timeout, current_logger=logger_to_use
    )

    if not hash_algorithm_available(hash_algorithm):
        log_bootstrap(
            f"{symbols.get('warning', '⚠️')} Can't check the installer's signature because this machine can't compute '{hash_algorithm}' checksums. Proceeding without verification.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return payload_path

    log_bootstrap(
        "Checking validity of the downloaded file...",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        expected_checksum = fetch_text(
            signature_url, timeout=timeout, current_logger=logger_to_use
        )
        actual_checksum = compute_file_hash(payload_path, hash_algorithm)
    except Exception:
        payload_path.unlink(missing_ok=True)
        raise

    if expected_checksum != actual_checksum:
        payload_path.unlink(missing_ok=True)
        log_bootstrap(
            f"{symbols.get('error', '❌')} ERROR: Invalid installer checksum for {payload_url}",
            "error",
            logger_to_use,
            app_settings,
        )
        log_bootstrap(
            f"   expected {expected_checksum!r}, got {actual_checksum!r}",
            "debug",
            logger_to_use,
            app_settings,
        )
        raise IntegrityMismatchError(
            f"Invalid installer checksum for {payload_url}",
            expected=expected_checksum,
            actual=actual_checksum,
        )

    log_bootstrap(
        f"{symbols.get('lock', '🔒')} Installer checksum verified ({hash_algorithm}).",
        "debug",
        logger_to_use,
        app_settings,
    )
    return payload_path


def run_payload(
    payload_path: Union[str, Path],
    interpreter: str,
    payload_args: Sequence[str] = ("--quiet",),
    cwd: Optional[Union[str, Path]] = None,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> int:
    """
    Execute a verified payload with `interpreter` and return its exit status.

    Raises:
        SubprocessFailureError: If the interpreter cannot be started.
    """
    logger_to_use = current_logger if current_logger else module_logger
    command = [interpreter, str(payload_path), *payload_args]
    try:
        result = run_command(
            command,
            app_settings,
            check=False,
            current_logger=logger_to_use,
            cwd=str(cwd) if cwd else None,
        )
    except (FileNotFoundError, PermissionError, subprocess.SubprocessError) as e:
        raise SubprocessFailureError(
            f"Could not run {interpreter}: {e}",
            command=command,
            returncode=None,
            original_error=e,
        ) from e
    return result.returncode
