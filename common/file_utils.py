# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions: hashing files, scoped temporary payloads and
installing executables into a binary directory.
"""

import hashlib
import logging
import os
import shutil
import stat
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from installer.config_models import AppSettings

from .command_utils import get_symbols, log_bootstrap, run_elevated_command

module_logger = logging.getLogger(__name__)

HASH_CHUNK_SIZE: int = 65536
EXECUTABLE_MODE: int = (
    stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
)


def hash_algorithm_available(algorithm: str) -> bool:
    """True if hashlib on this host can compute `algorithm`."""
    return algorithm.lower() in hashlib.algorithms_available


def compute_file_hash(file_path: Union[str, Path], algorithm: str) -> str:
    """
    Return the hex digest of a file.

    Raises:
        ValueError: If the algorithm is not supported by this host.
        OSError: If the file cannot be read.
    """
    hasher = hashlib.new(algorithm.lower())
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


@contextmanager
def temporary_payload(
    payload_path: Union[str, Path],
    current_logger: Optional[logging.Logger] = None,
) -> Iterator[Path]:
    """Yield `payload_path` and remove it on exit, whatever happens inside."""
    logger_to_use = current_logger if current_logger else module_logger
    path = Path(payload_path)
    try:
        yield path
    finally:
        if path.exists():
            path.unlink()
            logger_to_use.debug(f"Removed temporary payload {path}")


def install_executable(
    source: Union[str, Path],
    target_dir: Union[str, Path],
    target_name: str,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Move `source` into `target_dir` as an executable named `target_name`.

    When the target directory is not writable by the current user the move is
    done with `install -m 0755` through sudo.

    Returns:
        The installed path.

    Raises:
        FileNotFoundError: If `source` does not exist.
        subprocess.CalledProcessError: If the elevated install fails.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    source_path = Path(source)
    target_path = Path(target_dir) / target_name

    if not source_path.is_file():
        raise FileNotFoundError(f"Nothing to install: {source_path} does not exist")

    if Path(target_dir).is_dir() and os.access(target_dir, os.W_OK):
        shutil.move(str(source_path), str(target_path))
        target_path.chmod(EXECUTABLE_MODE)
    else:
        log_bootstrap(
            f"{symbols.get('lock', '🔒')} {target_dir} is not writable; installing with elevated privileges.",
            "info",
            logger_to_use,
            app_settings,
        )
        run_elevated_command(
            ["install", "-m", "0755", str(source_path), str(target_path)],
            app_settings,
            current_logger=logger_to_use,
        )
        source_path.unlink(missing_ok=True)

    logger_to_use.debug(f"Installed {target_path}")
    return target_path
