# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System identification for the installer.

Maps the kernel name reported by the host (the `uname -s` value) onto the
operating systems the follow-up instructions know about.
"""

import logging
import platform
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

module_logger = logging.getLogger(__name__)

OSFamily = Literal["linux", "macos", "unknown"]


class OperatingSystem(BaseModel):
    """Operating system detected once per run. Immutable."""

    model_config = ConfigDict(frozen=True)

    family: OSFamily
    raw: str

    @property
    def slug(self) -> str:
        """Name used in documentation URLs, e.g. 'linux' or 'UNKNOWN:SunOS'."""
        if self.family == "unknown":
            return f"UNKNOWN:{self.raw}"
        return self.family

    @property
    def is_known(self) -> bool:
        return self.family != "unknown"


def detect_os(
    raw_name: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> OperatingSystem:
    """
    Detect the operating system family.

    Args:
        raw_name: Kernel name to classify. Defaults to platform.system().
        current_logger: Optional logger instance.

    Returns:
        OperatingSystem. Unrecognised names map to the 'unknown' family and
        keep the raw value; this is never fatal.
    """
    logger_to_use = current_logger if current_logger else module_logger
    if raw_name is None:
        raw_name = platform.system()

    if raw_name.startswith("Linux"):
        family: OSFamily = "linux"
    elif raw_name.startswith("Darwin"):
        family = "macos"
    else:
        family = "unknown"
        # TODO: confirm what WSL2 reports here; it is expected to say "Linux".
        logger_to_use.debug(f"Unrecognised operating system '{raw_name}'.")

    detected = OperatingSystem(family=family, raw=raw_name)
    logger_to_use.debug(f"Detected operating system: {detected.slug}")
    return detected
