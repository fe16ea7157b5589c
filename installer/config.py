# installer/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants for the Laravel environment bootstrap.

This module defines truly static values for the installer, such as logging
symbols, the script version and fixed project paths.

Mutable runtime configuration (like the Composer installer URLs, the binary
directory or the minimum PHP version) is handled by
'installer/config_models.py' and 'installer/config_loader.py'.
"""

from pathlib import Path

SCRIPT_VERSION: str = "1.0"

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

DEFAULT_CONFIG_FILE: str = "config.yaml"

SYMBOLS: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
    "lock": "🔒",
}

# Exit codes returned by install.py
EXIT_SUCCESS: int = 0
EXIT_STEP_FAILURE: int = 1
EXIT_INTEGRITY_FAILURE: int = 2
EXIT_INTERRUPTED: int = 130
