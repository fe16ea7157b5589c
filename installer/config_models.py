# installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the installer,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from installer import config

# --- Default Static Values (can be overridden by config file/env/cli) ---
BIN_DIR_DEFAULT: str = "/usr/local/bin"
LOG_PREFIX_DEFAULT: str = "[LARAVEL-INIT]"

PHP_COMMAND_DEFAULT: str = "php"
PHP_MINIMUM_VERSION_DEFAULT: str = "7.0.0"

COMPOSER_COMMAND_DEFAULT: str = "composer"
COMPOSER_INSTALLER_URL_DEFAULT: str = "https://getcomposer.org/installer"
COMPOSER_SIGNATURE_URL_DEFAULT: str = "https://composer.github.io/installer.sig"
COMPOSER_HASH_ALGORITHM_DEFAULT: str = "sha384"
COMPOSER_SETUP_FILENAME_DEFAULT: str = "composer-setup.php"
COMPOSER_ARTIFACT_FILENAME_DEFAULT: str = "composer.phar"

TAKEOUT_DOCS_BASE_URL_DEFAULT: str = "https://takeout.tighten.co/install"

GLOBAL_PACKAGES_DEFAULT: List[str] = ["laravel/installer", "tightenco/takeout"]

SYMBOLS_DEFAULT: Dict[str, str] = dict(config.SYMBOLS)


class PhpSettings(BaseModel):
    """PHP runtime settings. PHP is verified, never installed."""

    command: str = Field(default=PHP_COMMAND_DEFAULT, description="PHP executable name or path.")
    minimum_version: str = Field(
        default=PHP_MINIMUM_VERSION_DEFAULT,
        description="Lowest PHP version accepted (major.minor.patch).",
    )

    @field_validator("minimum_version")
    @classmethod
    def _minimum_version_is_dotted(cls, value: str) -> str:
        parts = value.split(".")
        if not parts or not all(part.isdigit() for part in parts):
            raise ValueError(f"'{value}' is not a dotted numeric version")
        return value


class ComposerSettings(BaseModel):
    """Composer bootstrap settings."""

    command: str = Field(default=COMPOSER_COMMAND_DEFAULT, description="Composer executable name.")
    installer_url: Union[HttpUrl, str] = Field(
        default=COMPOSER_INSTALLER_URL_DEFAULT,
        description="URL serving the Composer installer payload.",
    )
    signature_url: Union[HttpUrl, str] = Field(
        default=COMPOSER_SIGNATURE_URL_DEFAULT,
        description="URL serving the expected checksum of the installer payload.",
    )
    hash_algorithm: str = Field(
        default=COMPOSER_HASH_ALGORITHM_DEFAULT,
        description="hashlib algorithm used to verify the installer payload.",
    )
    setup_filename: str = Field(
        default=COMPOSER_SETUP_FILENAME_DEFAULT,
        description="Local file name of the downloaded installer payload.",
    )
    artifact_filename: str = Field(
        default=COMPOSER_ARTIFACT_FILENAME_DEFAULT,
        description="File produced by the installer payload.",
    )
    download_timeout: int = Field(default=120, description="Timeout in seconds for each download.")


class TakeoutSettings(BaseModel):
    """Settings for the Docker follow-up instructions printed at the end."""

    docs_base_url: Union[HttpUrl, str] = Field(
        default=TAKEOUT_DOCS_BASE_URL_DEFAULT,
        description="Base URL of the per-OS Docker installation instructions.",
    )


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="INIT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    bin_dir: Path = Field(
        default=Path(BIN_DIR_DEFAULT),
        description="Well-known directory the Composer executable is installed into.",
    )
    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT, description="Prefix for log messages.")
    log_file: Optional[str] = Field(default=None, description="Optional file to append log output to.")
    verbose: bool = Field(default=False, description="Enable DEBUG logging.")
    use_color: Optional[bool] = Field(
        default=None,
        description="Force ANSI colors on or off. None means 'only when stdout is a terminal'.",
    )
    global_packages: List[str] = Field(
        default_factory=lambda: list(GLOBAL_PACKAGES_DEFAULT),
        description="Composer packages that must be globally installed, in install order.",
    )

    php: PhpSettings = Field(default_factory=PhpSettings)
    composer: ComposerSettings = Field(default_factory=ComposerSettings)
    takeout: TakeoutSettings = Field(default_factory=TakeoutSettings)

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))


class PresentationSettings(BaseModel):
    """Immutable output settings handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    use_color: Optional[bool] = None
    docs_base_url: str = TAKEOUT_DOCS_BASE_URL_DEFAULT
