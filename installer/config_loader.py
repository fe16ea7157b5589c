# installer/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the installer.

Handles loading settings from Pydantic model defaults, environment variables,
a YAML file and command-line arguments, applying a specific order of
precedence:
1. Pydantic Model Defaults
2. Environment Variables (INIT_ prefix, '__' for nested sections)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from installer import config

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates a dictionary `source` with values from another dictionary
    `overrides`. Nested dictionaries are merged key by key; `None` values in
    `overrides` never replace an existing value.

    Parameters:
        source: Dict[str, Any]
            The dictionary to be updated. This dictionary gets modified in place.
        overrides: Dict[str, Any]
            The dictionary containing values to update or add to the `source`.

    Returns:
        Dict[str, Any]:
            The updated dictionary after applying all `overrides` to the input `source`.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _read_yaml_config(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.info(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def _cli_overrides(cli_args: argparse.Namespace) -> Dict[str, Any]:
    """Map parsed CLI arguments onto AppSettings field names."""
    cli_arg_dict = vars(cli_args)
    mapped_cli_values: Dict[str, Any] = {}

    if cli_arg_dict.get("verbose"):
        mapped_cli_values["verbose"] = True
    if cli_arg_dict.get("no_color"):
        mapped_cli_values["use_color"] = False
    if cli_arg_dict.get("log_file"):
        mapped_cli_values["log_file"] = str(cli_arg_dict["log_file"])
    if cli_arg_dict.get("bin_dir"):
        mapped_cli_values["bin_dir"] = str(cli_arg_dict["bin_dir"])

    return mapped_cli_values


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Union[str, Path] = config.DEFAULT_CONFIG_FILE,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables (Pydantic BaseSettings loads these on construction).
    3. Values from the YAML configuration file (override defaults and ENV).
    4. Command-Line Arguments (highest precedence, overrides all else).

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file. Relative paths
            are resolved against the current working directory.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        pydantic.ValidationError: If the merged values do not validate.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # Model Defaults < Environment Variables
    settings_after_env_and_defaults = AppSettings()
    current_values_dict = settings_after_env_and_defaults.model_dump(
        exclude_defaults=False
    )

    yaml_data = _read_yaml_config(Path(config_file_path), logger_to_use)
    if yaml_data:
        current_values_dict = _deep_update(current_values_dict, yaml_data)

    if cli_args:
        current_values_dict = _deep_update(
            current_values_dict, _cli_overrides(cli_args)
        )

    final_settings = AppSettings(**current_values_dict)
    logger_to_use.debug(
        f"Resolved settings: {final_settings.model_dump(exclude={'symbols'})}"
    )
    return final_settings
