# installer/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the installer.

Handles loading settings from Pydantic model defaults, environment variables,
an optional YAML file and command-line arguments, applying this order of
precedence:
1. Pydantic Model Defaults
2. Environment Variables (via Pydantic's BaseSettings)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .config_models import AppSettings
from .exceptions import ConfigError

module_logger = logging.getLogger(__name__)

CONFIG_FILE_DEFAULT = "syscgo-installer.yaml"

# argparse destination -> AppSettings field
CLI_FIELD_MAP: Dict[str, str] = {
    "install_dir": "install_dir",
    "project_root": "project_root",
    "go_command": "go_command",
    "task_delay": "task_delay_seconds",
    "log_level": "log_level",
}


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates ``source`` with values from ``overrides``.

    Nested dictionaries are merged key by key; ``None`` values in
    ``overrides`` never replace an existing value.

    Returns:
        The updated ``source`` dictionary.
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
    return source


def _read_yaml_config(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    if not yaml_config_path.is_file():
        logger_to_use.debug(
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
    except OSError as e:
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


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Union[str, Path] = CONFIG_FILE_DEFAULT,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads installer settings.

    Args:
        cli_args: Parsed command-line arguments (from argparse). Only the
            destinations listed in ``CLI_FIELD_MAP`` are considered, and
            ``None`` values are ignored.
        config_file_path: Path to the YAML configuration file. A missing file
            is not an error.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        ConfigError: If the merged values fail validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        settings_after_env_and_defaults = AppSettings()
    except ValidationError as e:
        raise ConfigError(f"Invalid environment configuration: {e}") from e
    current_values_dict = settings_after_env_and_defaults.model_dump()

    yaml_data = _read_yaml_config(Path(config_file_path), logger_to_use)
    current_values_dict = _deep_update(current_values_dict, yaml_data)

    if cli_args:
        mapped_cli_values: Dict[str, Any] = {}
        for cli_key, cli_value in vars(cli_args).items():
            if cli_value is None or cli_key not in CLI_FIELD_MAP:
                continue
            mapped_cli_values[CLI_FIELD_MAP[cli_key]] = cli_value
        current_values_dict = _deep_update(
            current_values_dict, mapped_cli_values
        )

    try:
        final_settings = AppSettings.model_validate(current_values_dict)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration: {e}") from e

    logger_to_use.debug(
        f"Resolved settings: install_dir={final_settings.install_dir}, "
        f"project_root={final_settings.project_root}, binaries={final_settings.binary_names}"
    )
    return final_settings
