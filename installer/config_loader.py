# installer/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the bootstrapper.

Handles loading settings from Pydantic model defaults, environment
variables, a YAML file and command-line arguments, applying a specific
order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (ANSIBLE_BOOTSTRAP_*)
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

module_logger = logging.getLogger(__name__)

CONFIG_FILE_DEFAULT = "config.yaml"

# argparse destination -> AppSettings field
CLI_FIELD_MAP: Dict[str, str] = {
    "project_dir": "project_dir",
    "venv_dir": "venv_dir",
    "ansible_version": "ansible_version",
    "clone_repo": "clone_repo_url",
}


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates `source` with values from `overrides`.

    Nested dictionaries are merged key by key; any other value replaces the
    one in `source`. A None override never clears an existing value.

    Parameters:
        source: Dict[str, Any]
            The dictionary to be updated. Modified in place.
        overrides: Dict[str, Any]
            The dictionary containing values to update or add.

    Returns:
        Dict[str, Any]: The updated `source` dictionary.
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


def load_yaml_config(
    config_file_path: Union[str, Path],
    current_logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Reads a YAML configuration file into a dictionary.

    A missing file, a file that does not hold a mapping, or a file that fails
    to parse all yield an empty dictionary; the reason is logged.

    Args:
        config_file_path: Location of the YAML file.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        The parsed mapping, or an empty dictionary.
    """
    logger_to_use = current_logger if current_logger else module_logger
    yaml_config_path = Path(config_file_path).expanduser()

    if not yaml_config_path.is_file():
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


def cli_overrides(cli_args: Optional[argparse.Namespace]) -> Dict[str, Any]:
    """Maps parsed command-line flags onto AppSettings field names."""
    if cli_args is None:
        return {}

    overrides: Dict[str, Any] = {}
    cli_arg_dict = vars(cli_args)
    for cli_key, field_name in CLI_FIELD_MAP.items():
        cli_value = cli_arg_dict.get(cli_key)
        if cli_value is not None:
            overrides[field_name] = cli_value

    if cli_arg_dict.get("skip_smoke_test"):
        overrides["run_smoke_test"] = False
    return overrides


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Union[str, Path] = CONFIG_FILE_DEFAULT,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables (loaded by pydantic-settings).
    3. Values from the YAML configuration file.
    4. Command-Line Arguments (highest precedence).

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: If the merged values fail validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    try:
        # Defaults < .env < environment variables
        current_values_dict = AppSettings().model_dump(exclude_defaults=True)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    current_values_dict = _deep_update(
        current_values_dict, load_yaml_config(config_file_path, logger_to_use)
    )
    current_values_dict = _deep_update(
        current_values_dict, cli_overrides(cli_args)
    )

    try:
        final_settings = AppSettings(**current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.debug(
        "Successfully loaded and validated application settings"
    )
    return final_settings
