##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
This module provides functionality for locating and loading the ShelfDB
configuration file (`shelfdb.yaml`) and filling in default settings.

A config file is optional; without one every setting takes its default value.
"""
import logging
import os
from typing import Dict, Optional

from shelfdb.config import DEFAULT_SETTINGS, Config
from shelfdb.config.config_filepaths import APP_FILENAME, DATA_DIR_ENV_VAR, SHELFDB_HOME
from shelfdb.utils import load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

SETTING_TYPES: Dict = {
    "data_dir": (str,),
    "indent": (int,),
    "lock_timeout": (int, float),
    "log_level": (str,),
}


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads a ShelfDB YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath (str): The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No app config file at {filepath}")
        return None
    LOG.info(f"Reading app config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the ShelfDB configuration file (`shelfdb.yaml`).

    If no directory is provided the search order is:
      1. The current working directory.
      2. The ShelfDB home directory (`~/.shelfdb`).

    If a `path` is explicitly provided, only that directory is checked.

    Args:
        path (str, optional): A specific directory to look for `shelfdb.yaml`.

    Returns:
        The full path to the `shelfdb.yaml` file if found, otherwise `None`.
    """
    if path is None:
        local_app = os.path.join(os.getcwd(), APP_FILENAME)
        if os.path.isfile(local_app):
            return local_app

        path_app = os.path.join(SHELFDB_HOME, APP_FILENAME)
        if os.path.isfile(path_app):
            return path_app

        return None

    app_path = os.path.join(path, APP_FILENAME)
    if os.path.exists(app_path):
        return app_path

    return None


def get_default_config() -> Dict:
    """
    Creates the default configuration.

    Returns:
        Dict: A configuration dictionary with every setting at its default value.
    """
    return dict(DEFAULT_SETTINGS)


def validate_settings(settings: Dict):
    """
    Check that every known setting has a value of the expected type.

    Booleans are rejected for numeric settings even though `bool` subclasses `int`.

    Args:
        settings: The merged settings dictionary.

    Raises:
        ValueError: If a setting has a value of the wrong type.
    """
    for name, expected in SETTING_TYPES.items():
        value = settings[name]
        if isinstance(value, bool) or not isinstance(value, expected):
            expected_names = " or ".join(t.__name__ for t in expected)
            raise ValueError(f"Config setting '{name}' must be of type {expected_names}, got {value!r}.")


def get_config(path: Optional[str] = None) -> Config:
    """
    Loads the ShelfDB configuration, applying defaults where necessary.

    Keys in the config file that ShelfDB doesn't know about are logged and ignored.
    The `SHELFDB_DATA_DIR` environment variable, when set, overrides `data_dir`.

    Args:
        path (str, optional): The directory path to search for the configuration file.
            If `None`, default search paths are used.

    Returns:
        A [`Config`][config.Config] object holding every setting.

    Raises:
        ValueError: If a setting in the config file has the wrong type.
    """
    settings = get_default_config()

    filepath = find_config_file(path)
    if filepath is not None:
        file_settings = load_config(filepath)
        if not isinstance(file_settings, dict):
            raise ValueError(f"The config file {filepath} must contain a mapping of settings.")
        for key, value in file_settings.items():
            if key not in settings:
                LOG.warning(f"Unknown config setting '{key}' in {filepath}. Ignoring it.")
                continue
            settings[key] = value

    if os.environ.get(DATA_DIR_ENV_VAR):
        settings["data_dir"] = os.environ[DATA_DIR_ENV_VAR]

    validate_settings(settings)
    return Config(settings)
