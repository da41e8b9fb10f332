##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the optional `shelfdb.yaml` settings file and exposes
its values through the [`Config`][config.Config] class.

Modules:
    config_filepaths.py: Constants for the locations that are searched for a config file.
    configfile.py: Locating, reading and defaulting configuration files.
"""
from copy import copy
from typing import Dict


DEFAULT_SETTINGS: Dict = {
    "data_dir": ".",
    "indent": 4,
    "lock_timeout": -1,
    "log_level": "INFO",
}


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all ShelfDB settings in one place.

    Attributes:
        data_dir (str): Directory that holds the `<name>.json` database files.
        indent (int): Indentation used when pretty-printing database files.
        lock_timeout (float): Seconds to wait for a database file lock. A negative
            value waits forever.
        log_level (str): Log level used by the command line.

    Methods:
        __copy__: Creates a shallow copy of the Config instance.
        __str__: Returns a formatted string representation of the Config instance.
        to_dict: Returns the settings as a plain dictionary.
    """

    def __init__(self, app_dict: Dict = None):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary of settings. Missing keys take the values
                in `DEFAULT_SETTINGS`.
        """
        settings = copy(DEFAULT_SETTINGS)
        if app_dict:
            settings.update(app_dict)

        self.data_dir: str = str(settings["data_dir"])
        self.indent: int = settings["indent"]
        self.lock_timeout: float = settings["lock_timeout"]
        self.log_level: str = settings["log_level"]

    def __copy__(self) -> "Config":
        """
        Creates a shallow copy of the Config instance.

        Returns:
            A new Config instance with the same settings.
        """
        return self.__class__(self.to_dict())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Config):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            str: A string containing every setting.
        """
        formatted_str = "config:"
        for name, value in self.to_dict().items():
            formatted_str += f"\n  {name}: {value!r}"
        return formatted_str

    def to_dict(self) -> Dict:
        """
        Returns the settings as a plain dictionary.

        Returns:
            A dictionary with one entry per setting.
        """
        return {
            "data_dir": self.data_dir,
            "indent": self.indent,
            "lock_timeout": self.lock_timeout,
            "log_level": self.log_level,
        }
