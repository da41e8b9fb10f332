##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Module for project-wide utility functions.
"""
import json
import logging
from typing import Any, Dict

import yaml


LOG = logging.getLogger("shelfdb")


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def parse_json_argument(raw: str) -> Any:
    """
    Parse a JSON document passed on the command line.

    Args:
        raw: The raw JSON text.

    Returns:
        The decoded JSON value.

    Raises:
        ValueError: If `raw` is not valid JSON.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Could not parse '{raw}' as JSON: {exc}") from exc
