"""
Where titan keeps its files.
"""

import logging
import os
import sys
from os import path
from pathlib import Path

from .client import constants

logger = logging.getLogger(constants.LOGGER_NAME)

APP_NAME = "titan"


def data_dir() -> Path:
    """
    The user data directory of the platform:
        * Linux and BSDs: $XDG_DATA_HOME/titan, defaulting to ~/.local/share/titan.
        * macOS: ~/Library/Application Support/titan.
        * Windows: %APPDATA%\\titan.
    """
    if sys.platform == "win32":
        base = os.environ.get("APPDATA") or path.join("~", "AppData", "Roaming")
    elif sys.platform == "darwin":
        base = path.join("~", "Library", "Application Support")
    else:
        base = os.environ.get("XDG_DATA_HOME") or path.join("~", ".local", "share")
    return Path(path.expanduser(base)) / APP_NAME


def ensure_data_dir() -> Path:
    """
    Create the data directory if needed.

    :raises OSError: the directory could not be created.
    """
    directory = data_dir()
    logger.debug("using data directory %s", directory)
    # Essentially `mkdir -p <absolute_data_dir>`
    directory.mkdir(exist_ok=True, parents=True)
    return directory
