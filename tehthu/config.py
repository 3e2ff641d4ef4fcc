"""
Project-wide configuration and directory structure.

This module defines the defaults and paths used throughout Tehthu.
Unlike dictionary contents, these values never change at runtime.

Module Contents:
    APP_NAME: Application name for display purposes
    DEFAULT_DELIMITER: Separator between the left and right side of a mapping
    DEFAULT_LEFT_NAME / DEFAULT_RIGHT_NAME: Placeholder language names
    LOG_CAPACITY: Maximum number of unread diagnostics before producers block
    SPREADSHEET_SUFFIXES: File extensions parsed as spreadsheets
    PREFERRED_SHEETS: Sheet names searched (in order) for the dictionary
    CONFIG_DIR: Per-user directory holding persisted settings
    SETTINGS_FILE: Single-line record of the last dictionary opened

The configuration directory is created lazily, the first time a setting
is written.

Example:
    >>> from tehthu.config import DEFAULT_DELIMITER, SETTINGS_FILE
    >>> print(f"Mappings look like: hello{DEFAULT_DELIMITER}hola")
    >>> print(f"Settings at: {SETTINGS_FILE}")
"""

import os
from pathlib import Path

# Application name for display and identification
APP_NAME = "Tehthu"

# Mapping separator used until a dictionary says otherwise
DEFAULT_DELIMITER = "|"

# Language names used until a dictionary names its languages
DEFAULT_LEFT_NAME = "Left"
DEFAULT_RIGHT_NAME = "Right"

# Unread diagnostics held before a producer blocks
LOG_CAPACITY = 100

# Extensions handled by the spreadsheet reader; everything else is plain text
SPREADSHEET_SUFFIXES = (".ods", ".xlsx", ".xlsm", ".xls")

# Sheets searched for the dictionary before falling back to the first one
PREFERRED_SHEETS = ("Dictionary", "Sheet1")

# Environment variable overriding the remembered dictionary
DICTIONARY_ENV_VAR = "TEHTHU_DICTIONARY"

# Per-user settings directory
CONFIG_DIR = Path(os.getenv("TEHTHU_HOME", Path.home() / ".tehthu"))

# Last dictionary parsed successfully
SETTINGS_FILE = CONFIG_DIR / "last_dictionary"
