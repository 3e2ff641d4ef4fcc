"""
Persisted settings for Tehthu front ends.

The only setting is the path of the last dictionary that parsed
successfully, so it can be reopened on the next start. It is looked up in:
1. The TEHTHU_DICTIONARY environment variable
2. A single-line record file (~/.tehthu/last_dictionary)

Usage:
    from tehthu.settings import SettingsStore

    settings = SettingsStore()
    settings.remember_dictionary("english-spanish.teh")
    path = settings.last_dictionary()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tehthu.config import DICTIONARY_ENV_VAR, SETTINGS_FILE

logger = logging.getLogger("tehthu.settings")


@dataclass
class DictionaryInfo:
    """Where the remembered dictionary came from."""
    path: Optional[Path]
    source: str  # 'env', 'settings', 'none'
    exists: bool


class SettingsStore:
    """Read and write the remembered dictionary path."""

    def __init__(self, settings_file: Path | None = None):
        self.settings_file = Path(settings_file) if settings_file else SETTINGS_FILE

    def _read_record(self) -> Optional[Path]:
        if not self.settings_file.exists():
            return None
        try:
            lines = self.settings_file.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            logger.warning("Could not read %s: %s", self.settings_file, exc)
            return None
        if not lines or not lines[0].strip():
            return None
        return Path(lines[0].strip())

    def dictionary_info(self) -> DictionaryInfo:
        if env_val := os.getenv(DICTIONARY_ENV_VAR):
            path = Path(env_val)
            return DictionaryInfo(path, "env", path.is_file())
        if (path := self._read_record()) is not None:
            return DictionaryInfo(path, "settings", path.is_file())
        return DictionaryInfo(None, "none", False)

    def last_dictionary(self) -> Optional[Path]:
        """The remembered dictionary, or None if unset or no longer on disk."""
        info = self.dictionary_info()
        if info.path is not None and not info.exists:
            logger.info("Remembered dictionary %s no longer exists", info.path)
            return None
        return info.path

    def remember_dictionary(self, path: str | Path) -> None:
        """Record path as the dictionary to reopen next time."""
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)
        self.settings_file.write_text(f"{Path(path).resolve()}\n", encoding="utf-8")

    def forget_dictionary(self) -> bool:
        if self.settings_file.exists():
            self.settings_file.unlink()
            return True
        return False
