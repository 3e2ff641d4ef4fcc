"""
Dictionary translation.

- sources: plain-text and spreadsheet dictionary readers
- dictionary: the bidirectional translation tables
- translator: word and sentence translation with case restoration
"""

from tehthu.translate.dictionary import DictionaryStats, DictionaryStore, Direction
from tehthu.translate.sources import (
    DictionaryFormatError,
    DictionaryNotFoundError,
    DictionarySource,
    PlainTextSource,
    SpreadsheetSource,
    open_source,
)
from tehthu.translate.translator import Translator, TranslatorConfig

__all__ = [
    "DictionaryFormatError",
    "DictionaryNotFoundError",
    "DictionarySource",
    "DictionaryStats",
    "DictionaryStore",
    "Direction",
    "PlainTextSource",
    "SpreadsheetSource",
    "Translator",
    "TranslatorConfig",
    "open_source",
]
