"""
Tehthu: a word-substitution translator between syntactically identical languages.

A dictionary file maps words of a "left" language to words of a "right"
language. Sentences are translated word by word in either direction, with
the letter case of every input word carried over to its translation.

Main components:
1. Dictionary sources (plain text and spreadsheets)
2. A bidirectional dictionary store with suffix rules
3. The translator itself, plus a diagnostics log for parse/translation notes

License: GPL-3.0-or-later
"""

__version__ = "1.1.0"

from tehthu.casing import CaseType
from tehthu.log import DiagnosticsLog
from tehthu.translate import Direction, Translator, TranslatorConfig

__all__ = [
    "CaseType",
    "DiagnosticsLog",
    "Direction",
    "Translator",
    "TranslatorConfig",
]
