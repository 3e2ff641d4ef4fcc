"""
Word-by-word translator.

Translation of a sentence:
1. Tokenize on whitespace, merging multi-word ``[...]`` literals
2. Translate each word (literal passthrough, exact lookup, plural
   fallback, suffix fallback)
3. Restore the input word's letter case on the translation
4. Re-join the translated words with single spaces, dropping words that
   have no translation

Design Philosophy:
- Read operations (translate_word, translate_sentence, getters) may run
  concurrently with each other; WRITE operations (set_file, set_delimiter,
  reparse, name setters, log connect/disconnect) must run alone
- Nothing here raises for bad input: problems become diagnostics and the
  word is dropped
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tehthu import casing, tokenizer
from tehthu.casing import CaseType
from tehthu.config import DEFAULT_DELIMITER, DEFAULT_LEFT_NAME, DEFAULT_RIGHT_NAME, LOG_CAPACITY
from tehthu.log import DiagnosticsLog
from tehthu.translate.dictionary import DictionaryStore, Direction

EASTER_EGG_WORD = "amarok"
EASTER_EGG_FILLER = "wocka "


@dataclass
class TranslatorConfig:
    """Settings for a Translator.

    Attributes:
        delimiter: Mapping separator for plain-text dictionaries
        left_name: Left language name used until the dictionary names it
        right_name: Right language name used until the dictionary names it
        enable_easter_egg: Answer "amarok" with a random run of "wocka"
        log_capacity: Unread diagnostics held before producers block
    """
    delimiter: str = DEFAULT_DELIMITER
    left_name: str = DEFAULT_LEFT_NAME
    right_name: str = DEFAULT_RIGHT_NAME
    enable_easter_egg: bool = False
    log_capacity: int = LOG_CAPACITY

    def __post_init__(self):
        if not self.delimiter:
            raise ValueError("The supplied delimiter must not be null or empty.")

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return {
            "delimiter": self.delimiter,
            "left_name": self.left_name,
            "right_name": self.right_name,
            "enable_easter_egg": self.enable_easter_egg,
            "log_capacity": self.log_capacity,
        }


def trim_symbols(word: str) -> tuple[str, str, str]:
    """Split word into (leading symbols, core, trailing symbols).

    The core runs from the first letter to the last. A word without
    letters is returned whole as the core.

    Example:
        >>> trim_symbols('"here?"')
        ('"', 'here', '?"')
    """
    letters = [i for i, ch in enumerate(word) if ch.isalpha()]
    if not letters:
        return "", word, ""
    start, end = letters[0], letters[-1] + 1
    return word[:start], word[start:end], word[end:]


class Translator:
    """Bidirectional dictionary translator.

    The translator is created without reading the dictionary; call
    reparse() before translating.

    Example:
        >>> t = Translator("english-spanish.teh")
        >>> t.reparse()
        True
        >>> t.translate_sentence("Hello world", Direction.LEFT_TO_RIGHT)
        'Hola mundo'
    """

    def __init__(
        self,
        path: str | Path,
        config: TranslatorConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or TranslatorConfig()
        self.log = DiagnosticsLog(self.config.log_capacity)
        self.store = DictionaryStore(
            path,
            delimiter=self.config.delimiter,
            left_name=self.config.left_name,
            right_name=self.config.right_name,
            log=self.log,
        )
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Dictionary management (WRITE)
    # ------------------------------------------------------------------

    @property
    def file(self) -> Path:
        return self.store.path

    def set_file(self, path: str | Path) -> bool:
        return self.store.set_file(path)

    @property
    def delimiter(self) -> str:
        return self.store.delimiter

    def set_delimiter(self, delimiter: str) -> bool:
        return self.store.set_delimiter(delimiter)

    def reparse(self) -> bool:
        return self.store.reparse()

    @property
    def left_language_name(self) -> str:
        return self.store.left_name

    @property
    def right_language_name(self) -> str:
        return self.store.right_name

    def set_left_language_name(self, name: str) -> None:
        self.store.set_left_name(name)

    def set_right_language_name(self, name: str) -> None:
        self.store.set_right_name(name)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def connect_log(self) -> None:
        self.log.attach()

    def disconnect_log(self) -> None:
        self.log.detach()

    @property
    def has_log_connection(self) -> bool:
        return self.log.attached

    def put_log_line(self, line: str) -> None:
        self.log.push(line)

    def take_log_line(self, timeout: Optional[float] = None) -> Optional[str]:
        """Block until a diagnostic is available and return it."""
        return self.log.pop(timeout=timeout)

    # ------------------------------------------------------------------
    # Translation (read-only)
    # ------------------------------------------------------------------

    def translate_word(self, word: Optional[str], direction: Direction) -> Optional[str]:
        """Translate a single word.

        Leading and trailing symbols are stripped before the lookup and put
        back around the result. The word is not tokenized: use
        translate_sentence() for text containing spaces.

        Returns:
            The translation, or None if there is none
        """
        if word is None or not isinstance(direction, Direction):
            self.put_log_line("Warning: null key or invalid direction in translate_word()")
            return None

        if tokenizer.is_literal(word):
            return tokenizer.unwrap_literal(word)

        if self.config.enable_easter_egg and word.lower() == EASTER_EGG_WORD:
            filler = (EASTER_EGG_FILLER * self._rng.randrange(100)).rstrip()
            return casing.apply(filler, casing.classify(word))

        prefix, key, suffix = trim_symbols(word)
        key = key.lower()

        candidates = self.store.lookup(key, direction)

        if candidates is None and direction is Direction.LEFT_TO_RIGHT and len(key) > 1 and key.endswith("s"):
            # Drops the last two characters, not just the "s".
            candidates = self.store.lookup(key[:-2], direction)

        replacement = ""
        if candidates is None:
            for ending, substitute in self.store.suffix_rules(direction):
                ending = ending.lower()
                if len(key) > len(ending) and key.endswith(ending):
                    candidates = self.store.lookup(key[:-len(ending)], direction)
                    if candidates is not None:
                        replacement = substitute
                        break

        if not candidates:
            self.put_log_line(f"Note: no translation for key `{key}'")
            return None

        if len(candidates) > 1:
            self.put_log_line(f"Note: using first translation for ambiguous key `{key}' : `{candidates[0]}'")

        result = self._restore_case(candidates[0] + replacement, word, key)
        if result is None:
            # Words without letters have no case to carry over.
            return None
        return prefix + result + suffix

    @staticmethod
    def _restore_case(candidate: str, word: str, key: str) -> Optional[str]:
        word_case = casing.classify(word)
        if len(key) == 1:
            # A one-letter capital ("I", "A") reads as proper case.
            if word_case in (CaseType.CAPS, CaseType.PROPER):
                return casing.apply(candidate, CaseType.PROPER)
            return casing.apply(candidate, word_case)
        if casing.classify(candidate) is CaseType.MIXED:
            return candidate
        return casing.apply(candidate, word_case)

    def translate_sentence(self, sentence: Optional[str], direction: Direction) -> Optional[str]:
        """Translate every word of a sentence.

        Words without a translation are left out; the remaining words are
        joined with single spaces in their original order.
        """
        if sentence is None:
            return None
        translated = []
        for word in tokenizer.tokenize(sentence):
            out = self.translate_word(word, direction)
            if out is not None and out.strip():
                translated.append(out)
        return " ".join(translated)
