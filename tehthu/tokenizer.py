"""
Sentence tokenization.

A sentence is split into words on runs of whitespace (space, tab, CR, LF).
Words wrapped in square brackets are literals: they are emitted verbatim
instead of being looked up. A literal may contain spaces, in which case it
arrives from split() as several words and merge_literals() glues them
back together:

    >>> tokenize("say [Mister Spock] hello")
    ['say', '[Mister Spock]', 'hello']

An opening bracket with no closing bracket before the end of the sentence
is not a literal, and its words are left alone.
"""

from __future__ import annotations

import re
from typing import Optional

# Word separators; newlines are ordinary word breaks
WHITESPACE_PATTERN = re.compile(r'[ \t\r\n]+')

LITERAL_OPEN = "["
LITERAL_CLOSE = "]"


def split(sentence: Optional[str]) -> list[str]:
    """Split a sentence into whitespace-delimited words, dropping empties."""
    if not sentence:
        return []
    return [w for w in WHITESPACE_PATTERN.split(sentence) if w]


def is_literal(word: Optional[str]) -> bool:
    """Whether word is a complete bracket literal such as ``[NASA]``."""
    return (
        word is not None
        and len(word) > 2
        and word.startswith(LITERAL_OPEN)
        and word.endswith(LITERAL_CLOSE)
    )


def unwrap_literal(word: str) -> str:
    """Strip the brackets from a literal."""
    return word[1:-1]


def merge_literals(words: list[str]) -> list[str]:
    """Join bracket literals that were split across several words.

    A word that starts with ``[`` but does not end with ``]`` starts a
    forward scan. If a later word ends with ``]``, every word in between is
    joined with single spaces into one token and the scan resumes after it.
    Otherwise the opening word is kept as an ordinary word.
    """
    merged = []
    i = 0
    while i < len(words):
        word = words[i]
        if word.startswith(LITERAL_OPEN) and not word.endswith(LITERAL_CLOSE):
            for j in range(i + 1, len(words)):
                if words[j].endswith(LITERAL_CLOSE):
                    merged.append(" ".join(words[i:j + 1]))
                    i = j + 1
                    break
            else:
                merged.append(word)
                i += 1
            continue
        merged.append(word)
        i += 1
    return merged


def tokenize(sentence: Optional[str]) -> list[str]:
    """Split a sentence and merge multi-word literals."""
    return merge_literals(split(sentence))
