"""
Letter-case detection and transformation.

The translator looks words up case-insensitively, so the casing of the
input word has to be recovered and reapplied to the dictionary candidate.
This module provides both halves:

- classify(): decide which CaseType a word follows
- apply(): rewrite a word so it follows a given CaseType

A "letter" is any character with an upper/lower distinction as far as
``str.isalpha`` is concerned; everything else is a symbol and is never
modified.

Both functions are pure and accept ``None``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class CaseType(str, Enum):
    """Letter-casing pattern of a word.

    CAPS:   every letter is uppercase ("HELLO")
    PROPER: first letter uppercase, the rest lowercase ("Hello")
    LOWER:  every letter is lowercase ("hello")
    MIXED:  contains letters but none of the above apply ("hEllo")
    NULL:   no letters at all, empty, or None
    """
    CAPS = "caps"
    PROPER = "proper"
    LOWER = "lower"
    MIXED = "mixed"
    NULL = "null"


def _first_letter(word: str) -> int:
    """Index of the first letter in word, or len(word) if there is none."""
    for i, ch in enumerate(word):
        if ch.isalpha():
            return i
    return len(word)


def classify(word: Optional[str]) -> CaseType:
    """Determine the CaseType of a word.

    Examples:
        >>> classify("Hello")
        <CaseType.PROPER: 'proper'>
        >>> classify("-*+A")
        <CaseType.CAPS: 'caps'>
        >>> classify("123")
        <CaseType.NULL: 'null'>
    """
    if not word:
        return CaseType.NULL

    start = _first_letter(word)
    if start >= len(word):
        return CaseType.NULL

    first_upper = word[start].isupper()
    rest_upper = False
    rest_lower = False
    for ch in word[start + 1:]:
        if not ch.isalpha():
            continue
        if ch.isupper():
            rest_upper = True
        else:
            rest_lower = True

    if first_upper and not rest_lower:
        return CaseType.CAPS
    if not first_upper and not rest_upper:
        return CaseType.LOWER
    if first_upper and not rest_upper:
        return CaseType.PROPER
    return CaseType.MIXED


def apply(word: Optional[str], case_type: CaseType) -> Optional[str]:
    """Rewrite word so that it follows case_type.

    Symbols are left untouched. MIXED returns the word unchanged, since
    there is no canonical mixed-case spelling, and NULL returns None.

    Examples:
        >>> apply("hola", CaseType.PROPER)
        'Hola'
        >>> apply("'tis", CaseType.CAPS)
        "'TIS"
    """
    if word is None:
        return None

    if case_type is CaseType.NULL:
        return None
    if case_type is CaseType.CAPS:
        return word.upper()
    if case_type is CaseType.LOWER:
        return word.lower()
    if case_type is CaseType.MIXED:
        return word

    # PROPER
    start = _first_letter(word)
    if start >= len(word):
        return word
    return word[:start] + word[start].upper() + word[start + 1:].lower()
