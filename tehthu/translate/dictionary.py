"""
In-memory bidirectional dictionary.

The store keeps two word tables (left→right and right→left) and two
suffix tables, all keyed by the word (or suffix) being translated. A key
can map to several candidates; they are kept in the order they were read
and the first one wins at translation time.

Design Philosophy:
- Tables are never edited across a reparse: a parse fills a brand new
  DictionarySnapshot which then replaces the old one in a single assignment,
  so readers see either the old dictionary or the new one
- Symmetry is established at insertion time: every mapping is inserted in
  both directions
- Anomalies go to the diagnostics log; only a missing file raises

Thread safety: reparse(), build(), set_file(), set_delimiter() and the name
setters are WRITE operations. Callers must not run a WRITE concurrently
with any other call on the same store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from tehthu.config import DEFAULT_DELIMITER, DEFAULT_LEFT_NAME, DEFAULT_RIGHT_NAME
from tehthu.log import DiagnosticsLog
from tehthu.translate.sources import (
    ConfigKind,
    DictionaryFormatError,
    DictionaryNotFoundError,
    DictionarySource,
    open_source,
)

Table = dict[str, list[str]]


class Direction(str, Enum):
    """Which side of the dictionary the input is written in."""
    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"

    @property
    def reverse(self) -> Direction:
        if self is Direction.LEFT_TO_RIGHT:
            return Direction.RIGHT_TO_LEFT
        return Direction.LEFT_TO_RIGHT


@dataclass
class DictionarySnapshot:
    """One complete parse of a dictionary file."""
    ltr: Table = field(default_factory=dict)
    rtl: Table = field(default_factory=dict)
    ltr_suffixes: Table = field(default_factory=dict)
    rtl_suffixes: Table = field(default_factory=dict)
    left_name: str = DEFAULT_LEFT_NAME
    right_name: str = DEFAULT_RIGHT_NAME

    def table(self, direction: Direction) -> Table:
        return self.ltr if direction is Direction.LEFT_TO_RIGHT else self.rtl

    def suffixes(self, direction: Direction) -> Table:
        return self.ltr_suffixes if direction is Direction.LEFT_TO_RIGHT else self.rtl_suffixes


@dataclass
class DictionaryStats:
    """Summary counts, for display."""
    ltr_entries: int
    rtl_entries: int
    ltr_suffixes: int
    rtl_suffixes: int
    ltr_ambiguous: int
    rtl_ambiguous: int

    def to_dict(self) -> dict:
        return {
            "ltr_entries": self.ltr_entries,
            "rtl_entries": self.rtl_entries,
            "ltr_suffixes": self.ltr_suffixes,
            "rtl_suffixes": self.rtl_suffixes,
            "ltr_ambiguous": self.ltr_ambiguous,
            "rtl_ambiguous": self.rtl_ambiguous,
        }


class DictionaryStore:
    """Translation tables built from a dictionary file.

    The store is created empty; call reparse() to read the file. Names given
    here are defaults that a names stanza in the file overrides.
    """

    def __init__(
        self,
        path: str | Path,
        delimiter: str = DEFAULT_DELIMITER,
        left_name: str = DEFAULT_LEFT_NAME,
        right_name: str = DEFAULT_RIGHT_NAME,
        log: DiagnosticsLog | None = None,
    ):
        self.log = log
        self._path = self._checked_path(path)
        self._delimiter = self._checked_delimiter(delimiter)
        self._default_names = (left_name, right_name)
        self._snapshot = self._empty_snapshot()

    # ------------------------------------------------------------------
    # Backing file and delimiter (WRITE)
    # ------------------------------------------------------------------

    @staticmethod
    def _checked_path(path: str | Path | None) -> Path:
        if path is None or not Path(path).is_file():
            raise DictionaryNotFoundError(f"Could not find file {path}")
        return Path(path)

    @staticmethod
    def _checked_delimiter(delimiter: Optional[str]) -> str:
        if not delimiter:
            raise ValueError("The supplied delimiter must not be null or empty.")
        return delimiter

    @property
    def path(self) -> Path:
        return self._path

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def set_file(self, path: str | Path) -> bool:
        """Switch to another dictionary file and reparse it."""
        self._path = self._checked_path(path)
        return self.reparse()

    def set_delimiter(self, delimiter: str) -> bool:
        """Change the mapping delimiter and reparse."""
        self._delimiter = self._checked_delimiter(delimiter)
        return self.reparse()

    # ------------------------------------------------------------------
    # Language names
    # ------------------------------------------------------------------

    @property
    def left_name(self) -> str:
        return self._snapshot.left_name

    @property
    def right_name(self) -> str:
        return self._snapshot.right_name

    def set_left_name(self, name: str) -> None:
        self._default_names = (name, self._default_names[1])
        self._snapshot.left_name = name

    def set_right_name(self, name: str) -> None:
        self._default_names = (self._default_names[0], name)
        self._snapshot.right_name = name

    def language_name(self, direction: Direction) -> str:
        """Name of the language the input is written in for direction."""
        if direction is Direction.LEFT_TO_RIGHT:
            return self.left_name
        return self.right_name

    # ------------------------------------------------------------------
    # Parsing (WRITE)
    # ------------------------------------------------------------------

    def _empty_snapshot(self) -> DictionarySnapshot:
        left, right = self._default_names
        return DictionarySnapshot(left_name=left, right_name=right)

    def reparse(self) -> bool:
        """Discard every table and rebuild them from the backing file.

        Returns:
            True on success; False if the file holds no usable data, in
            which case the dictionary is left empty

        Raises:
            DictionaryNotFoundError: the backing file has disappeared
        """
        try:
            with open_source(self._path, self._delimiter, self.log) as source:
                self.build(source)
        except DictionaryFormatError as exc:
            self._snapshot = self._empty_snapshot()
            self._push(f"Critical error: {exc}. The dictionary will be empty for this session.")
            return False
        return True

    def build(self, source: DictionarySource) -> None:
        """Replace the tables with the contents of source.

        Configuration lines are consumed first, then mappings until the
        source is exhausted.
        """
        snapshot = self._empty_snapshot()
        self._push(f"Info: Parsing {source.format_name} started.")

        while (line := source.next_config_line()) is not None:
            if line.kind is ConfigKind.LANGUAGE_NAMES:
                snapshot.left_name, snapshot.right_name = line.left, line.right
            elif line.kind is ConfigKind.SUFFIX:
                self._add_suffix(snapshot, line.left, line.right, line.row)

        while not source.at_end:
            row = source.current_row
            pair = source.next_mapping()
            if pair is None:
                continue
            if not pair.lhs.strip() or not pair.rhs.strip():
                self._push(
                    f"Warning: Input File {self._path.name}, Line {row}: "
                    f"Missing translation for `{pair.lhs or pair.rhs}'. SKIPPING LINE."
                )
                continue
            self._add(snapshot.ltr, pair.lhs.lower(), pair.rhs, snapshot.left_name, row, "word")
            self._add(snapshot.rtl, pair.rhs.lower(), pair.lhs, snapshot.right_name, row, "word")

        self._snapshot = snapshot
        self._push("Info: Parsing complete.")

    def add_suffix_mapping(self, lhs: str, rhs: str) -> None:
        """Register a suffix substitution in both directions."""
        self._add_suffix(self._snapshot, lhs, rhs, 0)

    def _add_suffix(self, snapshot: DictionarySnapshot, lhs: str, rhs: str, row: int) -> None:
        self._add(snapshot.ltr_suffixes, lhs, rhs, snapshot.left_name, row, "suffix")
        self._add(snapshot.rtl_suffixes, rhs, lhs, snapshot.right_name, row, "suffix")

    def _add(self, table: Table, key: str, value: str, language: str, row: int, what: str) -> None:
        candidates = table.setdefault(key, [])
        candidates.append(value)
        if len(candidates) > 1:
            listing = "".join(f"\t{c}\n" for c in candidates)
            self._push(
                f"Note: Input File {self._path.name}, Line {row}: "
                f"Multiple definitions for {language} {what} `{key}':\n{listing}"
            )

    def _push(self, line: str) -> None:
        if self.log is not None:
            self.log.push(line)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> DictionarySnapshot:
        return self._snapshot

    def lookup(self, key: str, direction: Direction) -> Optional[list[str]]:
        """Candidates for key (case-insensitive), or None."""
        return self._snapshot.table(direction).get(key.lower())

    def suffix_rules(self, direction: Direction) -> list[tuple[str, str]]:
        """(suffix, replacement) pairs, longest suffix first.

        Ties keep registration order. Only the first replacement of an
        ambiguous suffix is used.
        """
        table = self._snapshot.suffixes(direction)
        ordered = sorted(table, key=len, reverse=True)
        return [(suffix, table[suffix][0]) for suffix in ordered if table[suffix]]

    def ambiguous_keys(self, direction: Direction) -> dict[str, list[str]]:
        return {k: list(v) for k, v in self._snapshot.table(direction).items() if len(v) > 1}

    def stats(self) -> DictionaryStats:
        snap = self._snapshot
        return DictionaryStats(
            ltr_entries=len(snap.ltr),
            rtl_entries=len(snap.rtl),
            ltr_suffixes=len(snap.ltr_suffixes),
            rtl_suffixes=len(snap.rtl_suffixes),
            ltr_ambiguous=sum(1 for v in snap.ltr.values() if len(v) > 1),
            rtl_ambiguous=sum(1 for v in snap.rtl.values() if len(v) > 1),
        )

    def __len__(self) -> int:
        return len(self._snapshot.ltr)
