"""
Dictionary sources.

A dictionary source reads a backing file and hands out its rows one at a
time, either as configuration lines or as mapping pairs. Two formats are
supported behind the same interface:

- PlainTextSource: the native line-oriented format (any extension, ``.teh``
  by convention)
- SpreadsheetSource: the first two columns of a spreadsheet sheet

Plain-text format:

    [English] [Spanish]     <- optional, first row only: language names
    ;                       <- a single character changes the delimiter
    {ning};{iendo}          <- suffix mapping
    hello;hola              <- mapping (everything else)

Configuration lines are only recognised before the first mapping; after
that every row is read as a mapping.

Design:
- Sources are forward-only cursors; the store drives them
- Malformed rows are reported to the diagnostics log and skipped
- Only a missing file or a file with no usable data raises
"""

from __future__ import annotations

import codecs
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Union

from tehthu.config import DEFAULT_DELIMITER, PREFERRED_SHEETS, SPREADSHEET_SUFFIXES
from tehthu.log import DiagnosticsLog


class DictionaryNotFoundError(FileNotFoundError):
    """The dictionary file does not exist."""


class DictionaryFormatError(ValueError):
    """The dictionary file holds no usable data."""


class ConfigKind(str, Enum):
    LANGUAGE_NAMES = "language_names"
    DELIMITER = "delimiter"
    SUFFIX = "suffix"


@dataclass(frozen=True)
class ConfigLine:
    """A configuration row.

    Attributes:
        kind: What the row configures
        left: Left language name, left suffix, or the new delimiter
        right: Right language name or right suffix (empty for DELIMITER)
        row: 1-based row number in the source
    """
    kind: ConfigKind
    left: str
    right: str = ""
    row: int = 0


@dataclass(frozen=True)
class MappingPair:
    """A left/right word pair read from one row."""
    lhs: str
    rhs: str
    row: int = 0


Record = Union[ConfigLine, MappingPair]


def _unwrap(lval: Optional[str], rval: Optional[str], opening: str, closing: str) -> Optional[tuple[str, str]]:
    if lval is None or rval is None or len(lval) <= 2 or len(rval) <= 2:
        return None
    if not (lval[0] == opening and lval[-1] == closing and rval[0] == opening and rval[-1] == closing):
        return None
    return lval[1:-1], rval[1:-1]


def name_stanza(lval: Optional[str], rval: Optional[str]) -> Optional[tuple[str, str]]:
    """Language names if both values are wrapped in ``[...]``."""
    return _unwrap(lval, rval, "[", "]")


def suffix_stanza(lval: Optional[str], rval: Optional[str]) -> Optional[tuple[str, str]]:
    """Suffixes if both values are wrapped in ``{...}``."""
    return _unwrap(lval, rval, "{", "}")


class DictionarySource(ABC):
    """Forward-only reader over the rows of a dictionary file.

    Subclasses implement the row handling; the cursor, the "first mapping
    found" latch and the diagnostics helpers live here.
    """

    def __init__(self, path: Path, log: DiagnosticsLog | None = None):
        self.path = Path(path)
        self.log = log
        self._index = 0
        self._mapping_found = False

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Human-readable name of the file format."""
        pass

    @property
    @abstractmethod
    def row_count(self) -> int:
        pass

    @abstractmethod
    def next_config_line(self) -> Optional[ConfigLine]:
        """Consume the current row if it is a configuration line.

        Returns the configuration line, or None (without advancing) when
        the current row is a mapping or the source is exhausted.
        """
        pass

    @abstractmethod
    def next_mapping(self) -> Optional[MappingPair]:
        """Consume the current row as a mapping.

        Always advances. Returns None for empty or malformed rows.
        """
        pass

    @property
    def at_end(self) -> bool:
        return self._index >= self.row_count

    @property
    def current_row(self) -> int:
        """1-based number of the row under the cursor."""
        return self._index + 1

    def records(self) -> Iterator[Record]:
        """Lazily yield every configuration line, then every mapping."""
        while (line := self.next_config_line()) is not None:
            yield line
        while not self.at_end:
            pair = self.next_mapping()
            if pair is not None:
                yield pair

    def close(self) -> None:
        pass

    def __enter__(self) -> DictionarySource:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _warn(self, row: int, message: str) -> None:
        if self.log is not None:
            self.log.push(f"Warning: Input File {self.path.name}, Line {row}: {message}")


# ============================================================================
# Plain text
# ============================================================================

def read_text(path: Path) -> str:
    """Read a text file, guessing its encoding.

    Byte-order marks are honoured; otherwise UTF-8 is tried first and
    Windows Western (then Latin-1) is used as a fallback.
    """
    data = path.read_bytes()
    if data.startswith(codecs.BOM_UTF8):
        return data.decode("utf-8-sig")
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16")
    for encoding in ("utf-8", "cp1252"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


class PlainTextSource(DictionarySource):
    """Reader for the native line-oriented dictionary format."""

    def __init__(
        self,
        path: Path,
        delimiter: str = DEFAULT_DELIMITER,
        log: DiagnosticsLog | None = None,
    ):
        super().__init__(path, log)
        if not delimiter:
            raise ValueError("The delimiter must not be empty")
        self._lines = read_text(self.path).splitlines()
        self._set_delimiter(delimiter)

    @property
    def format_name(self) -> str:
        return "plain text"

    @property
    def row_count(self) -> int:
        return len(self._lines)

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def _set_delimiter(self, delimiter: str) -> None:
        self._delimiter = delimiter
        d = re.escape(delimiter)
        self._names_pattern = re.compile(rf'\[(.+)\](?:\s+|{d})\[(.+)\]')
        self._suffix_pattern = re.compile(rf'\{{(.+?)\}}\s*(?:{d})?\s*\{{(.+)\}}')

    @staticmethod
    def _is_blank(line: str) -> bool:
        # A lone space or tab is a delimiter line, not a blank one.
        return len(line) != 1 and not line.strip()

    def _skip_blank(self) -> None:
        while not self.at_end and self._is_blank(self._lines[self._index]):
            self._index += 1

    def next_config_line(self) -> Optional[ConfigLine]:
        if self._mapping_found:
            return None
        self._skip_blank()
        if self.at_end:
            return None

        line = self._lines[self._index]
        row = self.current_row

        if self._index == 0:
            match = self._names_pattern.fullmatch(line)
            if match:
                self._index += 1
                return ConfigLine(ConfigKind.LANGUAGE_NAMES, match.group(1), match.group(2), row)

        if len(line) == 1:
            # Takes effect for the following rows; nothing is re-read.
            self._set_delimiter(line)
            self._index += 1
            return ConfigLine(ConfigKind.DELIMITER, line, row=row)

        match = self._suffix_pattern.fullmatch(line)
        if match:
            self._index += 1
            return ConfigLine(ConfigKind.SUFFIX, match.group(1), match.group(2), row)

        return None

    def next_mapping(self) -> Optional[MappingPair]:
        if self.at_end:
            return None

        line = self._lines[self._index]
        row = self.current_row
        self._index += 1
        if self._is_blank(line):
            return None
        self._mapping_found = True

        body = line
        while body.endswith(self._delimiter):
            body = body[:-len(self._delimiter)]
        if body.count(self._delimiter) != 1:
            self._warn(
                row,
                f"Does not contain exactly one separator character `{self._delimiter}'. SKIPPING LINE.",
            )
            return None

        lhs, rhs = body.split(self._delimiter)
        if not lhs.strip() or not rhs.strip():
            self._warn(row, "One side of the mapping is empty. SKIPPING LINE.")
            return None
        return MappingPair(lhs, rhs, row)


# ============================================================================
# Spreadsheets
# ============================================================================

def _cell_text(value) -> str:
    import pandas as pd

    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value)


def load_sheet_rows(path: Path) -> tuple[str, list[list[str]]]:
    """Read the dictionary sheet of a workbook.

    The sheet named "Dictionary" is preferred, then "Sheet1", then the first
    sheet. Trailing empty cells are dropped from every row, so a row's
    length is its number of populated columns.

    Returns:
        (sheet name, rows)

    Raises:
        DictionaryFormatError: The workbook cannot be read or has no sheets
    """
    try:
        import pandas as pd
    except ImportError:
        raise ImportError(
            "Spreadsheet dictionaries require pandas. "
            "Install with: pip install pandas openpyxl odfpy"
        )

    engine = "odf" if path.suffix.lower() == ".ods" else None
    try:
        sheets = pd.read_excel(
            path,
            sheet_name=None,
            header=None,
            dtype=str,
            keep_default_na=False,
            engine=engine,
        )
    except ImportError:
        raise ImportError(
            f"Reading {path.suffix} dictionaries requires an extra engine. "
            "Install with: pip install openpyxl odfpy"
        )
    except (ValueError, OSError) as exc:
        raise DictionaryFormatError(f"Can not read spreadsheet {path.name}: {exc}") from exc

    if not sheets:
        raise DictionaryFormatError(
            f"Couldn't find a spreadsheet containing the dictionary in {path.name}"
        )

    name = next((n for n in PREFERRED_SHEETS if n in sheets), next(iter(sheets)))
    rows = []
    for values in sheets[name].itertuples(index=False, name=None):
        cells = [_cell_text(v) for v in values]
        while cells and not cells[-1].strip():
            cells.pop()
        rows.append(cells)
    return name, rows


class SpreadsheetSource(DictionarySource):
    """Reader for spreadsheet dictionaries (.ods, .xlsx, ...).

    Column A holds the left word and column B the right one; further
    columns are ignored. There is no delimiter; configuration rows are
    recognised by their cells being wrapped in ``[...]`` or ``{...}``.
    """

    def __init__(self, path: Path, log: DiagnosticsLog | None = None):
        super().__init__(path, log)
        self.sheet_name, self._rows = load_sheet_rows(self.path)

    @property
    def format_name(self) -> str:
        return f"spreadsheet ({self.path.suffix.lower().lstrip('.')})"

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def next_config_line(self) -> Optional[ConfigLine]:
        if self._mapping_found or self.at_end:
            return None

        cells = self._rows[self._index]
        if len(cells) < 2:
            return None
        row = self.current_row
        lval, rval = cells[0], cells[1]

        names = name_stanza(lval, rval)
        if names and self._index == 0:
            self._index += 1
            return ConfigLine(ConfigKind.LANGUAGE_NAMES, names[0], names[1], row)

        suffixes = suffix_stanza(lval, rval)
        if suffixes:
            self._index += 1
            return ConfigLine(ConfigKind.SUFFIX, suffixes[0], suffixes[1], row)

        return None

    def next_mapping(self) -> Optional[MappingPair]:
        if self.at_end:
            return None

        cells = self._rows[self._index]
        row = self.current_row
        self._index += 1
        if not cells:
            return None
        self._mapping_found = True

        if len(cells) == 1:
            return MappingPair(cells[0], "", row)
        return MappingPair(cells[0], cells[1], row)


def is_spreadsheet(path: Path) -> bool:
    return Path(path).suffix.lower() in SPREADSHEET_SUFFIXES


def open_source(
    path: str | Path,
    delimiter: str = DEFAULT_DELIMITER,
    log: DiagnosticsLog | None = None,
) -> DictionarySource:
    """Open the right source for a dictionary file, chosen by extension.

    Raises:
        DictionaryNotFoundError: path does not name an existing file
        DictionaryFormatError: a spreadsheet without usable sheets
    """
    path = Path(path)
    if not path.is_file():
        raise DictionaryNotFoundError(f"Could not find file {path}")
    if is_spreadsheet(path):
        return SpreadsheetSource(path, log=log)
    return PlainTextSource(path, delimiter=delimiter, log=log)
