from __future__ import annotations

import os
from dataclasses import dataclass

from a1table.core.errors import ConfigurationError
from a1table.core.references import COLUMN_PATTERN

DEFAULT_SEPARATOR = ","
DEFAULT_LINE_TERMINATOR = "\n"

LINE_TERMINATORS = {"lf": "\n", "crlf": "\r\n"}


def _check_separator(separator: str) -> None:
    if not isinstance(separator, str) or len(separator) != 1:
        raise ConfigurationError(f"CSV separator must be a single character, got {separator!r}")
    if separator in {'"', "\r", "\n"}:
        raise ConfigurationError(f"CSV separator cannot be a quote or line break: {separator!r}")


@dataclass(frozen=True, slots=True)
class CsvExportOptions:
    separator: str = DEFAULT_SEPARATOR
    include_headers: bool = False
    line_terminator: str = DEFAULT_LINE_TERMINATOR
    anchor_at_column_a: bool = True

    def __post_init__(self) -> None:
        _check_separator(self.separator)
        if not self.line_terminator:
            raise ConfigurationError("CSV line terminator cannot be empty")


@dataclass(frozen=True, slots=True)
class CsvImportOptions:
    separator: str = DEFAULT_SEPARATOR
    has_header_row: bool = False
    origin_row: int = 1
    origin_column: str = "A"

    def __post_init__(self) -> None:
        _check_separator(self.separator)
        if isinstance(self.origin_row, bool) or not isinstance(self.origin_row, int):
            raise ConfigurationError(f"Origin row must be an integer, got {self.origin_row!r}")
        if self.origin_row < 1:
            raise ConfigurationError(f"Origin row must be >= 1, got {self.origin_row}")
        if not isinstance(self.origin_column, str) or not COLUMN_PATTERN.fullmatch(self.origin_column):
            raise ConfigurationError(f"Origin column must be column letters such as 'A', got {self.origin_column!r}")


def default_separator() -> str:
    raw = os.getenv("A1TABLE_CSV_SEPARATOR")
    if not raw:
        return DEFAULT_SEPARATOR
    if raw.strip().lower() == "tab":
        raw = "\t"
    _check_separator(raw)
    return raw


def default_line_terminator() -> str:
    raw = os.getenv("A1TABLE_CSV_LINE_TERMINATOR")
    if not raw:
        return DEFAULT_LINE_TERMINATOR
    key = raw.strip().lower()
    if key not in LINE_TERMINATORS:
        raise ConfigurationError(
            f"A1TABLE_CSV_LINE_TERMINATOR must be one of {sorted(LINE_TERMINATORS)}, got {raw!r}"
        )
    return LINE_TERMINATORS[key]
