from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from a1table.core.config import CsvExportOptions, CsvImportOptions
from a1table.core.references import (
    column_letter_to_number,
    column_number_to_letter,
    decode,
    encode,
)
from a1table.core.values import coerce, render
from a1table.domain.models.grid import BoundingBox, CellValue, RowCell, RowGroup
from a1table.infrastructure.codecs.csv_codec import format_rows, parse_csv

logger = logging.getLogger(__name__)


class SparseTable:
    """Cells keyed by A1-style references, stored in insertion order.

    Every key is validated before it is stored. ``None`` is the empty-cell
    marker and is never stored: assigning it removes the key.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._cells: dict[str, CellValue] = {}
        if initial is None:
            return

        data = initial
        if "data" in initial:
            wrapped = initial["data"]
            if wrapped is None or isinstance(wrapped, Mapping):
                data = wrapped or {}

        _validate_all(data)
        self._cells = {ref: value for ref, value in data.items() if value is not None}

    def __repr__(self) -> str:
        return f"SparseTable(size={len(self._cells)}, bounds={self.bounding_box()!r})"

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, reference: object) -> bool:
        return reference in self._cells

    # Mutation

    def set(self, reference: str, value: CellValue) -> None:
        decode(reference)
        self._store(reference, value)

    def set_many(self, cells: Mapping[str, CellValue]) -> None:
        _validate_all(cells)
        for reference, value in cells.items():
            self._store(reference, value)

    def remove(self, reference: str) -> None:
        decode(reference)
        self._cells.pop(reference, None)

    def clear(self) -> None:
        self._cells.clear()

    def _store(self, reference: str, value: CellValue) -> None:
        if value is None:
            self._cells.pop(reference, None)
        else:
            self._cells[reference] = value

    # Reads

    def get(self, reference: str) -> CellValue:
        decode(reference)
        return self._cells.get(reference)

    def get_many(self, *references: str) -> dict[str, CellValue]:
        _validate_all(references)
        return {reference: self._cells.get(reference) for reference in references}

    def size(self) -> int:
        return len(self._cells)

    def is_empty(self) -> bool:
        return not self._cells

    def references(self) -> list[str]:
        return list(self._cells)

    def snapshot(self) -> dict[str, CellValue]:
        return dict(self._cells)

    @property
    def raw_data(self) -> dict[str, CellValue]:
        """The live internal mapping.

        Writes through this dict skip reference validation; prefer ``snapshot()``.
        """
        return self._cells

    # Projections

    def bounding_box(self) -> BoundingBox | None:
        if not self._cells:
            return None

        positions = [decode(reference) for reference in self._cells]
        rows = [position.row for position in positions]
        columns = [position.column for position in positions]
        return BoundingBox(
            min_row=min(rows),
            max_row=max(rows),
            min_col=min(columns),
            max_col=max(columns),
        )

    def to_array(self, anchor_at_column_a: bool = True) -> list[list[CellValue]]:
        bounds = self.bounding_box()
        if bounds is None:
            return []

        start_col = 1 if anchor_at_column_a else bounds.min_col
        return [
            [self._cells.get(encode(row, col)) for col in range(start_col, bounds.max_col + 1)]
            for row in range(bounds.min_row, bounds.max_row + 1)
        ]

    def to_compact_pairs(self) -> list[tuple[str, CellValue]]:
        return list(self._cells.items())

    def to_row_groups(self) -> list[RowGroup]:
        by_row: dict[int, list[tuple[int, CellValue]]] = {}
        for reference, value in self._cells.items():
            position = decode(reference)
            by_row.setdefault(position.row, []).append((position.column, value))

        groups: list[RowGroup] = []
        for row in sorted(by_row):
            cells = sorted(by_row[row], key=lambda item: item[0])
            groups.append(
                RowGroup(
                    row=row,
                    cells=[RowCell(column=column_number_to_letter(col), value=value) for col, value in cells],
                )
            )
        return groups

    # CSV

    def to_csv(self, options: CsvExportOptions | None = None) -> str:
        opts = options or CsvExportOptions()
        bounds = self.bounding_box()
        if bounds is None:
            return ""

        start_col = 1 if opts.anchor_at_column_a else bounds.min_col
        columns = range(start_col, bounds.max_col + 1)

        lines: list[list[str]] = []
        if opts.include_headers:
            lines.append([column_number_to_letter(col) for col in columns])
        for row in range(bounds.min_row, bounds.max_row + 1):
            lines.append([render(self._cells.get(encode(row, col))) for col in columns])

        return format_rows(lines, opts.separator, opts.line_terminator)

    def load_csv(self, text: str, options: CsvImportOptions | None = None) -> None:
        """Replace the table contents with the cells parsed from ``text``."""
        opts = options or CsvImportOptions()
        rows = parse_csv(text, opts.separator)
        self.clear()

        data_rows = rows[1:] if opts.has_header_row else rows
        origin_col = column_letter_to_number(opts.origin_column)

        for row_index, fields in enumerate(data_rows):
            for col_index, raw in enumerate(fields):
                value = coerce(raw)
                if value is None:
                    continue
                self._cells[encode(opts.origin_row + row_index, origin_col + col_index)] = value

        logger.debug(
            "Loaded %d cells from %d CSV rows (header skipped: %s)",
            len(self._cells),
            len(data_rows),
            opts.has_header_row and bool(rows),
        )

    @classmethod
    def from_csv(cls, text: str, options: CsvImportOptions | None = None) -> SparseTable:
        table = cls()
        table.load_csv(text, options)
        return table


def _validate_all(references: Iterable[str]) -> None:
    for reference in references:
        decode(reference)
