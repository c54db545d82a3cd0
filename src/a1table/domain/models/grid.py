from __future__ import annotations

from dataclasses import dataclass, field

CellValue = str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class CellPosition:
    row: int
    column: int


@dataclass(frozen=True, slots=True)
class BoundingBox:
    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def row_count(self) -> int:
        return self.max_row - self.min_row + 1

    @property
    def column_count(self) -> int:
        return self.max_col - self.min_col + 1


@dataclass(slots=True)
class RowCell:
    column: str
    value: CellValue


@dataclass(slots=True)
class RowGroup:
    row: int
    cells: list[RowCell] = field(default_factory=list)
