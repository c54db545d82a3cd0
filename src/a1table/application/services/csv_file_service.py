from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from a1table.core.config import CsvExportOptions, CsvImportOptions
from a1table.core.errors import CsvFileError
from a1table.domain.table import SparseTable

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CsvExportSummary:
    path: Path
    rows_written: int
    cells_written: int


class CsvFileService:
    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def load(self, csv_path: Path, options: CsvImportOptions | None = None) -> SparseTable:
        path = csv_path.expanduser().resolve()
        if not path.exists() or not path.is_file():
            raise CsvFileError(f"CSV file not found: {path}")

        try:
            text = path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as exc:
            raise CsvFileError(f"CSV file is not valid {self.encoding}: {path}") from exc

        table = SparseTable.from_csv(text, options)
        logger.debug("Read %s: %d cells", path, table.size())
        return table

    def save(
        self,
        table: SparseTable,
        csv_path: Path,
        options: CsvExportOptions | None = None,
    ) -> CsvExportSummary:
        opts = options or CsvExportOptions()
        path = csv_path.expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)

        text = table.to_csv(opts)
        with path.open("w", encoding=self.encoding, newline="") as handle:
            handle.write(text)

        bounds = table.bounding_box()
        rows_written = 0
        if bounds is not None:
            rows_written = bounds.row_count + (1 if opts.include_headers else 0)

        logger.debug("Wrote %s: %d rows, %d cells", path, rows_written, table.size())
        return CsvExportSummary(path=path, rows_written=rows_written, cells_written=table.size())
