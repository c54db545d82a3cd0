from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from a1table.application.services.csv_file_service import CsvFileService


@dataclass(slots=True)
class CLIContext:
    console: Console
    files: CsvFileService
