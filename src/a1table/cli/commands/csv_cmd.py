from __future__ import annotations

import argparse
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from a1table.cli.context import CLIContext
from a1table.core.config import (
    CsvExportOptions,
    CsvImportOptions,
    default_line_terminator,
    default_separator,
)
from a1table.core.references import column_number_to_letter
from a1table.core.values import render
from a1table.domain.table import SparseTable


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("csv", help="Load CSV files into a sparse table and inspect or re-export them")
    csv_subparsers = parser.add_subparsers(dest="csv_command", required=True)

    show = csv_subparsers.add_parser("show", help="Render the table grid")
    _add_import_options(show)
    show.add_argument("--compact", action="store_true", help="Start at the first used column instead of A")
    show.set_defaults(handler=run_show)

    bounds = csv_subparsers.add_parser("bounds", help="Show the bounding box of occupied cells")
    _add_import_options(bounds)
    bounds.set_defaults(handler=run_bounds)

    cell = csv_subparsers.add_parser("cell", help="Print the typed value of one cell")
    _add_import_options(cell)
    cell.add_argument("reference")
    cell.set_defaults(handler=run_cell)

    rows = csv_subparsers.add_parser("rows", help="List occupied cells grouped by row")
    _add_import_options(rows)
    rows.set_defaults(handler=run_rows)

    convert = csv_subparsers.add_parser("convert", help="Re-export a CSV file with different formatting")
    _add_import_options(convert)
    convert.add_argument("output", help="Destination CSV path")
    convert.add_argument("--output-separator", help="Separator for the written file (default: input separator)")
    convert.add_argument("--include-headers", action="store_true", help="Write a header row of column letters")
    convert.add_argument("--compact", action="store_true", help="Start at the first used column instead of A")
    convert.add_argument("--crlf", action="store_true", help="Terminate lines with CRLF")
    convert.set_defaults(handler=run_convert)


def _add_import_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Path to a CSV file")
    parser.add_argument("--separator", help="Field separator (default: $A1TABLE_CSV_SEPARATOR or ',')")
    parser.add_argument("--has-header-row", action="store_true", help="Discard the first row")
    parser.add_argument("--origin-row", type=int, default=1)
    parser.add_argument("--origin-column", default="A")


def _import_options(args: argparse.Namespace) -> CsvImportOptions:
    return CsvImportOptions(
        separator=args.separator or default_separator(),
        has_header_row=bool(args.has_header_row),
        origin_row=int(args.origin_row),
        origin_column=str(args.origin_column).upper(),
    )


def _load(args: argparse.Namespace, ctx: CLIContext) -> tuple[SparseTable, CsvImportOptions]:
    options = _import_options(args)
    return ctx.files.load(Path(args.path), options), options


def run_show(args: argparse.Namespace, ctx: CLIContext) -> int:
    table, _ = _load(args, ctx)
    bounds = table.bounding_box()
    if bounds is None:
        ctx.console.print(Panel.fit("No cells.", title=escape(str(args.path))))
        return 0

    start_col = bounds.min_col if args.compact else 1
    grid = Table(title=f"{escape(str(args.path))} ({table.size()} cells)")
    grid.add_column("", style="bold")
    for col in range(start_col, bounds.max_col + 1):
        grid.add_column(column_number_to_letter(col))

    for row_number, values in zip(
        range(bounds.min_row, bounds.max_row + 1),
        table.to_array(anchor_at_column_a=not args.compact),
    ):
        grid.add_row(str(row_number), *(escape(render(value)) for value in values))

    ctx.console.print(grid)
    return 0


def run_bounds(args: argparse.Namespace, ctx: CLIContext) -> int:
    table, _ = _load(args, ctx)
    bounds = table.bounding_box()
    if bounds is None:
        ctx.console.print(Panel.fit("Table is empty.", title="Bounding Box"))
        return 0

    first = f"{column_number_to_letter(bounds.min_col)}{bounds.min_row}"
    last = f"{column_number_to_letter(bounds.max_col)}{bounds.max_row}"
    lines = [
        f"Range: {first}:{last}",
        f"Rows: {bounds.min_row}-{bounds.max_row} ({bounds.row_count})",
        f"Columns: {column_number_to_letter(bounds.min_col)}-{column_number_to_letter(bounds.max_col)} ({bounds.column_count})",
        f"Occupied cells: {table.size()}",
    ]
    ctx.console.print(Panel.fit("\n".join(lines), title="Bounding Box"))
    return 0


def run_cell(args: argparse.Namespace, ctx: CLIContext) -> int:
    table, _ = _load(args, ctx)
    value = table.get(args.reference)
    if value is None:
        ctx.console.print(f"{escape(args.reference)}: (empty)")
    else:
        ctx.console.print(f"{escape(args.reference)}: {escape(repr(value))} ({type(value).__name__})")
    return 0


def run_rows(args: argparse.Namespace, ctx: CLIContext) -> int:
    table, _ = _load(args, ctx)
    groups = table.to_row_groups()

    listing = Table(title=f"Rows ({len(groups)})")
    listing.add_column("Row")
    listing.add_column("Cells")
    for group in groups:
        cells = ", ".join(f"{cell.column}={render(cell.value)}" for cell in group.cells)
        listing.add_row(str(group.row), escape(cells))
    ctx.console.print(listing)
    return 0


def run_convert(args: argparse.Namespace, ctx: CLIContext) -> int:
    table, import_options = _load(args, ctx)
    export_options = CsvExportOptions(
        separator=args.output_separator or import_options.separator,
        include_headers=bool(args.include_headers),
        line_terminator="\r\n" if args.crlf else default_line_terminator(),
        anchor_at_column_a=not args.compact,
    )
    summary = ctx.files.save(table, Path(args.output), export_options)

    lines = [
        f"Output: {summary.path}",
        f"Rows written: {summary.rows_written}",
        f"Cells written: {summary.cells_written}",
    ]
    ctx.console.print(Panel.fit(escape("\n".join(lines)), title="CSV Export Summary"))
    return 0
