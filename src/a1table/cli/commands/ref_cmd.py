from __future__ import annotations

import argparse

from rich.markup import escape
from rich.table import Table

from a1table.cli.context import CLIContext
from a1table.core.errors import FormatError, RangeError
from a1table.core.references import decode, encode


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("ref", help="Cell reference conversion")
    ref_subparsers = parser.add_subparsers(dest="ref_command", required=True)

    enc = ref_subparsers.add_parser("encode", help="Convert a row and column number to a reference")
    enc.add_argument("row", type=int)
    enc.add_argument("column", type=int)
    enc.set_defaults(handler=run_encode)

    dec = ref_subparsers.add_parser("decode", help="Convert a reference to its row and column numbers")
    dec.add_argument("reference")
    dec.set_defaults(handler=run_decode)

    check = ref_subparsers.add_parser("check", help="Validate one or more references")
    check.add_argument("references", nargs="+")
    check.set_defaults(handler=run_check)


def run_encode(args: argparse.Namespace, ctx: CLIContext) -> int:
    ctx.console.print(encode(args.row, args.column))
    return 0


def run_decode(args: argparse.Namespace, ctx: CLIContext) -> int:
    position = decode(args.reference)
    ctx.console.print(f"row={position.row} column={position.column}")
    return 0


def run_check(args: argparse.Namespace, ctx: CLIContext) -> int:
    table = Table(title="Reference Check")
    table.add_column("Reference")
    table.add_column("Valid")
    table.add_column("Detail")

    all_valid = True
    for reference in args.references:
        try:
            position = decode(reference)
        except (FormatError, RangeError) as exc:
            all_valid = False
            table.add_row(escape(reference), "no", escape(str(exc)))
            continue
        table.add_row(escape(reference), "yes", f"row {position.row}, column {position.column}")

    ctx.console.print(table)
    return 0 if all_valid else 1
