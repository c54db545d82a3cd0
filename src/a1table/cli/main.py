from __future__ import annotations

import argparse
import logging

from rich.console import Console

from a1table.application.services.csv_file_service import CsvFileService
from a1table.cli.commands import csv_cmd, ref_cmd
from a1table.cli.context import CLIContext
from a1table.core.errors import A1TableError
from a1table.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="a1",
        description="Sparse A1-addressed tables and CSV conversion",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    ref_cmd.register(subparsers)
    csv_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    ctx = CLIContext(console=Console(), files=CsvFileService())

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args, ctx)
    except A1TableError as exc:
        logger.error(str(exc))
        return 1
