from __future__ import annotations

import re
from collections.abc import Iterable

QUOTE = '"'
LINE_BREAK_PATTERN = re.compile(r"\r?\n")


def parse_csv(text: str, separator: str = ",") -> list[list[str]]:
    """Split CSV text into rows of raw string fields.

    Lines are split before quotes are considered, so a quoted field cannot
    span a line break. Blank lines are skipped. Malformed quoting never
    raises; the result is a best-effort parse.
    """
    if not text.strip():
        return []

    rows: list[list[str]] = []
    for line in LINE_BREAK_PATTERN.split(text):
        if not line.strip():
            continue
        rows.append(parse_csv_line(line, separator))
    return rows


def parse_csv_line(line: str, separator: str = ",") -> list[str]:
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == separator and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append("".join(current))
    return fields


def escape_field(text: str, separator: str = ",") -> str:
    if separator in text or QUOTE in text or "\n" in text or "\r" in text:
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def format_row(fields: Iterable[str], separator: str = ",") -> str:
    """Join escaped fields into one line.

    The result is never blank: when every field is empty or whitespace, all
    fields are quoted.
    """
    values = list(fields)
    line = separator.join(escape_field(field, separator) for field in values)
    if line.strip():
        return line
    return separator.join(QUOTE + field.replace(QUOTE, QUOTE * 2) + QUOTE for field in values)


def format_rows(rows: Iterable[Iterable[str]], separator: str = ",", line_terminator: str = "\n") -> str:
    return line_terminator.join(format_row(row, separator) for row in rows)
