from __future__ import annotations

import re

from a1table.core.errors import FormatError, RangeError
from a1table.domain.models.grid import CellPosition

REFERENCE_PATTERN = re.compile(r"([A-Z]+)([0-9]+)")
COLUMN_PATTERN = re.compile(r"[A-Z]+")

_ALPHABET_SIZE = 26
_ORD_A = ord("A")


def column_letter_to_number(letters: str) -> int:
    """Convert column letters to a 1-based index (A=1, Z=26, AA=27)."""
    if not isinstance(letters, str) or not COLUMN_PATTERN.fullmatch(letters):
        raise FormatError(f"Invalid column letters: {letters!r}")
    number = 0
    for ch in letters:
        number = number * _ALPHABET_SIZE + (ord(ch) - _ORD_A + 1)
    return number


def column_number_to_letter(number: int) -> str:
    """Convert a 1-based column index to bijective base-26 letters."""
    if number < 1:
        raise RangeError(f"Invalid column number: {number}. Column numbers must be >= 1")
    chars: list[str] = []
    while number > 0:
        number, idx = divmod(number - 1, _ALPHABET_SIZE)
        chars.append(chr(_ORD_A + idx))
    return "".join(reversed(chars))


def encode(row: int, column: int) -> str:
    if row < 1 or column < 1:
        raise RangeError(f"Row and column numbers must be >= 1 (got row={row}, column={column})")
    return f"{column_number_to_letter(column)}{row}"


def decode(reference: str) -> CellPosition:
    if not isinstance(reference, str):
        raise FormatError(f"Invalid cell reference: {reference!r}")
    match = REFERENCE_PATTERN.fullmatch(reference)
    if not match:
        raise FormatError(f"Invalid cell reference: {reference!r}")

    letters, digits = match.groups()
    if len(digits) > 1 and digits[0] == "0":
        raise FormatError(f"Invalid cell reference: {reference!r}. Row numbers cannot have leading zeros")
    try:
        row = int(digits)
    except ValueError as exc:
        raise RangeError(f"Row number in cell reference is too long: {reference[:32]!r}...") from exc
    if row < 1:
        raise RangeError(f"Invalid row number in cell reference {reference!r}. Row numbers must be >= 1")

    return CellPosition(row=row, column=column_letter_to_number(letters))


def is_valid(reference: str) -> bool:
    try:
        decode(reference)
    except (FormatError, RangeError):
        return False
    return True
