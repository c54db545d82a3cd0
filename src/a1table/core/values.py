from __future__ import annotations

import math
import re

from a1table.domain.models.grid import CellValue

NUMBER_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")


def coerce(field: str) -> CellValue:
    """Type a raw CSV field.

    Empty fields become ``None``. Strict decimal literals become ``int`` or
    ``float``, ``true``/``false`` in any case become ``bool``, and everything
    else is returned unchanged. ``NaN``, ``Infinity`` and exponent forms stay
    strings.
    """
    if field == "":
        return None

    match = NUMBER_PATTERN.fullmatch(field)
    if match:
        if match.group(1) is None:
            try:
                return int(field)
            except ValueError:
                # Over the interpreter's int string-conversion digit limit.
                return field
        number = float(field)
        if math.isfinite(number):
            return number

    lowered = field.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    return field


def render(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    return str(value)
