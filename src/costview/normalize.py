"""Parsing helpers for the free-form numeric cells of the cost sheet.

Every function here is total: unparsable input resolves to a safe default
instead of raising, so one bad cell never blocks the rest of the sheet.
"""

from __future__ import annotations

import math
from typing import Optional


def _clean(cell: object | None, *, strip_percent: bool = False) -> str:
    text = str(cell).lower().strip()
    text = text.replace("$", "").replace(",", "")
    if strip_percent:
        text = text.replace("%", "")
    return text.strip()


def _to_float(text: str) -> Optional[float]:
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def to_number(cell: object | None) -> float:
    """Parse a currency or plain numeric cell such as ``"$1,234.50"``.

    Empty, missing or unparsable cells yield ``0.0``. Values are not rounded.
    """

    if cell is None:
        return 0.0
    value = _to_float(_clean(cell))
    return 0.0 if value is None else value


def to_percentage_fraction(cell: object | None) -> float:
    """Parse a percentage cell into a fraction.

    Values above ``1.0`` are whole-number percentages (``"5"`` and ``"5%"``
    both become ``0.05``); values at or below ``1.0`` are already fractions and
    are returned unchanged.
    """

    if cell is None:
        return 0.0
    value = _to_float(_clean(cell, strip_percent=True))
    if value is None:
        return 0.0
    if value > 1.0:
        return value / 100.0
    return value


def parse_quantity(value: object | None) -> float:
    """Parse a user-entered quantity, falling back to ``1.0``.

    Numbers pass through. Text is parsed as a plain number without stripping
    currency decoration.
    """

    if isinstance(value, bool) or value is None:
        return 1.0
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 1.0
    parsed = _to_float(str(value).strip())
    return 1.0 if parsed is None else parsed
