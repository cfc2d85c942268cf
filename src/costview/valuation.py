"""Row valuation and the derived totals of a collection item.

Two accounting modes exist. ``PCT`` rows carry a fraction in ``Total`` and the
quantity is a dollar base. Every other row is priced from its material, labor
and equipment breakdown, or from ``Total`` when the breakdown is all zero.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from .dataset import ColumnIndex
from .models import CollectionItem, ComponentTotals
from .normalize import parse_quantity, to_number, to_percentage_fraction

PERCENT_UNIT = "PCT"


def _cell(row: Sequence[object], index: int) -> object | None:
    if 0 <= index < len(row):
        return row[index]
    return None


def _text(row: Sequence[object], index: int) -> str:
    value = _cell(row, index)
    return "" if value is None else str(value)


def is_percentage_row(item: CollectionItem) -> bool:
    return item.um.strip().upper() == PERCENT_UNIT


def sum_mle(item: CollectionItem) -> float:
    return item.material + item.labor + item.equipment


def valuate_row(row: Sequence[object], columns: ColumnIndex) -> CollectionItem:
    """Build a collection item (quantity ``1.0``) from a sheet row.

    The ``Total`` cell is read as a percentage fraction for ``PCT`` rows and as
    a plain amount otherwise. A zero total is stored as-is; the fallback to it
    happens in :func:`compute_line_total`.
    """

    um = _text(row, columns.um).strip()
    total_cell = _cell(row, columns.total)
    if um.upper() == PERCENT_UNIT:
        base_total = to_percentage_fraction(total_cell)
    else:
        base_total = to_number(total_cell)
    return CollectionItem(
        item=_text(row, columns.item),
        description=_text(row, columns.description),
        um=um,
        material=to_number(_cell(row, columns.material)),
        labor=to_number(_cell(row, columns.labor)),
        equipment=to_number(_cell(row, columns.equipment)),
        base_total=base_total,
    )


def set_quantity(item: CollectionItem, quantity: object) -> CollectionItem:
    """Return ``item`` with a new quantity; unparsable input becomes ``1.0``.

    No bounds are applied, so zero and negative quantities are kept.
    """

    return replace(item, quantity=parse_quantity(quantity))


def compute_line_total(item: CollectionItem) -> float:
    if is_percentage_row(item):
        return item.quantity * item.base_total
    breakdown = sum_mle(item)
    if breakdown > 0:
        return breakdown * item.quantity
    return item.base_total * item.quantity


def compute_component_totals(item: CollectionItem) -> ComponentTotals:
    """Scale material, labor and equipment by quantity.

    Percentage rows and total-only rows (zero breakdown) report no components.
    """

    if is_percentage_row(item) or sum_mle(item) == 0:
        return ComponentTotals(material=0.0, labor=0.0, equipment=0.0)
    return ComponentTotals(
        material=item.material * item.quantity,
        labor=item.labor * item.quantity,
        equipment=item.equipment * item.quantity,
    )
