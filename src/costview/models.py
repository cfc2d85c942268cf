from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CollectionItem:
    """One row copied into the collection, plus its user-editable quantity.

    ``base_total`` is the sheet's own ``Total`` cell: a fraction for ``PCT``
    rows, otherwise a fallback dollar amount. Derived totals are never stored
    here; see :mod:`costview.valuation`.
    """

    item: str
    description: str
    um: str
    material: float
    labor: float
    equipment: float
    base_total: float
    quantity: float = 1.0


@dataclass(frozen=True)
class ComponentTotals:
    material: float
    labor: float
    equipment: float


@dataclass
class AggregateRow:
    """Running sums for one item-code prefix."""

    key: str
    total_material: float = 0.0
    total_labor: float = 0.0
    total_equipment: float = 0.0
    line_total: float = 0.0
