"""Grouped rollup of collection items by item-code prefix."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from .models import AggregateRow, CollectionItem
from .valuation import compute_component_totals, compute_line_total

GROUP_KEY_LENGTH = 2


def group_key(item_code: str, length: int = GROUP_KEY_LENGTH) -> str:
    """First ``length`` characters of the item code; shorter codes are used whole."""

    return item_code[:length]


def aggregate(items: Iterable[CollectionItem]) -> Dict[str, AggregateRow]:
    """Sum derived totals per group key.

    Groups appear in order of first occurrence. Keys are case-sensitive.
    """

    groups: Dict[str, AggregateRow] = {}
    for item in items:
        key = group_key(item.item)
        row = groups.get(key)
        if row is None:
            row = groups[key] = AggregateRow(key=key)
        components = compute_component_totals(item)
        row.total_material += components.material
        row.total_labor += components.labor
        row.total_equipment += components.equipment
        row.line_total += compute_line_total(item)
    return groups


def grand_total(groups: Mapping[str, AggregateRow]) -> AggregateRow:
    total = AggregateRow(key="TOTAL")
    for row in groups.values():
        total.total_material += row.total_material
        total.total_labor += row.total_labor
        total.total_equipment += row.total_equipment
        total.line_total += row.line_total
    return total
