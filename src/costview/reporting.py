"""Tabular views of the collection and its grouped rollup."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from .aggregate import grand_total
from .models import AggregateRow, CollectionItem
from .valuation import compute_component_totals, compute_line_total

logger = logging.getLogger(__name__)

COLLECTION_COLUMNS = [
    "Item",
    "Description",
    "UM",
    "Material",
    "Labor",
    "Equipment",
    "Total",
    "Qty/PCT",
    "Total Material",
    "Total Labor",
    "Total Equipment",
    "Line Total",
]
SUMMARY_COLUMNS = ["Type", "Material", "Labor", "Equipment", "Line Total"]


def collection_frame(items: Iterable[CollectionItem]) -> pd.DataFrame:
    records = []
    for item in items:
        components = compute_component_totals(item)
        records.append(
            [
                item.item,
                item.description,
                item.um,
                item.material,
                item.labor,
                item.equipment,
                item.base_total,
                item.quantity,
                components.material,
                components.labor,
                components.equipment,
                compute_line_total(item),
            ]
        )
    return pd.DataFrame(records, columns=COLLECTION_COLUMNS)


def aggregate_frame(groups: Mapping[str, AggregateRow]) -> pd.DataFrame:
    records = [
        [row.key, row.total_material, row.total_labor, row.total_equipment, row.line_total]
        for row in groups.values()
    ]
    return pd.DataFrame(records, columns=SUMMARY_COLUMNS)


def make_summary_text(groups: Mapping[str, AggregateRow]) -> str:
    if not groups:
        return "No items added yet."
    frame = aggregate_frame(groups)
    total = grand_total(groups)
    table = frame.to_string(index=False, float_format=lambda value: f"{value:,.2f}")
    return (
        f"{table}\n"
        f"Collection line total: ${total.line_total:,.2f} "
        f"(material ${total.total_material:,.2f}, labor ${total.total_labor:,.2f}, "
        f"equipment ${total.total_equipment:,.2f})"
    )


def write_report(path: Path, items: Iterable[CollectionItem], groups: Mapping[str, AggregateRow]) -> Path:
    """Export the report; ``.xlsx`` gets both tables, anything else the summary as CSV."""

    path = Path(path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    summary = aggregate_frame(groups)
    if path.suffix.lower() == ".xlsx":
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            collection_frame(items).to_excel(writer, sheet_name="Collection", index=False)
            summary.to_excel(writer, sheet_name="Summary", index=False)
    else:
        summary.to_csv(path, index=False)
    logger.info("Report written to %s", path)
    return path
