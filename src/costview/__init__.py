"""Cost-estimation CSV viewer core: cell parsing, row valuation and rollups."""

from __future__ import annotations

from .aggregate import aggregate, grand_total, group_key
from .collection import Collection
from .dataset import (
    REQUIRED_COLUMNS,
    ColumnIndex,
    Dataset,
    DatasetLoadError,
    filter_rows,
    load_dataset,
    resolve_columns,
)
from .models import AggregateRow, CollectionItem, ComponentTotals
from .normalize import parse_quantity, to_number, to_percentage_fraction
from .valuation import (
    compute_component_totals,
    compute_line_total,
    is_percentage_row,
    set_quantity,
    sum_mle,
    valuate_row,
)

__all__ = [
    "REQUIRED_COLUMNS",
    "AggregateRow",
    "Collection",
    "CollectionItem",
    "ColumnIndex",
    "ComponentTotals",
    "Dataset",
    "DatasetLoadError",
    "aggregate",
    "compute_component_totals",
    "compute_line_total",
    "filter_rows",
    "grand_total",
    "group_key",
    "is_percentage_row",
    "load_dataset",
    "parse_quantity",
    "resolve_columns",
    "set_quantity",
    "sum_mle",
    "to_number",
    "to_percentage_fraction",
    "valuate_row",
]
