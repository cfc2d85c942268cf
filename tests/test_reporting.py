from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from costview.aggregate import aggregate
from costview.dataset import load_dataset
from costview.reporting import (
    COLLECTION_COLUMNS,
    SUMMARY_COLUMNS,
    aggregate_frame,
    collection_frame,
    make_summary_text,
    write_report,
)
from costview.valuation import set_quantity, valuate_row

SAMPLE = Path(__file__).resolve().parents[1] / "data_sample" / "mydata.csv"


def _items():
    dataset = load_dataset(SAMPLE)
    items = [valuate_row(row, dataset.columns) for row in dataset.rows]
    items[0] = set_quantity(items[0], 3)
    items[2] = set_quantity(items[2], 1000)
    return items


def test_collection_frame_columns_and_values():
    frame = collection_frame(_items())
    assert list(frame.columns) == COLLECTION_COLUMNS
    first = frame.iloc[0]
    assert first["Item"] == "01A"
    assert first["Qty/PCT"] == 3.0
    assert first["Total Material"] == 30.0
    assert first["Line Total"] == 51.0
    assert frame.iloc[2]["Line Total"] == pytest.approx(50.0)


def test_aggregate_frame_keeps_group_order():
    frame = aggregate_frame(aggregate(_items()))
    assert list(frame.columns) == SUMMARY_COLUMNS
    assert frame["Type"].tolist() == ["01", "02", "03", "1"]
    assert frame.loc[frame["Type"] == "01", "Line Total"].iloc[0] == pytest.approx(51.0 + 1550.0)


def test_empty_summary():
    assert make_summary_text({}) == "No items added yet."
    assert list(aggregate_frame({}).columns) == SUMMARY_COLUMNS


def test_summary_text_has_grand_total():
    text = make_summary_text(aggregate(_items()))
    # 51 + 1550 + 50 + 0.08 + 250 + 215.75 + 75
    assert "Collection line total: $2,191.83" in text


def test_write_report_csv(tmp_path: Path):
    items = _items()
    path = write_report(tmp_path / "out" / "summary.csv", items, aggregate(items))
    frame = pd.read_csv(path, dtype={"Type": str})
    assert frame["Type"].tolist() == ["01", "02", "03", "1"]


def test_write_report_xlsx(tmp_path: Path):
    items = _items()
    path = write_report(tmp_path / "report.xlsx", items, aggregate(items))
    sheets = pd.read_excel(path, sheet_name=None)
    assert set(sheets) == {"Collection", "Summary"}
    assert len(sheets["Collection"]) == len(items)
