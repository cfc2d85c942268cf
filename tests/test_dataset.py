from __future__ import annotations

import io
from pathlib import Path

import pytest

from costview.dataset import REQUIRED_COLUMNS, DatasetLoadError, filter_rows, load_dataset, resolve_columns

SAMPLE = Path(__file__).resolve().parents[1] / "data_sample" / "mydata.csv"


def test_load_sample_dataset():
    dataset = load_dataset(SAMPLE)
    assert dataset.headers == list(REQUIRED_COLUMNS)
    assert len(dataset) == 7
    assert dataset.rows[1] == ["01B", "Temporary fencing", "LF", "$1,250.00", "$300.00", "", "$1,550.00"]
    assert dataset.columns.total == 6


def test_headers_are_trimmed_and_order_independent(tmp_path: Path):
    path = tmp_path / "sheet.csv"
    path.write_text(
        " Total ,Item,UM , Material,Labor,Equipment,Description,Notes\n250,03C,LS,0,0,0,Permit,\n",
        encoding="utf-8",
    )
    dataset = load_dataset(path)
    assert dataset.headers[0] == "Total"
    assert dataset.columns.item == 1
    assert dataset.columns.description == 6
    assert dataset.rows == [["250", "03C", "LS", "0", "0", "0", "Permit", ""]]


def test_missing_columns_are_reported_together(tmp_path: Path):
    path = tmp_path / "sheet.csv"
    path.write_text("Item,Description,UM,Material\n01A,Foo,EA,1\n", encoding="utf-8")
    with pytest.raises(DatasetLoadError) as excinfo:
        load_dataset(path)
    message = str(excinfo.value)
    assert "Labor" in message
    assert "Equipment" in message
    assert "Total" in message


def test_resolve_columns_rejects_partial_header():
    with pytest.raises(DatasetLoadError):
        resolve_columns(["Item", "Description"])


def test_empty_dataset_fails(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_text("\n\n", encoding="utf-8")
    with pytest.raises(DatasetLoadError, match="empty"):
        load_dataset(path)


def test_unreadable_source_fails(tmp_path: Path):
    with pytest.raises(DatasetLoadError):
        load_dataset(tmp_path / "missing.csv")


def test_header_only_dataset_has_no_rows():
    dataset = load_dataset(io.StringIO(",".join(REQUIRED_COLUMNS) + "\n"))
    assert len(dataset) == 0
    assert dataset.headers == list(REQUIRED_COLUMNS)


def test_stream_source_skips_blank_lines():
    text = "Item,Description,UM,Material,Labor,Equipment,Total\n\n01A,Foo,EA,10,5,2,0\n\n"
    dataset = load_dataset(io.StringIO(text))
    assert dataset.rows == [["01A", "Foo", "EA", "10", "5", "2", "0"]]


def test_filter_rows():
    rows = [["01A", "Concrete Pour"], ["02B", "Steel"], ["03C", "precast concrete"]]
    assert filter_rows(rows, "") == rows
    assert filter_rows(rows, "   ") == rows
    assert filter_rows(rows, "CONCRETE") == [rows[0], rows[2]]
    assert filter_rows(rows, "02") == [rows[1]]
    assert filter_rows(rows, "zzz") == []


def test_filter_never_matches_header():
    dataset = load_dataset(SAMPLE)
    view = dataset.filtered("Description")
    assert len(view) == 0
    assert view.headers == dataset.headers


def test_filtered_view_and_find_item():
    dataset = load_dataset(SAMPLE)
    view = dataset.filtered("pct")
    assert [row[0] for row in view.rows] == ["02B", "02C"]
    assert view.find_item("02C") is not None
    assert view.find_item("01A") is None
    assert dataset.find_item("1") == ["1", "Misc. adjustment", "LS", "", "", "", "$75"]
