"""Loading and searching the fixed-schema cost sheet."""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, List, Sequence, Union

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: tuple[str, ...] = (
    "Item",
    "Description",
    "UM",
    "Material",
    "Labor",
    "Equipment",
    "Total",
)

SourceRow = List[str]
DatasetSource = Union[str, Path, IO[str]]


class DatasetLoadError(ValueError):
    """Raised when a dataset cannot be used at all (empty, unreadable, bad header)."""


@dataclass(frozen=True)
class ColumnIndex:
    """Positions of the required columns, resolved once per load."""

    item: int
    description: int
    um: int
    material: int
    labor: int
    equipment: int
    total: int

    @property
    def width(self) -> int:
        """Minimum row length needed to read every required cell."""

        return max(self.item, self.description, self.um, self.material, self.labor, self.equipment, self.total) + 1


def resolve_columns(headers: Sequence[str]) -> ColumnIndex:
    """Map the required column names to their positions in ``headers``.

    Header cells are compared after trimming whitespace. When several names
    are absent a single :class:`DatasetLoadError` lists all of them.
    """

    trimmed = [str(h).strip() for h in headers]
    positions = {}
    missing = []
    for name in REQUIRED_COLUMNS:
        if name in trimmed:
            positions[name.lower()] = trimmed.index(name)
        else:
            missing.append(name)
    if missing:
        raise DatasetLoadError(
            f"Missing one of [{','.join(REQUIRED_COLUMNS)}] in CSV headers: {', '.join(missing)}"
        )
    return ColumnIndex(**positions)


def filter_rows(rows: Iterable[SourceRow], query: str) -> List[SourceRow]:
    """Return the rows with any cell containing ``query`` (case-insensitive).

    A blank query returns every row. ``rows`` must not include the header.
    """

    all_rows = list(rows)
    if not query or not query.strip():
        return all_rows
    needle = query.lower()
    return [row for row in all_rows if any(needle in str(cell).lower() for cell in row)]


@dataclass(frozen=True)
class Dataset:
    """Parsed sheet: trimmed header, data rows and resolved column positions."""

    headers: List[str]
    rows: List[SourceRow]
    columns: ColumnIndex
    source: str = ""
    query: str = field(default="", compare=False)

    def __len__(self) -> int:
        return len(self.rows)

    def filtered(self, query: str) -> "Dataset":
        """Return a dataset with the same header and only the rows matching ``query``."""

        return Dataset(
            headers=self.headers,
            rows=filter_rows(self.rows, query),
            columns=self.columns,
            source=self.source,
            query=query,
        )

    def find_item(self, code: str) -> SourceRow | None:
        """Return the first row whose ``Item`` cell equals ``code``."""

        for row in self.rows:
            if len(row) > self.columns.item and row[self.columns.item].strip() == code:
                return row
        return None


def _read_text(source: DatasetSource, encoding: str) -> tuple[str, str]:
    if hasattr(source, "read"):
        label = str(getattr(source, "name", "<stream>"))
        try:
            return source.read(), label  # type: ignore[union-attr]
        except (OSError, UnicodeDecodeError) as exc:
            raise DatasetLoadError(f"Unable to read {label}: {exc}") from exc
    path = Path(source).expanduser()
    try:
        return path.read_text(encoding=encoding), str(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(f"Unable to read {path}: {exc}") from exc


def load_dataset(source: DatasetSource, encoding: str = "utf-8-sig") -> Dataset:
    """Parse a delimited cost sheet and validate its header.

    ``source`` is a path or an open text stream. Blank lines are skipped. The
    load is all-or-nothing: any failure raises :class:`DatasetLoadError`.
    """

    text, label = _read_text(source, encoding)
    try:
        lines = [row for row in csv.reader(io.StringIO(text, newline="")) if row]
    except csv.Error as exc:
        raise DatasetLoadError(f"Malformed CSV in {label}: {exc}") from exc
    if not lines:
        raise DatasetLoadError("CSV is empty!")

    headers = [cell.strip() for cell in lines[0]]
    columns = resolve_columns(headers)
    rows = lines[1:]
    logger.debug("Loaded %s data rows from %s", len(rows), label)
    return Dataset(headers=headers, rows=rows, columns=columns, source=label)
