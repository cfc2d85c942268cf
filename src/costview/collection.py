"""Session-owned list of collection items."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .aggregate import aggregate
from .dataset import ColumnIndex, Dataset
from .models import AggregateRow, CollectionItem
from .valuation import set_quantity, valuate_row

logger = logging.getLogger(__name__)

ChangeListener = Callable[["Collection"], None]


class Collection:
    """Items copied from the sheet, in the order they were added.

    Mutations (add, quantity edit, clear) are expected to come from one caller
    at a time. Listeners registered with :meth:`subscribe` are called after
    each mutation so a presenter can recompute the aggregate.
    """

    def __init__(self, columns: ColumnIndex, row_width: Optional[int] = None) -> None:
        self.columns = columns
        self.row_width = max(row_width or 0, columns.width)
        self._items: List[CollectionItem] = []
        self._listeners: List[ChangeListener] = []

    @classmethod
    def for_dataset(cls, dataset: Dataset) -> "Collection":
        return cls(dataset.columns, row_width=len(dataset.headers))

    @property
    def items(self) -> Tuple[CollectionItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CollectionItem]:
        return iter(tuple(self._items))

    def __getitem__(self, index: int) -> CollectionItem:
        return self._items[index]

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def add_row(self, row: Sequence[object]) -> Optional[CollectionItem]:
        """Valuate ``row`` and append it; rows shorter than the header are skipped."""

        if len(row) < self.row_width:
            logger.warning(
                "Skipping row with %s cells (expected %s): %s", len(row), self.row_width, list(row)
            )
            return None
        item = valuate_row(row, self.columns)
        self._items.append(item)
        logger.debug("Added %s (%s) to collection", item.item, item.um or "no unit")
        self._notify()
        return item

    def add_rows(self, rows: Iterable[Sequence[object]]) -> List[CollectionItem]:
        added: List[CollectionItem] = []
        for row in rows:
            item = self.add_row(row)
            if item is not None:
                added.append(item)
        return added

    def set_quantity(self, index: int, quantity: object) -> CollectionItem:
        """Replace the quantity of the item at ``index``.

        ``quantity`` may be a number or raw user text; text that does not parse
        becomes ``1.0``.
        """

        if not -len(self._items) <= index < len(self._items):
            raise IndexError(f"No collection item at position {index}")
        updated = set_quantity(self._items[index], quantity)
        self._items[index] = updated
        self._notify()
        return updated

    def clear(self) -> None:
        self._items.clear()
        self._notify()

    def report(self) -> Dict[str, AggregateRow]:
        """Aggregate rows recomputed from the current items."""

        return aggregate(self._items)
