"""In-memory food inventory with snapshot persistence."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from .db.storage import ITEMS_KEY
from .errors import InvalidDateError
from .models import FoodItem, parse_timestamp

if TYPE_CHECKING:
    from .db import LocalStorage

logger = logging.getLogger(__name__)


def _coerce_item(candidate: Any) -> FoodItem | None:
    if isinstance(candidate, FoodItem):
        return candidate
    if isinstance(candidate, dict):
        try:
            return FoodItem.from_dict(candidate)
        except (ValueError, TypeError, OverflowError):
            logger.debug("Dropping malformed item: %r", candidate)
    return None


def decode_snapshot(raw: str | None) -> list[FoodItem]:
    """Decode a stored item snapshot.

    Corrupt JSON, a non-array payload or malformed records never raise:
    bad records are dropped and the worst case is an empty list.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Stored inventory is not valid JSON, starting empty")
        return []
    if not isinstance(data, list):
        logger.warning("Stored inventory is not an array, starting empty")
        return []

    items: list[FoodItem] = []
    seen: set[str] = set()
    for record in data:
        item = _coerce_item(record)
        if item is None or item.id in seen:
            continue
        seen.add(item.id)
        items.append(item)
    return items


def encode_snapshot(items: Iterable[FoodItem]) -> str:
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


class InventoryStore:
    """Single source of truth for the food item collection.

    Items are kept most-recent-first. Every mutation writes the whole
    collection back to storage when a storage is attached.
    """

    def __init__(
        self,
        items: Iterable[FoodItem] = (),
        storage: LocalStorage | None = None,
    ) -> None:
        self._items: list[FoodItem] = list(items)
        self._storage = storage

    @classmethod
    def load(cls, storage: LocalStorage) -> InventoryStore:
        return cls(decode_snapshot(storage.get(ITEMS_KEY)), storage=storage)

    @property
    def items(self) -> tuple[FoodItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[FoodItem]:
        return iter(tuple(self._items))

    def get(self, item_id: str) -> FoodItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def names(self) -> list[str]:
        return [item.name for item in self._items if item.name]

    def add_items(self, new_items: Iterable[Any] | None) -> list[FoodItem]:
        """Prepend a batch of items, dropping entries that are not valid items.

        Returns:
            The items actually added, in batch order.
        """
        existing = {item.id for item in self._items}
        accepted: list[FoodItem] = []
        for candidate in new_items or ():
            item = _coerce_item(candidate)
            if item is None or item.id in existing:
                continue
            existing.add(item.id)
            accepted.append(item)

        if accepted:
            self._items = accepted + self._items
            self._persist()
        return accepted

    def mark_used(self, item_id: str, consume_all: bool = True) -> FoodItem | None:
        """Consume one unit of an item, or all of it.

        An item with one unit or fewer left is fully consumed either way.
        Unknown ids are ignored.
        """
        item = self.get(item_id)
        if item is None:
            return None
        if consume_all or item.current_quantity <= 1:
            item.is_used = True
            item.current_quantity = 0
        else:
            item.current_quantity -= 1
        self._persist()
        return item

    def update_expiry(self, item_id: str, new_date: Any) -> FoodItem | None:
        """Overwrite an item's expiry date.

        Raises:
            InvalidDateError: If ``new_date`` cannot be parsed. The old date
                is kept.
        """
        item = self.get(item_id)
        if item is None:
            return None
        try:
            parsed = parse_timestamp(new_date)
        except ValueError as e:
            raise InvalidDateError(f"invalid expiry date: {new_date!r}") from e
        item.expiry_date = parsed
        self._persist()
        return item

    def clear_all(self) -> None:
        self._items = []
        self._persist()

    def bulk_rename(self, mapping: Mapping[str, Any] | None) -> int:
        """Rename every item whose current name is a key of ``mapping``.

        Returns:
            Number of items renamed.
        """
        if not mapping:
            return 0
        renames: list[tuple[FoodItem, str]] = []
        for item in self._items:
            new_name = mapping.get(item.name)
            if isinstance(new_name, str) and new_name.strip():
                renames.append((item, new_name.strip()))

        for item, new_name in renames:
            item.name = new_name
        if renames:
            self._persist()
        return len(renames)

    def _persist(self) -> None:
        if self._storage is None:
            return
        self._storage.set(ITEMS_KEY, encode_snapshot(self._items))
