# -*- coding: utf-8 -*-
"""Generic in-memory repository keyed by a positive integer id."""
from __future__ import annotations

import copy
import dataclasses
from typing import Any, Callable, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from todoapp.domain.common.errors import DuplicateIdentityError, InvalidIdentityError

T = TypeVar("T")


class RecordStore(Generic[T]):
    """
    Holds dataclass records that carry an integer `id`.

    Records are deep-copied on the way in and on the way out, so callers never
    hold a reference into the store. Every mutation rebinds `_items` as a whole.
    """

    def __init__(self, record_type: Type[T], items: Iterable[T] = ()) -> None:
        if not dataclasses.is_dataclass(record_type):
            raise TypeError(f"{record_type.__name__} is not a dataclass")
        self._record_type = record_type

        seen: set[int] = set()
        loaded: List[T] = []
        for item in items:
            item_id = getattr(item, "id")
            if item_id <= 0:
                raise InvalidIdentityError(f"Invalid ID: {item_id}. ID must be a positive number")
            if item_id in seen:
                raise DuplicateIdentityError(f"Duplicate ID found: {item_id}")
            seen.add(item_id)
            loaded.append(copy.deepcopy(item))

        self._items: List[T] = loaded
        self._next_id: int = max(seen) + 1 if seen else 1

    # -------------------- queries --------------------
    def get_all(self) -> List[T]:
        return [copy.deepcopy(item) for item in self._items]

    def get_by_id(self, item_id: int) -> Optional[T]:
        item = self._find(item_id)
        return copy.deepcopy(item) if item is not None else None

    def exists(self, item_id: int) -> bool:
        return self._find(item_id) is not None

    def count(self) -> int:
        return len(self._items)

    def query(self, predicate: Callable[[T], bool]) -> List[T]:
        return [item for item in self.get_all() if predicate(item)]

    # -------------------- mutations --------------------
    def create(self, fields: Mapping[str, Any]) -> T:
        """Store a new record built from `fields`; the id is always assigned here."""
        values = {k: copy.deepcopy(v) for k, v in fields.items() if k != "id"}
        new_item = self._record_type(id=self._next_id, **values)
        self._next_id += 1
        self._items = [*self._items, new_item]
        return copy.deepcopy(new_item)

    def update(self, item_id: int, changes: Mapping[str, Any]) -> Optional[T]:
        """Merge only the keys present in `changes`. None if no such record."""
        index = self._index_of(item_id)
        if index is None:
            return None

        values = {k: copy.deepcopy(v) for k, v in changes.items() if k != "id"}
        updated = dataclasses.replace(self._items[index], **values)

        items = list(self._items)
        items[index] = updated
        self._items = items
        return copy.deepcopy(updated)

    def delete(self, item_id: int) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if getattr(item, "id") != item_id]
        return len(self._items) < before

    # -------------------- helpers --------------------
    def _index_of(self, item_id: int) -> Optional[int]:
        for i, item in enumerate(self._items):
            if getattr(item, "id") == item_id:
                return i
        return None

    def _find(self, item_id: int) -> Optional[T]:
        index = self._index_of(item_id)
        return self._items[index] if index is not None else None

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"RecordStore({self._record_type.__name__}, count={len(self._items)})"
