"""
Tests for RecordStore: identity assignment, validation on load, copy isolation.
"""
from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from todoapp.domain.common.errors import DuplicateIdentityError, InvalidIdentityError, ValidationError
from todoapp.repos import RecordStore


@dataclass
class Note:
    id: int
    title: str
    tags: list[str] = field(default_factory=list)


def _store(*ids: int) -> RecordStore[Note]:
    return RecordStore(Note, [Note(id=i, title=f"n{i}") for i in ids])


def test_empty_store_starts_at_one():
    store = RecordStore(Note)
    assert store.count() == 0
    assert store.create({"title": "first"}).id == 1


def test_loaded_items_are_returned_in_order_and_next_id_follows_max():
    items = [Note(id=3, title="c"), Note(id=7, title="g"), Note(id=5, title="e")]
    store = RecordStore(Note, items)

    assert store.get_all() == items
    assert store.create({"title": "next"}).id == 8


@pytest.mark.parametrize("bad_id", [0, -1])
def test_non_positive_id_rejected(bad_id):
    with pytest.raises(InvalidIdentityError):
        _store(1, bad_id)


def test_duplicate_id_rejected():
    with pytest.raises(DuplicateIdentityError) as exc_info:
        _store(1, 2, 1)
    assert isinstance(exc_info.value, ValidationError)


def test_non_dataclass_record_type_rejected():
    with pytest.raises(TypeError):
        RecordStore(dict)


def test_create_assigns_distinct_ids_for_identical_fields():
    store = RecordStore(Note)
    a = store.create({"title": "same"})
    b = store.create({"title": "same"})
    assert a.id != b.id
    assert store.count() == 2


def test_create_ignores_client_supplied_id():
    store = _store(1, 2)
    created = store.create({"id": 1, "title": "mine"})
    assert created.id == 3
    assert store.get_by_id(1).title == "n1"


def test_next_id_keeps_increasing_after_delete():
    store = _store(1, 2)
    assert store.delete(2) is True
    assert store.create({"title": "x"}).id == 3


def test_get_by_id_missing_is_none():
    assert _store(1).get_by_id(99) is None


def test_update_missing_is_none():
    store = _store(1)
    assert store.update(42, {"title": "x"}) is None
    assert store.get_all() == [Note(id=1, title="n1")]


def test_update_merges_only_given_fields():
    store = RecordStore(Note, [Note(id=1, title="a", tags=["x"])])
    updated = store.update(1, {"title": "b"})
    assert updated == Note(id=1, title="b", tags=["x"])
    assert store.get_by_id(1) == updated


def test_update_cannot_change_id():
    store = _store(1)
    updated = store.update(1, {"id": 9, "title": "t"})
    assert updated.id == 1
    assert store.exists(1) and not store.exists(9)


def test_delete_reports_removal():
    store = _store(1, 2)
    assert store.delete(5) is False
    assert store.count() == 2
    assert store.delete(1) is True
    assert store.count() == 1
    assert len(store) == 1
    assert store.delete(1) is False


def test_exists():
    store = _store(4)
    assert store.exists(4)
    assert not store.exists(5)


def test_query_keeps_insertion_order():
    store = _store(5, 1, 3)
    odd_big = store.query(lambda n: n.id >= 3)
    assert [n.id for n in odd_big] == [5, 3]


def test_mutating_returned_copies_does_not_touch_store():
    store = RecordStore(Note, [Note(id=1, title="a", tags=["x"])])

    item = store.get_by_id(1)
    item.title = "changed"
    item.tags.append("y")

    listed = store.get_all()
    listed[0].tags.clear()

    queried = store.query(lambda n: True)
    queried[0].title = "also changed"

    assert store.get_by_id(1) == Note(id=1, title="a", tags=["x"])


def test_input_objects_are_copied_on_the_way_in():
    original = Note(id=1, title="a", tags=["x"])
    store = RecordStore(Note, [original])
    original.tags.append("later")

    tags = ["t"]
    created = store.create({"title": "b", "tags": tags})
    tags.append("later")
    created.tags.append("later")

    assert store.get_by_id(1).tags == ["x"]
    assert store.get_by_id(created.id).tags == ["t"]


def test_mutation_rebinds_internal_list():
    store = _store(1)
    before = store._items
    store.create({"title": "x"})
    assert store._items is not before
