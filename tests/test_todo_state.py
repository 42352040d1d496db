"""
Tests for TodoAppState: add/update/delete semantics, filter view, formatting.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from todoapp.domain.common.errors import ValidationError
from todoapp.domain.todos.models import UNSET, CreateTodoRequest, Todo, UpdateTodoRequest
from todoapp.domain.todos.service import TodoAppState


def _add(state: TodoAppState, text: str = "Buy milk", **kwargs) -> Todo:
    result = state.add_todo(CreateTodoRequest(text=text, **kwargs))
    assert result.is_success, result.error
    return result.get_value()


def test_add_update_delete_scenario(todo_state, clock):
    todo = _add(todo_state, "Buy milk", priority="medium")
    assert todo.id == 1
    assert todo.status == "pending"
    assert todo.created_at == todo.updated_at == clock.now()
    assert len(todo_state.todos) == 1

    clock.advance(minutes=5)
    result = todo_state.update_todo(1, UpdateTodoRequest(status="completed"))
    assert result.is_success
    updated = result.get_value()
    assert updated.text == "Buy milk"
    assert updated.priority == "medium"
    assert updated.status == "completed"
    assert updated.updated_at > todo.updated_at
    assert updated.created_at == todo.created_at

    assert todo_state.delete_todo(1).get_value() is True
    assert todo_state.todos == []
    again = todo_state.delete_todo(1)
    assert again.is_failure
    assert again.error == "Todo not found"


def test_add_trims_text(todo_state):
    assert _add(todo_state, "  Walk dog  ").text == "Walk dog"


def test_add_rejects_blank_text(todo_state):
    result = todo_state.add_todo(CreateTodoRequest(text="   "))
    assert result.is_failure
    assert todo_state.todos == []


def test_add_reports_first_invalid_field(todo_state):
    result = todo_state.add_todo(CreateTodoRequest(text="ok", priority="urgent", status="nope"))
    assert result.is_failure
    assert "status" in result.error


def test_add_with_due_date_string(todo_state):
    todo = _add(todo_state, due_date="2026-04-01")
    assert todo.due_date == datetime(2026, 4, 1, tzinfo=timezone.utc)


def test_add_with_bad_due_date_fails(todo_state):
    result = todo_state.add_todo(CreateTodoRequest(text="x", due_date="next week"))
    assert result.is_failure
    assert todo_state.todos == []


def test_add_downgrades_store_errors(todo_state, monkeypatch, caplog):
    def boom(fields):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(todo_state._repo, "create", boom)
    result = todo_state.add_todo(CreateTodoRequest(text="x"))

    assert result.is_failure
    assert result.error == "Failed to add todo"
    assert "Error adding todo" in caplog.text


def test_create_twice_gives_distinct_ids(todo_state):
    a = _add(todo_state, "same")
    b = _add(todo_state, "same")
    assert a.id != b.id


def test_update_missing_is_not_found(todo_state):
    result = todo_state.update_todo(7, UpdateTodoRequest(text="x"))
    assert result.is_failure
    assert result.error == "Todo not found"


def test_update_changes_only_supplied_fields(todo_state, clock):
    todo = _add(todo_state, "A", priority="low", due_date=date(2026, 5, 1))
    clock.advance(seconds=1)

    updated = todo_state.update_todo(todo.id, UpdateTodoRequest(priority="high")).get_value()

    assert updated.priority == "high"
    assert updated.text == "A"
    assert updated.status == "pending"
    assert updated.due_date == todo.due_date
    assert updated.updated_at >= todo.updated_at


def test_update_never_moves_updated_at_backwards(todo_state, clock):
    todo = _add(todo_state)
    clock.advance(hours=-1)
    updated = todo_state.update_todo(todo.id, UpdateTodoRequest(text="B")).get_value()
    assert updated.updated_at == todo.updated_at


def test_update_with_nothing_still_refreshes_updated_at(todo_state, clock):
    todo = _add(todo_state)
    later = clock.advance(minutes=1)
    updated = todo_state.update_todo(todo.id, UpdateTodoRequest()).get_value()
    assert updated.updated_at == later


def test_update_due_date_three_cases(todo_state):
    todo = _add(todo_state, due_date="2026-04-01T12:00:00+00:00")

    kept = todo_state.update_todo(todo.id, UpdateTodoRequest(text="still")).get_value()
    assert kept.due_date == todo.due_date

    moved = todo_state.update_todo(todo.id, UpdateTodoRequest(due_date=date(2026, 6, 2))).get_value()
    assert moved.due_date == datetime(2026, 6, 2, tzinfo=timezone.utc)

    cleared = todo_state.update_todo(todo.id, UpdateTodoRequest(due_date=None)).get_value()
    assert cleared.due_date is None


def test_update_from_dict_key_presence(todo_state):
    todo = _add(todo_state, due_date="2026-04-01")

    req = UpdateTodoRequest.from_dict({"status": "in-progress"})
    assert req.due_date is UNSET
    assert todo_state.update_todo(todo.id, req).get_value().due_date is not None

    req = UpdateTodoRequest.from_dict({"due_date": None})
    assert todo_state.update_todo(todo.id, req).get_value().due_date is None


def test_update_rejects_invalid_values_without_changing_anything(todo_state):
    todo = _add(todo_state)

    for req in (
        UpdateTodoRequest(status="done"),
        UpdateTodoRequest(priority="urgent"),
        UpdateTodoRequest(text=" "),
        UpdateTodoRequest(due_date=""),
    ):
        assert todo_state.update_todo(todo.id, req).is_failure

    assert todo_state.get_todo(todo.id) == todo


def test_delete_missing_keeps_count(todo_state):
    _add(todo_state)
    assert todo_state.delete_todo(99).is_failure
    assert todo_state.counts()["all"] == 1


def test_filter_is_a_live_view(todo_state):
    first = _add(todo_state, "one")
    second = _add(todo_state, "two")
    todo_state.update_todo(second.id, UpdateTodoRequest(status="completed"))

    todo_state.filter = "completed"
    assert [t.id for t in todo_state.todos] == [second.id]

    todo_state.update_todo(first.id, UpdateTodoRequest(status="completed"))
    assert [t.id for t in todo_state.todos] == [first.id, second.id]

    todo_state.filter = "pending"
    assert todo_state.todos == []

    todo_state.filter = "all"
    assert len(todo_state.todos) == 2


def test_invalid_filter_rejected(todo_state):
    with pytest.raises(ValueError):
        todo_state.filter = "done"
    assert todo_state.filter == "all"


def test_counts(todo_state):
    a = _add(todo_state, "a")
    _add(todo_state, "b")
    todo_state.update_todo(a.id, UpdateTodoRequest(status="in-progress"))

    assert todo_state.counts() == {"pending": 1, "in-progress": 1, "completed": 0, "all": 2}


def test_bulk_load_continues_ids(clock):
    now = clock.now()
    existing = [
        Todo(id=4, text="old", status="pending", priority="low", created_at=now, updated_at=now),
    ]
    state = TodoAppState(clock=clock, todos=existing)
    assert _add(state, "new").id == 5


def test_bulk_load_rejects_invalid_todo(clock):
    now = clock.now()
    broken = Todo(id=1, text="x", status="archived", priority="low", created_at=now, updated_at=now)
    with pytest.raises(ValidationError):
        TodoAppState(clock=clock, todos=[broken])


def test_bulk_load_rejects_naive_timestamps(clock):
    naive = datetime(2026, 3, 7, 9, 30)
    stored = Todo(id=1, text="x", status="pending", priority="low", created_at=naive, updated_at=naive)
    with pytest.raises(ValidationError):
        TodoAppState(clock=clock, todos=[stored])

    now = clock.now()
    naive_due = Todo(
        id=1, text="x", status="pending", priority="low", created_at=now, updated_at=now, due_date=naive
    )
    with pytest.raises(ValidationError):
        TodoAppState(clock=clock, todos=[naive_due])


def test_bulk_load_rejects_updated_before_created(clock):
    now = clock.now()
    stored = Todo(
        id=1, text="x", status="pending", priority="low", created_at=now, updated_at=now - timedelta(days=1)
    )
    with pytest.raises(ValidationError):
        TodoAppState(clock=clock, todos=[stored])


def test_long_text_is_accepted(todo_state):
    assert _add(todo_state, "x" * 600).text == "x" * 600


def test_format_todo_response(todo_state):
    with_due = _add(todo_state, due_date="2026-04-01T08:00:00+00:00")
    without_due = _add(todo_state, "no deadline")

    data = todo_state.format_todo_response(with_due)
    assert data["due_date"] == "2026-04-01T08:00:00+00:00"
    assert data["id"] == with_due.id
    assert data["created_at"] == with_due.created_at

    listed = todo_state.format_todo_list_response([with_due, without_due])
    assert [d["due_date"] for d in listed] == ["2026-04-01T08:00:00+00:00", None]
