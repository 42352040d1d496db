from __future__ import annotations

import dataclasses
import logging
from datetime import tzinfo
from typing import Any, Callable, Dict, Iterable, List, Optional

from todoapp.domain.common.errors import ValidationError
from todoapp.domain.common.mapper import Mapper
from todoapp.domain.common.result import Result
from todoapp.domain.common.time import normalize_due_date, to_iso
from todoapp.domain.todos.models import (
    FILTERS,
    STATUSES,
    UNSET,
    CreateTodoRequest,
    Todo,
    TodoFilter,
    UpdateTodoRequest,
    is_todo_filter,
    is_valid_todo,
)
from todoapp.domain.todos.ports import Clock
from todoapp.domain.todos.rules import validate_priority, validate_status, validate_text
from todoapp.repos.base import RecordStore

logger = logging.getLogger(__name__)

TODO_NOT_FOUND = "Todo not found"


def _check(rule: Callable[[Any], None], value: Any) -> Result[None]:
    try:
        rule(value)
    except ValidationError as e:
        return Result.fail(str(e))
    return Result.ok()


class TodoAppState:
    """
    Todo business logic over an in-memory RecordStore. No aiogram.

    One instance per application session; the presentation layer only talks
    to it through these methods and re-renders from `todos` afterwards.
    """

    def __init__(self, clock: Clock, todos: Iterable[Todo] = ()) -> None:
        todos = list(todos)
        for todo in todos:
            if not is_valid_todo(todo):
                raise ValidationError(f"Invalid todo: {todo!r}")
        self._clock = clock
        self._repo: RecordStore[Todo] = RecordStore(Todo, todos)
        self._filter: TodoFilter = "all"
        self._response_mapper: Mapper[Todo, Dict[str, Any]] = Mapper.create(self.format_todo_response)

    # -------------------- view --------------------
    @property
    def filter(self) -> TodoFilter:
        return self._filter

    @filter.setter
    def filter(self, value: TodoFilter) -> None:
        if not is_todo_filter(value):
            raise ValueError(f"Invalid filter: {value!r}. Use one of: {', '.join(FILTERS)}.")
        self._filter = value

    @property
    def todos(self) -> List[Todo]:
        if self._filter == "all":
            return self._repo.get_all()
        wanted = self._filter
        return self._repo.query(lambda t: t.status == wanted)

    def get_todo(self, todo_id: int) -> Optional[Todo]:
        return self._repo.get_by_id(todo_id)

    def counts(self) -> Dict[str, int]:
        out = {status: 0 for status in STATUSES}
        for todo in self._repo.get_all():
            out[todo.status] += 1
        out["all"] = self._repo.count()
        return out

    # -------------------- commands --------------------
    def add_todo(self, req: CreateTodoRequest) -> Result[Todo]:
        checks = Result.combine(
            [
                _check(validate_text, req.text),
                _check(validate_status, req.status),
                _check(validate_priority, req.priority),
            ]
        )
        if checks.is_failure:
            return checks

        due_date = None
        if req.due_date is not None:
            try:
                due_date = normalize_due_date(req.due_date, self._tz())
            except ValueError as e:
                return Result.fail(str(e))

        try:
            now = self._clock.now()
            created = self._repo.create(
                {
                    "text": req.text.strip(),
                    "status": req.status,
                    "priority": req.priority,
                    "created_at": now,
                    "updated_at": now,
                    "due_date": due_date,
                }
            )
        except Exception:
            logger.error("Error adding todo", exc_info=True)
            return Result.fail("Failed to add todo")

        logger.debug("Todo %s added", created.id)
        return Result.ok(created)

    def update_todo(self, todo_id: int, req: UpdateTodoRequest) -> Result[Todo]:
        todo = self._repo.get_by_id(todo_id)
        if todo is None:
            return Result.fail(TODO_NOT_FOUND)

        checks: List[Result[None]] = []
        if req.text is not UNSET:
            checks.append(_check(validate_text, req.text))
        if req.status is not UNSET:
            checks.append(_check(validate_status, req.status))
        if req.priority is not UNSET:
            checks.append(_check(validate_priority, req.priority))
        combined = Result.combine(checks)
        if combined.is_failure:
            return combined

        now = self._clock.now()
        changes: Dict[str, Any] = {"updated_at": max(now, todo.updated_at)}

        if req.text is not UNSET:
            changes["text"] = req.text.strip()
        if req.status is not UNSET:
            changes["status"] = req.status
        if req.priority is not UNSET:
            changes["priority"] = req.priority

        if req.due_date is None:
            changes["due_date"] = None
        elif req.due_date is not UNSET:
            try:
                changes["due_date"] = normalize_due_date(req.due_date, self._tz())
            except ValueError as e:
                return Result.fail(str(e))

        updated = self._repo.update(todo_id, changes)
        if updated is None:
            return Result.fail("Failed to update todo")

        logger.debug("Todo %s updated: %s", todo_id, sorted(changes))
        return Result.ok(updated)

    def delete_todo(self, todo_id: int) -> Result[bool]:
        if not self._repo.delete(todo_id):
            return Result.fail(TODO_NOT_FOUND)
        logger.debug("Todo %s deleted", todo_id)
        return Result.ok(True)

    # -------------------- response formatting --------------------
    @staticmethod
    def format_todo_response(todo: Todo) -> Dict[str, Any]:
        """Plain dict of the todo; only due_date becomes an ISO string, the timestamps stay datetimes."""
        data = dataclasses.asdict(todo)
        data["due_date"] = to_iso(todo.due_date) if todo.due_date else None
        return data

    def format_todo_list_response(self, todos: Iterable[Todo]) -> List[Dict[str, Any]]:
        return self._response_mapper.map_array(todos)

    def _tz(self) -> tzinfo:
        return self._clock.now().tzinfo  # type: ignore[return-value]
