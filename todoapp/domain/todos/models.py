from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal, Mapping, Optional, Union

from todoapp.domain.common.time import ensure_aware

TodoStatus = Literal["pending", "in-progress", "completed"]
TodoPriority = Literal["low", "medium", "high"]
TodoFilter = Union[Literal["all"], TodoStatus]

STATUSES: tuple[str, ...] = ("pending", "in-progress", "completed")
PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
FILTERS: tuple[str, ...] = ("all",) + STATUSES

DEFAULT_STATUS = "pending"
DEFAULT_PRIORITY = "medium"


class _Unset:
    """Marks a field that was not given in a partial update."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Todo:
    id: int
    text: str
    status: TodoStatus
    priority: TodoPriority
    created_at: datetime
    updated_at: datetime
    due_date: Optional[datetime] = None


@dataclass(frozen=True)
class CreateTodoRequest:
    text: str
    priority: TodoPriority = DEFAULT_PRIORITY
    status: TodoStatus = DEFAULT_STATUS
    due_date: Optional[Union[datetime, date, str]] = None


@dataclass(frozen=True)
class UpdateTodoRequest:
    # UNSET = leave the field alone; for due_date, None clears it
    text: Any = UNSET
    status: Any = UNSET
    priority: Any = UNSET
    due_date: Any = UNSET

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UpdateTodoRequest":
        """Key presence decides what is updated; unknown keys are ignored."""
        return cls(
            text=data["text"] if "text" in data else UNSET,
            status=data["status"] if "status" in data else UNSET,
            priority=data["priority"] if "priority" in data else UNSET,
            due_date=data["due_date"] if "due_date" in data else UNSET,
        )


def is_todo_status(value: object) -> bool:
    return isinstance(value, str) and value in STATUSES


def is_todo_priority(value: object) -> bool:
    return isinstance(value, str) and value in PRIORITIES


def is_todo_filter(value: object) -> bool:
    return isinstance(value, str) and value in FILTERS


def _is_aware(value: object) -> bool:
    if not isinstance(value, datetime):
        return False
    try:
        ensure_aware(value)
    except ValueError:
        return False
    return True


def is_valid_todo(obj: object) -> bool:
    """Shape check for stored todos: aware timestamps, created_at <= updated_at."""
    if not isinstance(obj, Todo):
        return False
    return (
        isinstance(obj.id, int)
        and not isinstance(obj.id, bool)
        and isinstance(obj.text, str)
        and is_todo_status(obj.status)
        and is_todo_priority(obj.priority)
        and _is_aware(obj.created_at)
        and _is_aware(obj.updated_at)
        and obj.created_at <= obj.updated_at
        and (obj.due_date is None or _is_aware(obj.due_date))
    )
