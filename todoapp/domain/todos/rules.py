from __future__ import annotations

from todoapp.domain.common.errors import ValidationError
from todoapp.domain.todos.models import PRIORITIES, STATUSES, is_todo_priority, is_todo_status


def validate_text(text: object) -> None:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Please enter a task.")


def validate_status(status: object) -> None:
    if not is_todo_status(status):
        raise ValidationError(f"Invalid status: {status!r}. Use one of: {', '.join(STATUSES)}.")


def validate_priority(priority: object) -> None:
    if not is_todo_priority(priority):
        raise ValidationError(f"Invalid priority: {priority!r}. Use one of: {', '.join(PRIORITIES)}.")
