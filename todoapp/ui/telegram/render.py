"""
Message text for the todo list (HTML parse mode).

Pure functions: callers pass `now` so output does not depend on the wall clock.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Sequence

from aiogram import html

from todoapp.domain.todos.models import Todo
from todoapp.ui.telegram.texts import todos as texts

STATUS_LABELS: Dict[str, str] = {
    "pending": "Pending",
    "in-progress": "In Progress",
    "completed": "Completed",
}
FILTER_LABELS: Dict[str, str] = {"all": "All", **STATUS_LABELS}
PRIORITY_MARKS: Dict[str, str] = {"low": "▫️", "medium": "🔸", "high": "🔺"}

_INTERVALS = (
    ("year", 31536000),
    ("month", 2592000),
    ("week", 604800),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def format_date(dt: datetime) -> str:
    """e.g. 'Mar 7, 2026, 09:30 AM'"""
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def format_time_ago(dt: datetime, now: datetime) -> str:
    seconds = int((now - dt).total_seconds())
    for unit, size in _INTERVALS:
        n = seconds // size
        if n >= 1:
            return f"1 {unit} ago" if n == 1 else f"{n} {unit}s ago"
    return "just now"


def is_overdue(todo: Todo, now: datetime) -> bool:
    return todo.due_date is not None and todo.due_date < now and todo.status != "completed"


def render_todo(todo: Todo, now: datetime) -> str:
    title = html.quote(todo.text)
    if todo.status == "completed":
        title = html.strikethrough(title)

    meta = [todo.priority, STATUS_LABELS.get(todo.status, todo.status)]
    lines = [f"{PRIORITY_MARKS.get(todo.priority, '')} {html.bold(str(todo.id))}. {title}", " · ".join(meta)]

    if todo.due_date is not None:
        due = f"Due: {format_date(todo.due_date)}"
        if is_overdue(todo, now):
            due = html.bold(due + " (Overdue)")
        lines.append(due)

    lines.append(html.italic(f"Updated: {format_time_ago(todo.updated_at, now)}"))
    return "\n".join(lines)


def render_todos_text(todos: Sequence[Todo], current_filter: str, now: datetime) -> str:
    header = f"{texts.LIST_HEADER} ({FILTER_LABELS.get(current_filter, current_filter)})"
    if not todos:
        return f"{header}\n\n{texts.EMPTY_LIST}"
    return header + "\n\n" + "\n\n".join(render_todo(t, now) for t in todos)
