from __future__ import annotations

from typing import Mapping, Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from todoapp.domain.todos.models import FILTERS, PRIORITIES, STATUSES, Todo
from todoapp.ui.telegram.callbacks import (
    ADD_DUE_SKIP,
    ADD_START,
    CANCEL,
    PREFIX_ADD_PRIORITY,
    PREFIX_DELETE,
    PREFIX_DELETE_CONFIRM,
    PREFIX_EDIT,
    PREFIX_FILTER,
    PREFIX_STATUS,
    REFRESH,
)
from todoapp.ui.telegram.keyboards.common import yes_no_kb
from todoapp.ui.telegram.render import FILTER_LABELS

STATUS_ICONS = {"pending": "⏳", "in-progress": "▶️", "completed": "✅"}


def _label(text: str, max_len: int = 40) -> str:
    t = text.strip()
    return t[:max_len] + ("…" if len(t) > max_len else "")


def todos_list_kb(
    todos: Sequence[Todo],
    current_filter: str,
    counts: Mapping[str, int],
) -> InlineKeyboardMarkup:
    """
    Per todo: one row with the text (tap to edit), then a row with the other
    statuses and delete. Filter bar and add/refresh at the bottom.
    """
    kb = InlineKeyboardBuilder()

    for todo in todos:
        kb.row(
            InlineKeyboardButton(
                text=f"{STATUS_ICONS.get(todo.status, '')} {todo.id}. {_label(todo.text)}",
                callback_data=f"{PREFIX_EDIT}{todo.id}",
            )
        )
        actions = [
            InlineKeyboardButton(
                text=STATUS_ICONS[status],
                callback_data=f"{PREFIX_STATUS}{todo.id}:{status}",
            )
            for status in STATUSES
            if status != todo.status
        ]
        actions.append(InlineKeyboardButton(text="🗑️", callback_data=f"{PREFIX_DELETE}{todo.id}"))
        kb.row(*actions)

    filter_buttons = []
    for value in FILTERS:
        mark = "• " if value == current_filter else ""
        filter_buttons.append(
            InlineKeyboardButton(
                text=f"{mark}{FILTER_LABELS[value]} ({counts.get(value, 0)})",
                callback_data=f"{PREFIX_FILTER}{value}",
            )
        )
    kb.row(*filter_buttons[:2])
    kb.row(*filter_buttons[2:])

    kb.row(
        InlineKeyboardButton(text="➕ Add", callback_data=ADD_START),
        InlineKeyboardButton(text="🔄 Refresh", callback_data=REFRESH),
    )
    return kb.as_markup()


def priority_kb() -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    for priority in PRIORITIES:
        kb.button(text=priority.capitalize(), callback_data=f"{PREFIX_ADD_PRIORITY}{priority}")
    kb.button(text="Cancel", callback_data=CANCEL)
    kb.adjust(3, 1)
    return kb.as_markup()


def due_date_kb() -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="No due date", callback_data=ADD_DUE_SKIP)
    kb.button(text="Cancel", callback_data=CANCEL)
    kb.adjust(2)
    return kb.as_markup()


def confirm_delete_kb(todo_id: int) -> InlineKeyboardMarkup:
    return yes_no_kb(f"{PREFIX_DELETE_CONFIRM}{todo_id}")
