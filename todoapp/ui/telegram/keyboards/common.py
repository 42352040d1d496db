from __future__ import annotations

from aiogram.types import InlineKeyboardMarkup, ReplyKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder, ReplyKeyboardBuilder

from todoapp.ui.telegram.callbacks import CANCEL

MENU_TODOS = "Todos"
MENU_ADD = "Add task"


def main_menu_kb() -> ReplyKeyboardMarkup:
    kb = ReplyKeyboardBuilder()
    kb.button(text=MENU_TODOS)
    kb.button(text=MENU_ADD)
    kb.adjust(2)
    return kb.as_markup(resize_keyboard=True, one_time_keyboard=False)


def yes_no_kb(prefix: str) -> InlineKeyboardMarkup:
    """
    callback_data will be:
      - f"{prefix}:yes"
      - f"{prefix}:no"
    """
    kb = InlineKeyboardBuilder()
    kb.button(text="Yes", callback_data=f"{prefix}:yes")
    kb.button(text="No", callback_data=f"{prefix}:no")
    kb.adjust(2)
    return kb.as_markup()


def cancel_kb(callback_data: str = CANCEL) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="Cancel", callback_data=callback_data)
    kb.adjust(1)
    return kb.as_markup()
