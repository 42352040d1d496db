from __future__ import annotations

from aiogram import Router
from aiogram.filters import CommandStart, Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from todoapp.domain.todos.ports import Clock
from todoapp.domain.todos.service import TodoAppState
from todoapp.ui.telegram.handlers.todos import send_todo_list
from todoapp.ui.telegram.keyboards.common import main_menu_kb

router = Router()


async def send_mainmenu(message: Message, todo_state: TodoAppState, clock: Clock) -> None:
    """
    Show main menu and immediately show the todo list.
    """
    await message.answer("Choose an action.", reply_markup=main_menu_kb())
    await send_todo_list(target_message=message, todo_state=todo_state, clock=clock)


@router.message(CommandStart())
async def start_cmd(message: Message, state: FSMContext, todo_state: TodoAppState, clock: Clock):
    await state.clear()
    await send_mainmenu(message, todo_state=todo_state, clock=clock)


@router.message(Command("menu"))
async def menu_cmd(message: Message, state: FSMContext, todo_state: TodoAppState, clock: Clock):
    await state.clear()
    await send_mainmenu(message, todo_state=todo_state, clock=clock)
