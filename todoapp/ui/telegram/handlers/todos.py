"""
Todo list handlers.

ROUTER MAP:
- /todo, "Todos", td:refresh - show the list
- /add [text], "Add task", td:add - add (quick or FSM: text -> priority -> due date)
- td:st:<id>:<status> - change status
- td:edit:<id> - edit text (FSM)
- td:del:<id> -> td:delc:<id>:yes|no - delete with confirmation
- td:f:<filter> - change the visible filter
"""
from __future__ import annotations

import logging
from typing import Optional

from aiogram import F, Router, html
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from todoapp.domain.todos.models import CreateTodoRequest, UpdateTodoRequest, is_todo_filter, is_todo_priority
from todoapp.domain.todos.ports import Clock
from todoapp.domain.todos.service import TodoAppState
from todoapp.ui.telegram.callbacks import (
    ADD_DUE_SKIP,
    ADD_START,
    PREFIX_ADD_PRIORITY,
    PREFIX_DELETE,
    PREFIX_DELETE_CONFIRM,
    PREFIX_EDIT,
    PREFIX_FILTER,
    PREFIX_STATUS,
    REFRESH,
    parse_callback,
)
from todoapp.ui.telegram.keyboards.common import MENU_ADD, MENU_TODOS, cancel_kb, main_menu_kb
from todoapp.ui.telegram.keyboards.todos import confirm_delete_kb, due_date_kb, priority_kb, todos_list_kb
from todoapp.ui.telegram.render import render_todos_text
from todoapp.ui.telegram.states.todos import TodosFlow
from todoapp.ui.telegram.texts import todos as texts
from todoapp.utils import command_args, parse_int_safe

logger = logging.getLogger(__name__)

router = Router()


async def send_todo_list(
    *,
    target_message: Message,
    todo_state: TodoAppState,
    clock: Clock,
    prefer_edit: bool = False,
) -> None:
    """
    prefer_edit=True: edit target_message in place (callback UX).
    prefer_edit=False: send a new list message (command / add UX).
    """
    todos = todo_state.todos
    text = render_todos_text(todos, todo_state.filter, clock.now())
    markup = todos_list_kb(todos, todo_state.filter, todo_state.counts())

    if prefer_edit:
        try:
            await target_message.edit_text(text, reply_markup=markup)
            return
        except TelegramBadRequest as e:
            # "message is not modified" or the message is too old to edit
            logger.debug("List edit failed, sending a new message: %s", e)
    await target_message.answer(text, reply_markup=markup)


def _callback_id(cb: CallbackQuery, prefix: str) -> Optional[int]:
    return parse_int_safe((cb.data or "")[len(prefix):].split(":")[0])


# -------------------- list --------------------
@router.message(Command(commands=["todo", "todos", "list"]))
@router.message(F.text == MENU_TODOS)
async def td_list(message: Message, state: FSMContext, todo_state: TodoAppState, clock: Clock):
    await state.clear()
    await send_todo_list(target_message=message, todo_state=todo_state, clock=clock)


@router.callback_query(F.data == REFRESH)
async def td_refresh(cb: CallbackQuery, todo_state: TodoAppState, clock: Clock):
    await cb.answer()
    await send_todo_list(target_message=cb.message, todo_state=todo_state, clock=clock, prefer_edit=True)


@router.callback_query(F.data.startswith(PREFIX_FILTER))
async def td_filter(cb: CallbackQuery, todo_state: TodoAppState, clock: Clock):
    value = (cb.data or "")[len(PREFIX_FILTER):]
    if not is_todo_filter(value):
        await cb.answer(texts.STALE_BUTTON)
        return

    todo_state.filter = value
    await cb.answer()
    await send_todo_list(target_message=cb.message, todo_state=todo_state, clock=clock, prefer_edit=True)


# -------------------- add --------------------
async def _finish_add(
    message: Message,
    state: FSMContext,
    todo_state: TodoAppState,
    clock: Clock,
    due_date: Optional[str],
) -> None:
    data = await state.get_data()
    result = todo_state.add_todo(
        CreateTodoRequest(
            text=data.get("add_text", ""),
            priority=data.get("add_priority", "medium"),
            due_date=due_date,
        )
    )
    if result.is_failure:
        # stay in the due date step so the user can retry
        await message.answer(html.quote(result.error or texts.FAILED_ADD), reply_markup=due_date_kb())
        return

    await state.clear()
    await message.answer(texts.ADDED, reply_markup=main_menu_kb())
    await send_todo_list(target_message=message, todo_state=todo_state, clock=clock)


@router.message(Command("add"))
async def td_add_cmd(message: Message, state: FSMContext, todo_state: TodoAppState, clock: Clock):
    args = command_args(message.text)

    # /add <text> -> add directly with default priority
    if args:
        result = todo_state.add_todo(CreateTodoRequest(text=args))
        if result.is_failure:
            await message.answer(html.quote(result.error or texts.FAILED_ADD), reply_markup=main_menu_kb())
            return
        await state.clear()
        await message.answer(texts.ADDED, reply_markup=main_menu_kb())
        await send_todo_list(target_message=message, todo_state=todo_state, clock=clock)
        return

    # /add -> FSM
    await state.set_state(TodosFlow.add_text)
    await message.answer(texts.ASK_TEXT, reply_markup=cancel_kb())


@router.message(F.text == MENU_ADD)
async def td_add_menu(message: Message, state: FSMContext):
    await state.set_state(TodosFlow.add_text)
    await message.answer(texts.ASK_TEXT, reply_markup=cancel_kb())


@router.callback_query(F.data == ADD_START)
async def td_add_cb(cb: CallbackQuery, state: FSMContext):
    await cb.answer()
    await state.set_state(TodosFlow.add_text)
    await cb.message.answer(texts.ASK_TEXT, reply_markup=cancel_kb())


@router.message(TodosFlow.add_text)
async def td_add_text(message: Message, state: FSMContext):
    text = (message.text or "").strip()
    if not text:
        await message.answer("Please enter a task.", reply_markup=cancel_kb())
        return

    await state.update_data(add_text=text)
    await state.set_state(TodosFlow.add_priority)
    await message.answer(texts.ASK_PRIORITY, reply_markup=priority_kb())


@router.callback_query(TodosFlow.add_priority, F.data.startswith(PREFIX_ADD_PRIORITY))
async def td_add_priority(cb: CallbackQuery, state: FSMContext):
    priority = (cb.data or "")[len(PREFIX_ADD_PRIORITY):]
    if not is_todo_priority(priority):
        await cb.answer(texts.STALE_BUTTON)
        return

    await cb.answer()
    await state.update_data(add_priority=priority)
    await state.set_state(TodosFlow.add_due_date)
    await cb.message.answer(texts.ASK_DUE_DATE, reply_markup=due_date_kb())


@router.message(TodosFlow.add_due_date)
async def td_add_due_date(message: Message, state: FSMContext, todo_state: TodoAppState, clock: Clock):
    await _finish_add(message, state, todo_state, clock, due_date=(message.text or "").strip())


@router.callback_query(TodosFlow.add_due_date, F.data == ADD_DUE_SKIP)
async def td_add_due_skip(cb: CallbackQuery, state: FSMContext, todo_state: TodoAppState, clock: Clock):
    await cb.answer()
    await _finish_add(cb.message, state, todo_state, clock, due_date=None)


# -------------------- status --------------------
@router.callback_query(F.data.startswith(PREFIX_STATUS))
async def td_status(cb: CallbackQuery, todo_state: TodoAppState, clock: Clock):
    parts = parse_callback(cb.data or "", expected_parts=4)
    todo_id = parse_int_safe(parts[2]) if parts else None
    if parts is None or todo_id is None:
        await cb.answer(texts.STALE_BUTTON)
        return

    result = todo_state.update_todo(todo_id, UpdateTodoRequest(status=parts[3]))
    if result.is_success:
        await cb.answer(texts.UPDATED)
    else:
        await cb.answer(result.error or texts.FAILED_UPDATE, show_alert=True)

    # re-render either way so the buttons match the stored status
    await send_todo_list(target_message=cb.message, todo_state=todo_state, clock=clock, prefer_edit=True)


# -------------------- edit text --------------------
@router.callback_query(F.data.startswith(PREFIX_EDIT))
async def td_edit(cb: CallbackQuery, state: FSMContext, todo_state: TodoAppState):
    todo_id = _callback_id(cb, PREFIX_EDIT)
    todo = todo_state.get_todo(todo_id) if todo_id is not None else None
    if todo is None:
        await cb.answer(texts.STALE_BUTTON)
        return

    await cb.answer()
    await state.update_data(edit_todo_id=todo_id)
    await state.set_state(TodosFlow.edit_text)
    await cb.message.answer(f"{texts.ASK_NEW_TEXT}\n\nNow: {html.quote(todo.text)}", reply_markup=cancel_kb())


@router.message(TodosFlow.edit_text)
async def td_edit_text(message: Message, state: FSMContext, todo_state: TodoAppState, clock: Clock):
    data = await state.get_data()
    todo_id = data.get("edit_todo_id")
    if todo_id is None:
        await state.clear()
        await message.answer(texts.EDIT_ABORTED, reply_markup=main_menu_kb())
        return

    result = todo_state.update_todo(todo_id, UpdateTodoRequest(text=message.text or ""))
    if result.is_failure:
        if todo_state.get_todo(todo_id) is None:
            await state.clear()
            await message.answer(html.quote(result.error or texts.FAILED_UPDATE), reply_markup=main_menu_kb())
            return
        await message.answer(html.quote(result.error or texts.FAILED_UPDATE), reply_markup=cancel_kb())
        return

    await state.clear()
    await message.answer(texts.UPDATED, reply_markup=main_menu_kb())
    await send_todo_list(target_message=message, todo_state=todo_state, clock=clock)


# -------------------- delete --------------------
@router.callback_query(F.data.startswith(PREFIX_DELETE))
async def td_delete(cb: CallbackQuery, todo_state: TodoAppState):
    todo_id = _callback_id(cb, PREFIX_DELETE)
    if todo_id is None or not todo_state.get_todo(todo_id):
        await cb.answer(texts.STALE_BUTTON)
        return

    await cb.answer()
    await cb.message.answer(texts.ASK_DELETE_CONFIRM, reply_markup=confirm_delete_kb(todo_id))


@router.callback_query(F.data.startswith(PREFIX_DELETE_CONFIRM))
async def td_delete_confirm(cb: CallbackQuery, todo_state: TodoAppState, clock: Clock):
    parts = parse_callback(cb.data or "", expected_parts=4)
    todo_id = parse_int_safe(parts[2]) if parts else None
    if parts is None or todo_id is None:
        await cb.answer(texts.STALE_BUTTON)
        return

    if parts[3] != "yes":
        await cb.answer(texts.CANCELLED)
        await send_todo_list(target_message=cb.message, todo_state=todo_state, clock=clock, prefer_edit=True)
        return

    result = todo_state.delete_todo(todo_id)
    if result.is_success:
        await cb.answer(texts.DELETED)
    else:
        await cb.answer(result.error or texts.FAILED_DELETE, show_alert=True)
    await send_todo_list(target_message=cb.message, todo_state=todo_state, clock=clock, prefer_edit=True)
