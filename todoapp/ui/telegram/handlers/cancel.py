from __future__ import annotations

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery

from todoapp.ui.telegram.callbacks import CANCEL
from todoapp.ui.telegram.keyboards.common import main_menu_kb
from todoapp.ui.telegram.texts import todos as texts

router = Router()

CANCEL_WORDS = {"cancel", "stop"}


async def go_to_main_menu(message: Message, state: FSMContext, text: str = texts.CANCELLED) -> None:
    await state.clear()
    await message.answer(text, reply_markup=main_menu_kb())


@router.message(Command("cancel"))
async def cancel_cmd(message: Message, state: FSMContext):
    await go_to_main_menu(message, state)


@router.message(F.text.casefold().in_(CANCEL_WORDS))
async def cancel_text(message: Message, state: FSMContext):
    await go_to_main_menu(message, state)


@router.callback_query(F.data == CANCEL)
async def cancel_cb(cb: CallbackQuery, state: FSMContext):
    await cb.answer()
    await go_to_main_menu(cb.message, state)
