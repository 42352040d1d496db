from __future__ import annotations

import asyncio
import logging
import os

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import ExceptionTypeFilter
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import ErrorEvent

from todoapp.config import load_settings
from todoapp.domain.todos.service import TodoAppState
from todoapp.infra.clock.system_clock import SystemClock
from todoapp.ui.telegram.handlers import router
from todoapp.ui.telegram.middlewares.auth import OwnerOnlyMiddleware
from todoapp.ui.telegram.middlewares.di import DIMiddleware

logger = logging.getLogger(__name__)


def build_dispatcher(todo_state: TodoAppState, clock: SystemClock, owner_id: int) -> Dispatcher:
    dp = Dispatcher(storage=MemoryStorage())

    # --- middlewares ---
    dp.message.middleware(OwnerOnlyMiddleware(owner_id))
    dp.callback_query.middleware(OwnerOnlyMiddleware(owner_id))

    dp.message.middleware(DIMiddleware(todo_state, clock))
    dp.callback_query.middleware(DIMiddleware(todo_state, clock))

    # --- routers ---
    dp.include_router(router)

    @dp.error(ExceptionTypeFilter(TelegramBadRequest))
    async def handle_old_callback_query(event: ErrorEvent) -> None:
        """Ignore TelegramBadRequest for old/invalid callback queries (e.g. after bot restart)."""
        msg = str(event.exception).lower()
        if "query is too old" in msg or "query id is invalid" in msg or "response timeout expired" in msg:
            logger.debug("Ignoring old/invalid callback query: %s", event.exception)
            return
        raise event.exception

    return dp


async def main() -> None:
    """
    Main entry point for the Telegram bot.

    All todos live in this process only; they are gone after a restart.
    Only run ONE instance at a time, otherwise Telegram answers polling with
    TelegramConflictError.
    """
    pid = os.getpid()
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s'
    )

    logger.info("=" * 60)
    logger.info(f"Bot starting - PID: {pid}")
    logger.info("=" * 60)

    clock = SystemClock(settings.timezone)
    todo_state = TodoAppState(clock=clock)

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = build_dispatcher(todo_state, clock, settings.owner_telegram_id)

    try:
        logger.info(f"Starting polling - PID: {pid}")
        await dp.start_polling(bot)
    except Exception:
        logger.error(f"Bot crashed - PID: {pid}", exc_info=True)
        raise
    finally:
        await bot.session.close()
        logger.info(f"Bot shutdown complete - PID: {pid}")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")


if __name__ == "__main__":
    run()
