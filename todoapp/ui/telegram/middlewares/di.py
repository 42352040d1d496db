from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from todoapp.domain.todos.ports import Clock
from todoapp.domain.todos.service import TodoAppState


class DIMiddleware(BaseMiddleware):
    """
    Inject dependencies to handlers via `data` dict.

    Handlers can request args by name, e.g.
      async def handler(message: Message, todo_state: TodoAppState, clock: Clock): ...
    """

    def __init__(self, todo_state: TodoAppState, clock: Clock) -> None:
        self._todo_state = todo_state
        self._clock = clock

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        # keep names stable across the project
        data["todo_state"] = self._todo_state
        data["clock"] = self._clock

        return await handler(event, data)
