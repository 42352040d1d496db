from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from todoapp.domain.todos.ports import Clock
from todoapp.domain.todos.service import TodoAppState


class FakeClock(Clock):
    """Returns a fixed time; `advance()` moves it forward."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 3, 7, 9, 30, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def todo_state(clock: FakeClock) -> TodoAppState:
    return TodoAppState(clock=clock)
