from __future__ import annotations

from typing import Any, Generic, Iterable, Optional, TypeVar

from todoapp.domain.common.errors import InvalidStateError

T = TypeVar("T")


class Result(Generic[T]):
    """
    Outcome of an operation that may fail for expected reasons.

    Exactly one of: success carrying an optional value, or failure carrying
    a non-empty error message. Build through `ok` / `fail`.
    """

    __slots__ = ("_success", "_error", "_value")

    def __init__(self, is_success: bool, error: Optional[str] = None, value: Optional[T] = None) -> None:
        if is_success and error:
            raise InvalidStateError("A successful result cannot contain an error.")
        if not is_success and not error:
            raise InvalidStateError("A failing result needs to contain an error message.")
        if not is_success and value is not None:
            raise InvalidStateError("A failing result cannot carry a value.")

        self._success = is_success
        self._error = error
        self._value = value

    @property
    def is_success(self) -> bool:
        return self._success

    @property
    def is_failure(self) -> bool:
        return not self._success

    @property
    def error(self) -> Optional[str]:
        return self._error

    def get_value(self) -> T:
        if not self._success:
            raise InvalidStateError("Can't get the value of a failed result.")
        return self._value  # type: ignore[return-value]

    @staticmethod
    def ok(value: Optional[T] = None) -> "Result[T]":
        return Result(True, None, value)

    @staticmethod
    def fail(error: str) -> "Result[Any]":
        return Result(False, error)

    @staticmethod
    def combine(results: Iterable["Result[Any]"]) -> "Result[Any]":
        for result in results:
            if result.is_failure:
                return result
        return Result.ok()

    def __repr__(self) -> str:
        if self._success:
            return f"Result.ok({self._value!r})"
        return f"Result.fail({self._error!r})"
