from __future__ import annotations

from typing import Callable, Generic, Iterable, List, TypeVar

S = TypeVar("S")
R = TypeVar("R")


class Mapper(Generic[S, R]):
    """Wraps a single mapping function so it can be applied to one item or many."""

    def __init__(self, mapping_fn: Callable[[S], R]) -> None:
        self._fn = mapping_fn

    def map(self, source: S) -> R:
        return self._fn(source)

    def map_array(self, sources: Iterable[S]) -> List[R]:
        return [self._fn(s) for s in sources]

    @classmethod
    def create(cls, mapping_fn: Callable[[S], R]) -> "Mapper[S, R]":
        return cls(mapping_fn)
