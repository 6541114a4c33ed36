"""A pair of values whose order does not matter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, order=True, init=False)
class UnorderedPair(Generic[T]):
    """Two values stored smallest first, so (a, b) and (b, a) are the same pair."""

    a: T
    b: T

    def __init__(self, a: T, b: T) -> None:
        if not a < b:  # type: ignore[operator]
            a, b = b, a
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)

    @classmethod
    def from_tuple(cls, items: tuple[T, T]) -> UnorderedPair[T]:
        first, second = items
        return cls(first, second)

    def __contains__(self, item: Any) -> bool:
        return item == self.a or item == self.b

    def __iter__(self) -> Iterator[T]:
        yield self.a
        yield self.b

    def other(self, item: T) -> T:
        """Return the member of the pair that is not ``item``."""
        if item == self.a:
            return self.b
        if item == self.b:
            return self.a
        raise ValueError(f"{item!r} is not part of {self!r}")

    def __repr__(self) -> str:
        return f"UnorderedPair({self.a!r}, {self.b!r})"