"""Option wrapper returned by list prompts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ListOption(Generic[T]):
    """An option together with its index in the original option list."""

    index: int
    value: T

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CountedListOption(Generic[T]):
    """A list option paired with the count the user gave it."""

    count: int
    list_option: ListOption[T]

    @property
    def index(self) -> int:
        return self.list_option.index

    @property
    def value(self) -> T:
        return self.list_option.value
