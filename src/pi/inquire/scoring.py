"""Scorers and the filtered view used by the select-family prompts."""

from __future__ import annotations

from typing import Callable, Generic, Sequence, TypeVar

from pi.inquire.fuzzy import fuzzy_score

T = TypeVar("T")

# (filter text, option, option string form, original index) -> score or None
Scorer = Callable[[str, T, str, int], "int | None"]


def fuzzy_scorer(filter_text: str, _option: object, string_value: str, _index: int) -> int | None:
    """Default scorer: case-insensitive fuzzy match, higher is better."""
    return fuzzy_score(filter_text, string_value)


def substring_scorer(filter_text: str, _option: object, string_value: str, _index: int) -> int | None:
    """Case-insensitive containment with a constant score."""
    if filter_text.lower() in string_value.lower():
        return 0
    return None


def adjust_cursor(cursor: int, view_len: int, reset_cursor: bool) -> int:
    """Cursor position after the filtered view changed."""
    if view_len == 0 or reset_cursor:
        return 0
    return min(cursor, view_len - 1)


class ScoredView(Generic[T]):
    """Original option indices currently eligible for display, best first.

    ``refresh`` re-scores every option; it returns ``True`` when the view
    changed so the caller can apply its cursor policy.
    """

    def __init__(
        self,
        options: Sequence[T],
        string_values: Sequence[str],
        scorer: Scorer[T] = fuzzy_scorer,
    ) -> None:
        self.options = options
        self.string_values = string_values
        self.scorer = scorer
        self.indices: list[int] = list(range(len(options)))

    def __len__(self) -> int:
        return len(self.indices)

    def __getitem__(self, position: int) -> int:
        return self.indices[position]

    def score(self, filter_text: str) -> list[int]:
        if not filter_text:
            return list(range(len(self.options)))

        scored: list[tuple[int, int]] = []
        for index, option in enumerate(self.options):
            value = self.scorer(filter_text, option, self.string_values[index], index)
            if value is not None:
                scored.append((index, value))
        # sort() is stable, ties keep the original order
        scored.sort(key=lambda item: item[1], reverse=True)
        return [index for index, _ in scored]

    def refresh(self, filter_text: str) -> bool:
        indices = self.score(filter_text)
        if indices == self.indices:
            return False
        self.indices = indices
        return True
