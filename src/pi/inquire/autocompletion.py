"""Autocompletion interface for text prompts."""

from __future__ import annotations

from typing import Protocol, Sequence


class Autocomplete(Protocol):
    """Suggestion and completion provider consulted by the text prompt.

    ``get_suggestions`` is called after every content change.
    ``get_completion`` is called on Tab with the highlighted suggestion (or
    ``None``) and returns the replacement text, or ``None`` to do nothing.
    """

    def get_suggestions(self, text: str) -> Sequence[str]: ...

    def get_completion(self, text: str, highlighted: str | None) -> str | None: ...


class StaticAutocomplete:
    """Suggests entries of a fixed list that contain the typed text."""

    def __init__(self, options: Sequence[str], ignore_case: bool = True) -> None:
        self.options = list(options)
        self.ignore_case = ignore_case

    def get_suggestions(self, text: str) -> list[str]:
        needle = text.lower() if self.ignore_case else text
        return [
            option
            for option in self.options
            if needle in (option.lower() if self.ignore_case else option)
        ]

    def get_completion(self, text: str, highlighted: str | None) -> str | None:
        if highlighted is not None:
            return highlighted
        suggestions = self.get_suggestions(text)
        if len(suggestions) == 1:
            return suggestions[0]
        return None
