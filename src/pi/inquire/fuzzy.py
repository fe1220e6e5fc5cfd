"""Fuzzy matching of filter text against option labels.

A query matches when all of its characters appear in the label in order,
not necessarily next to each other. Consecutive runs and matches at word
boundaries are rewarded, gaps and late matches are penalised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_WORD_BOUNDARY_RE = re.compile(r"[\s\-_./:]")
_LETTERS_DIGITS_RE = re.compile(r"^(?P<letters>[a-z]+)(?P<digits>[0-9]+)$")
_DIGITS_LETTERS_RE = re.compile(r"^(?P<digits>[0-9]+)(?P<letters>[a-z]+)$")

# Penalty applied to matches found only after swapping "abc12" into "12abc".
_SWAPPED_PENALTY = 5.0


@dataclass
class FuzzyMatch:
    """Result of a match; ``penalty`` is lower for better matches."""

    matches: bool
    penalty: float = 0.0


_NO_MATCH = FuzzyMatch(matches=False)


def _match_in_order(query: str, text: str) -> FuzzyMatch:
    if not query:
        return FuzzyMatch(matches=True)
    if len(query) > len(text):
        return _NO_MATCH

    query_index = 0
    penalty = 0.0
    previous = -1
    run = 0

    for i, ch in enumerate(text):
        if query_index >= len(query):
            break
        if ch != query[query_index]:
            continue

        if previous == i - 1:
            run += 1
            penalty -= run * 5
        else:
            run = 0
            if previous >= 0:
                penalty += (i - previous - 1) * 2

        if i == 0 or _WORD_BOUNDARY_RE.match(text[i - 1]):
            penalty -= 10

        penalty += i * 0.1
        previous = i
        query_index += 1

    if query_index < len(query):
        return _NO_MATCH
    return FuzzyMatch(matches=True, penalty=penalty)


def _swapped(query: str) -> str:
    m = _LETTERS_DIGITS_RE.match(query)
    if m:
        return m.group("digits") + m.group("letters")
    m = _DIGITS_LETTERS_RE.match(query)
    if m:
        return m.group("letters") + m.group("digits")
    return ""


def fuzzy_match(query: str, text: str) -> FuzzyMatch:
    """Case-insensitive in-order match of *query* against *text*."""
    query = query.lower()
    text = text.lower()

    primary = _match_in_order(query, text)
    if primary.matches:
        return primary

    swapped = _swapped(query)
    if not swapped:
        return primary
    second = _match_in_order(swapped, text)
    if not second.matches:
        return primary
    return FuzzyMatch(matches=True, penalty=second.penalty + _SWAPPED_PENALTY)


def fuzzy_score(query: str, text: str) -> int | None:
    """Score *text* against a space-separated *query*.

    Every token must match. Returns ``None`` on a miss, otherwise an integer
    where higher is better (the summed penalty negated, in tenths).
    """
    tokens = query.split()
    if not tokens:
        return 0

    total = 0.0
    for token in tokens:
        match = fuzzy_match(token, text)
        if not match.matches:
            return None
        total += match.penalty
    return -round(total * 10)
