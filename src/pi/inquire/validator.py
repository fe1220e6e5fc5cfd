"""Validation results, built-in validators and the validator runner.

A validator is any callable taking the candidate answer and returning
``Valid()`` or ``Invalid(message)``. Raising an exception from a validator
aborts the prompt with :class:`~pi.inquire.errors.CustomUserError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sized, TypeVar, Union

import grapheme

from pi.inquire.errors import CustomUserError

T = TypeVar("T")


@dataclass(frozen=True)
class Valid:
    pass


@dataclass(frozen=True)
class Invalid:
    """Rejected input; ``message=None`` shows the render config's default message."""

    message: str | None = None


Validation = Union[Valid, Invalid]
Validator = Callable[[T], Validation]


def run_validators(validators: Iterable[Validator[T]], value: T) -> Validation:
    """Run *validators* in order and return the first non-valid result."""
    for validator in validators:
        try:
            result = validator(value)
        except Exception as exc:
            raise CustomUserError(exc) from exc
        if isinstance(result, Invalid):
            return result
    return Valid()


def _length(value: Any) -> int:
    if isinstance(value, str):
        return grapheme.length(value)
    if isinstance(value, Sized):
        return len(value)
    raise TypeError(f"cannot measure the length of {type(value).__name__}")


# ---------------------------------------------------------------------------
# Built-in validators
# ---------------------------------------------------------------------------


def required(message: str = "A response is required.") -> Validator[Any]:
    """Reject empty strings and empty selections."""

    def validate(value: Any) -> Validation:
        return Invalid(message) if _length(value) == 0 else Valid()

    return validate


def max_length(limit: int, message: str | None = None) -> Validator[Any]:
    message = message or f"The length of the response should be at most {limit}"

    def validate(value: Any) -> Validation:
        return Valid() if _length(value) <= limit else Invalid(message)

    return validate


def min_length(limit: int, message: str | None = None) -> Validator[Any]:
    message = message or f"The length of the response should be at least {limit}"

    def validate(value: Any) -> Validation:
        return Valid() if _length(value) >= limit else Invalid(message)

    return validate


def exact_length(length: int, message: str | None = None) -> Validator[Any]:
    message = message or f"The length of the response should be {length}"

    def validate(value: Any) -> Validation:
        return Valid() if _length(value) == length else Invalid(message)

    return validate
