"""Tests for validators and the validator runner."""

from __future__ import annotations

import pytest

from pi.inquire.errors import CustomUserError
from pi.inquire.validator import (
    Invalid,
    Valid,
    exact_length,
    max_length,
    min_length,
    required,
    run_validators,
)


class TestBuiltinValidators:
    def test_required(self) -> None:
        assert required()("x") == Valid()
        assert required()("") == Invalid("A response is required.")

    def test_required_on_lists(self) -> None:
        assert required()([1]) == Valid()
        assert isinstance(required("pick one")([]), Invalid)

    def test_max_length(self) -> None:
        validate = max_length(3)
        assert validate("abc") == Valid()
        assert validate("abcd") == Invalid("The length of the response should be at most 3")

    def test_min_length(self) -> None:
        validate = min_length(2, "too short")
        assert validate("a") == Invalid("too short")
        assert validate("ab") == Valid()

    def test_exact_length(self) -> None:
        validate = exact_length(2)
        assert validate("ab") == Valid()
        assert validate("abc") == Invalid("The length of the response should be 2")

    def test_length_counts_graphemes(self) -> None:
        assert max_length(1)("\u2764\ufe0f") == Valid()


class TestRunValidators:
    def test_all_valid(self) -> None:
        assert run_validators([required(), max_length(5)], "abc") == Valid()

    def test_first_failure_wins(self) -> None:
        result = run_validators([min_length(5, "first"), max_length(1, "second")], "abc")
        assert result == Invalid("first")

    def test_no_validators(self) -> None:
        assert run_validators([], "") == Valid()

    def test_exception_is_wrapped(self) -> None:
        def broken(value: str) -> Valid:
            raise RuntimeError("boom")

        with pytest.raises(CustomUserError) as excinfo:
            run_validators([broken], "x")
        assert isinstance(excinfo.value.error, RuntimeError)
        assert "boom" in str(excinfo.value)
