"""Tests for built-in scalar coercion."""

from __future__ import annotations

import math

import pytest

from gqltypes import ID, Boolean, BooleanArg, Float, FloatArg, IDArg, Int, IntArg, String
from gqltypes.domain.errors import CoercionError
from gqltypes.domain.kinds import Scalar
from gqltypes.domain.scalars import (
    BUILTIN_SCALARS,
    MAX_INT,
    MIN_INT,
    is_builtin_scalar,
    parse_boolean,
    parse_float,
    parse_int,
)


class TestOutputCoercion:
    @pytest.mark.parametrize(
        ("scalar", "value", "expected"),
        [
            (Int, 7, 7),
            (Int, 3.0, 3),
            (Float, 2, 2.0),
            (String, "x", "x"),
            (Boolean, False, False),
            (ID, 42, "42"),
            (ID, "abc", "abc"),
        ],
    )
    def test_accepts(self, scalar, value, expected) -> None:  # type: ignore[no-untyped-def]
        assert scalar.serialize(value) == expected

    @pytest.mark.parametrize(
        ("scalar", "value"),
        [
            (Int, True),
            (Int, 1.5),
            (Int, MAX_INT + 1),
            (Int, "1"),
            (Float, math.inf),
            (Float, "1.0"),
            (String, 1),
            (Boolean, 1),
            (ID, 1.5),
        ],
    )
    def test_rejects(self, scalar, value) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(CoercionError):
            scalar.serialize(value)


class TestInputCoercion:
    def test_int_from_digit_string(self) -> None:
        assert parse_int(" 32 ") == 32

    def test_int_bounds(self) -> None:
        assert parse_int(MIN_INT) == MIN_INT
        with pytest.raises(CoercionError):
            parse_int(MIN_INT - 1)

    def test_int_rejects_fraction(self) -> None:
        with pytest.raises(CoercionError):
            parse_int(2.5)

    @pytest.mark.parametrize("text", ["1_000", "0x10", "1e3", "", "+", "٣"])
    def test_int_rejects_loose_text(self, text: str) -> None:
        with pytest.raises(CoercionError):
            parse_int(text)

    def test_float_from_string(self) -> None:
        assert parse_float("1.25") == 1.25
        assert parse_float("-.5e2") == -50.0

    @pytest.mark.parametrize("text", ["1_000.5", "infinity", "1e999", ".", "1.2.3"])
    def test_float_rejects_loose_text(self, text: str) -> None:
        with pytest.raises(CoercionError):
            parse_float(text)

    def test_float_rejects_nan(self) -> None:
        with pytest.raises(CoercionError):
            parse_float("nan")

    def test_boolean_strings(self) -> None:
        assert parse_boolean("TRUE") is True
        assert parse_boolean("false") is False
        with pytest.raises(CoercionError):
            parse_boolean("yes")

    def test_arg_builders(self) -> None:
        assert IntArg("n").coerce("5") == 5
        assert FloatArg("f").coerce(1) == 1.0
        assert BooleanArg("b").coerce(True) is True
        assert IDArg("id").coerce(9) == "9"


class TestBuiltins:
    def test_registry(self) -> None:
        assert set(BUILTIN_SCALARS) == {"Int", "Float", "String", "Boolean", "ID"}

    def test_is_builtin_by_identity(self) -> None:
        assert is_builtin_scalar(Int)
        assert not is_builtin_scalar(Scalar("Int", int))
