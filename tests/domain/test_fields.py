"""Tests for fields, arguments and the two-stage ScalarArg builder."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import pytest

from gqltypes import (
    Arg,
    ArgBuilder,
    Field,
    Int,
    IntArg,
    List,
    NonNullable,
    ScalarArg,
    String,
    StringArg,
    await_thunk,
    default_resolver,
)
from gqltypes.domain.errors import CoercionError, DuplicateNameError, InvalidNameError


class TestScalarArg:
    def test_builder_reused_for_many_args(self) -> None:
        date_arg = ScalarArg("Date", lambda value: str(value))
        start = date_arg("start")
        end = date_arg("end")
        assert isinstance(date_arg, ArgBuilder)
        assert (start.name, end.name) == ("start", "end")
        assert start.scalar is end.scalar
        assert start.type == "Scalar"

    def test_coercion_applied_per_argument(self) -> None:
        upper_arg = ScalarArg("Upper", lambda value: str(value).upper())
        arg = upper_arg("code")
        assert arg.coerce("abc") == "ABC"

    def test_absent_value_passes_through(self) -> None:
        assert IntArg("age").coerce(None) is None

    def test_failure_names_argument(self) -> None:
        with pytest.raises(CoercionError) as excinfo:
            IntArg("age").coerce("thirty")
        assert excinfo.value.detail["argument"] == "age"
        assert "age" in excinfo.value.message

    def test_plain_value_error_wrapped(self) -> None:
        strict = ScalarArg("Strict", lambda value: int(value))
        with pytest.raises(CoercionError) as excinfo:
            strict("n").coerce("x")
        assert excinfo.value.detail == {"argument": "n", "scalar": "Strict"}

    def test_invalid_names(self) -> None:
        with pytest.raises(InvalidNameError):
            ScalarArg("not-valid", str)
        with pytest.raises(InvalidNameError):
            IntArg("1st")

    def test_repr(self) -> None:
        assert repr(IntArg) == "ArgBuilder(Int)"


class TestField:
    def test_args_are_ordered_tuple(self) -> None:
        f = Field("User", String, args=[IntArg("age"), StringArg("firstName")])
        assert isinstance(f.args, tuple)
        assert [a.name for a in f.args] == ["age", "firstName"]
        assert f.arg("firstName") is f.args[1]
        assert f.arg("missing") is None

    def test_duplicate_arg_names_rejected(self) -> None:
        with pytest.raises(DuplicateNameError):
            Field("x", String, args=[IntArg("a"), StringArg("a")])

    def test_non_arg_rejected(self) -> None:
        with pytest.raises(TypeError):
            Field("x", String, args=["a"])  # type: ignore[list-item]

    def test_type_must_be_graph_type(self) -> None:
        with pytest.raises(TypeError):
            Field("x", str)  # type: ignore[arg-type]

    def test_coerce_args_positional(self) -> None:
        f = Field("User", String, args=[IntArg("age"), StringArg("firstName")])
        assert f.coerce_args({"firstName": "Jo", "age": "32"}) == [32, "Jo"]
        assert f.coerce_args(None) == [None, None]

    def test_coerce_args_unknown_name(self) -> None:
        f = Field("User", String, args=[IntArg("age")])
        with pytest.raises(CoercionError) as excinfo:
            f.coerce_args({"height": 3})
        assert excinfo.value.detail["arguments"] == ["height"]

    def test_invoke_passes_args_positionally(self) -> None:
        seen: list[tuple[object, ...]] = []

        def resolve(source: object, context: object, age: int, name: str) -> str:
            seen.append((source, context, age, name))
            return "ok"

        f = Field("x", String, resolve, [IntArg("age"), StringArg("name")])
        assert f.invoke(None, "ctx", [1, "a"]) == "ok"
        assert seen == [(None, "ctx", 1, "a")]

    def test_signature(self) -> None:
        f = Field("search", List(NonNullable(Int)), args=[StringArg("term")])
        assert f.signature() == "search(term: String): [Int!]"
        assert Field("id", NonNullable(String)).signature() == "id: String!"


@dataclass
class Person:
    name: str


class TestDefaultResolver:
    def test_mapping_source(self) -> None:
        assert default_resolver("name")({"name": "Jo"}, None) == "Jo"

    def test_attribute_source(self) -> None:
        assert default_resolver("name")(Person("Jo"), None) == "Jo"

    def test_missing_is_none(self) -> None:
        assert default_resolver("name")({}, None) is None
        assert default_resolver("name")(None, None) is None

    def test_field_without_resolver_uses_default(self) -> None:
        f = Field("name", String)
        assert f.invoke({"name": "Jo"}, None, []) == "Jo"


class TestThunk:
    def test_plain_value(self) -> None:
        assert asyncio.run(await_thunk(3)) == 3

    def test_awaitable_value(self) -> None:
        async def later() -> int:
            return 4

        assert asyncio.run(await_thunk(later())) == 4


def test_arg_descriptor_is_immutable() -> None:
    arg = Arg(name="a", scalar=IntArg("a").scalar)
    with pytest.raises(AttributeError):
        arg.name = "b"  # type: ignore[misc]
