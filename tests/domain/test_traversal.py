"""Tests for the schema walk."""

from __future__ import annotations

from gqltypes import Enum, Field, Object, ObjectType, Schema, String, Union, named_type
from gqltypes.domain.errors import DuplicateNameError
from gqltypes.domain.traversal import TypeReference, walk_schema


class TestWalkSchema:
    def test_collects_named_types(self, schema: Schema) -> None:
        index = walk_schema(schema)
        assert set(index.types) == {"User", "Book", "SearchResult", "String", "UserType"}
        assert [t.name for t in index.objects()] == ["User", "Book"]
        assert [u.name for u in index.unions()] == ["SearchResult"]
        assert index.failures == []
        assert index.collisions == []

    def test_forces_lazy_fields(self, schema: Schema) -> None:
        root = schema.query("User")
        assert root is not None
        user = named_type(root.type)
        assert isinstance(user, ObjectType)
        assert not user.is_resolved
        index = walk_schema(schema)
        assert user.is_resolved
        assert all(t.is_resolved for t in index.objects())

    def test_references(self, schema: Schema) -> None:
        refs = walk_schema(schema).references
        assert TypeReference(source="Query", target="User", via="User") in refs
        assert TypeReference(source="Book", target="User", via="owner") in refs
        assert TypeReference(source="SearchResult", target="Book", via="member") in refs
        assert TypeReference(source="Mutation", target="User", via="renameUser") in refs

    def test_records_producer_failure(self) -> None:
        broken = Object("Broken", lambda: [Field("a", String), Field("a", String)])
        schema = Schema(queries=[Field("broken", broken)])
        index = walk_schema(schema)
        assert len(index.failures) == 1
        assert index.failures[0].type_name == "Broken"
        assert isinstance(index.failures[0].error, DuplicateNameError)

    def test_records_name_collision(self) -> None:
        first = Object("Thing", [Field("a", String)])
        second = Object("Thing", [Field("b", String)])
        schema = Schema(queries=[Field("one", first), Field("two", second)])
        index = walk_schema(schema)
        assert [c.name for c in index.collisions] == ["Thing"]
        assert index.types["Thing"] is first

    def test_unnamed_enums_collected_once(self) -> None:
        mood = Enum(["HAPPY", "SAD"])
        schema = Schema(queries=[Field("a", mood), Field("b", mood)])
        index = walk_schema(schema)
        assert index.unnamed_enums == [mood]
        assert index.enums() == []

    def test_union_failure(self) -> None:
        def members() -> list:  # type: ignore[type-arg]
            raise RuntimeError("boom")

        pet = Union(members, lambda _v: None, name="Pet")  # type: ignore[arg-type, return-value]
        index = walk_schema(Schema(queries=[Field("pet", pet)]))
        assert [f.type_name for f in index.failures] == ["Pet"]
