"""Breadth-first walk over every named type reachable from a schema's roots.

Walking forces lazy field and member lists. A producer that fails is
recorded instead of aborting the walk so that tooling can report every
problem in one pass.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from gqltypes.domain.errors import GqlTypesError
from gqltypes.domain.fields import Field
from gqltypes.domain.kinds import (
    EnumType,
    GraphType,
    NamedType,
    ObjectType,
    ScalarType,
    UnionType,
    named_type,
)
from gqltypes.domain.schema import ROOT_TYPE_NAMES, Schema


@dataclass(frozen=True)
class TypeReference:
    """``source`` refers to ``target`` through ``via`` (a field, or ``member``)."""

    source: str
    target: str
    via: str


@dataclass(frozen=True)
class NameCollision:
    name: str
    first: NamedType
    second: NamedType


@dataclass(frozen=True)
class ProducerFailure:
    type_name: str
    error: GqlTypesError


@dataclass
class TypeIndex:
    """Result of :func:`walk_schema`, in discovery order."""

    types: dict[str, NamedType] = field(default_factory=dict)
    references: list[TypeReference] = field(default_factory=list)
    collisions: list[NameCollision] = field(default_factory=list)
    failures: list[ProducerFailure] = field(default_factory=list)
    unnamed_enums: list[EnumType] = field(default_factory=list)

    def objects(self) -> list[ObjectType]:
        return [t for t in self.types.values() if isinstance(t, ObjectType)]

    def unions(self) -> list[UnionType]:
        return [t for t in self.types.values() if isinstance(t, UnionType)]

    def enums(self) -> list[EnumType]:
        return [t for t in self.types.values() if isinstance(t, EnumType)]

    def scalars(self) -> list[ScalarType]:
        return [t for t in self.types.values() if isinstance(t, ScalarType)]


def _safe_name(t: NamedType) -> str:
    if isinstance(t, UnionType):
        try:
            return t.name
        except GqlTypesError:
            return t.explicit_name or "<union>"
    if isinstance(t, EnumType):
        return t.name or "<enum>"
    return t.name


def _same(a: NamedType, b: NamedType) -> bool:
    return a is b or (isinstance(a, ScalarType | EnumType) and a == b)


def walk_schema(schema: Schema) -> TypeIndex:
    """Collect named types, references, collisions and producer failures."""
    index = TypeIndex()
    queue: deque[NamedType] = deque()
    seen_ids: set[int] = set()

    def visit(source: str, t: GraphType, via: str) -> None:
        base = named_type(t)
        if isinstance(base, EnumType) and base.name is None:
            if id(base) not in seen_ids:
                seen_ids.add(id(base))
                index.unnamed_enums.append(base)
            return
        name = _safe_name(base)
        index.references.append(TypeReference(source=source, target=name, via=via))
        if id(base) in seen_ids:
            return
        seen_ids.add(id(base))
        existing = index.types.get(name)
        if existing is not None:
            if not _same(existing, base):
                index.collisions.append(NameCollision(name=name, first=existing, second=base))
            return
        index.types[name] = base
        queue.append(base)

    def visit_fields(owner: str, fields: tuple[Field, ...]) -> None:
        for f in fields:
            visit(owner, f.type, f.name)

    for op in schema.operations():
        visit_fields(ROOT_TYPE_NAMES[op], schema.root_fields(op))

    while queue:
        current = queue.popleft()
        if isinstance(current, ObjectType):
            try:
                fields = current.fields
            except GqlTypesError as exc:
                index.failures.append(ProducerFailure(type_name=current.name, error=exc))
                continue
            visit_fields(current.name, fields)
        elif isinstance(current, UnionType):
            name = _safe_name(current)
            try:
                members = current.types
            except GqlTypesError as exc:
                index.failures.append(ProducerFailure(type_name=name, error=exc))
                continue
            for member in members:
                visit(name, member, "member")

    return index
