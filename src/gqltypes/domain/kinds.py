"""The closed type model: six kinds and their builders.

A ``GraphType`` is exactly one of ``ObjectType``, ``UnionType``,
``ScalarType``, ``EnumType``, ``NonNullType`` or ``ListType``. Consumers
match on the concrete class; there is no open base class to subclass.

INVARIANT: every instance is immutable after construction. The only
deferred state is the memoized member list of Object and Union kinds,
which is evaluated at most once under a lock.
"""

from __future__ import annotations

import enum
import re
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

from gqltypes.domain.errors import (
    CoercionError,
    DuplicateNameError,
    InvalidNameError,
    NestedNonNullError,
    SchemaShapeError,
    UndeclaredUnionMemberError,
)

if TYPE_CHECKING:
    from gqltypes.domain.fields import Field

NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

OUTPUT_PRIMITIVES = (str, int, float, bool)


class Kind(StrEnum):
    """Discriminator for the six type kinds."""

    OBJECT = "Object"
    UNION = "Union"
    SCALAR = "Scalar"
    ENUM = "Enum"
    NON_NULLABLE = "NonNullable"
    LIST = "List"


def check_name(name: str, what: str) -> str:
    """Return *name* unchanged, or raise if it is not a valid identifier."""
    if not isinstance(name, str) or not NAME_PATTERN.match(name):
        raise InvalidNameError(f"Invalid {what} name: {name!r}", name=name, scope=what)
    return name


# ---------------------------------------------------------------------------
# Lazy member lists
# ---------------------------------------------------------------------------


class Lazy[T]:
    """A sequence given eagerly or as a zero-argument producer.

    The producer runs at most once. Concurrent first access is serialized
    by a re-entrant lock; a producer that asks for its own result while
    running raises ``SchemaShapeError`` instead of recursing forever.
    Failures (including *validate* failures) are cached and re-raised as
    ``SchemaShapeError``.
    """

    __slots__ = ("_error", "_forcing", "_lock", "_owner", "_producer", "_validate", "_value")

    def __init__(
        self,
        source: Iterable[T] | Callable[[], Iterable[T]],
        *,
        owner: str,
        validate: Callable[[tuple[T, ...]], None] | None = None,
    ) -> None:
        self._owner = owner
        self._validate = validate
        self._lock = threading.RLock()
        self._forcing = False
        self._error: Exception | None = None
        self._value: tuple[T, ...] | None = None
        self._producer: Callable[[], Iterable[T]] | None = None
        if callable(source):
            self._producer = source
        else:
            value = tuple(source)
            if validate is not None:
                validate(value)
            self._value = value

    @property
    def evaluated(self) -> bool:
        """True once the member list is available (or has failed)."""
        return self._value is not None or self._error is not None

    def get(self) -> tuple[T, ...]:
        value = self._value
        if value is not None:
            return value
        with self._lock:
            if self._value is not None:
                return self._value
            if self._error is not None:
                raise self._error
            if self._forcing:
                raise SchemaShapeError(
                    f"Members of {self._owner!r} were requested while being produced",
                    type=self._owner,
                )
            assert self._producer is not None
            self._forcing = True
            try:
                produced = tuple(self._producer())
                if self._validate is not None:
                    self._validate(produced)
            except SchemaShapeError as exc:
                self._error = exc
                raise
            except Exception as exc:
                wrapped = SchemaShapeError(
                    f"Producing members of {self._owner!r} failed: {exc}",
                    type=self._owner,
                )
                wrapped.__cause__ = exc
                self._error = wrapped
                raise wrapped from exc
            finally:
                self._forcing = False
            self._value = produced
            self._producer = None
            return produced


def _unique_field_names(owner: str) -> Callable[[tuple[Field, ...]], None]:
    def validate(fields: tuple[Field, ...]) -> None:
        seen: set[str] = set()
        for f in fields:
            if f.name in seen:
                raise DuplicateNameError(
                    f"Duplicate field {f.name!r} on {owner!r}",
                    type=owner,
                    field=f.name,
                )
            seen.add(f.name)

    return validate


def _object_members(owner: str) -> Callable[[tuple[ObjectType, ...]], None]:
    def validate(types: tuple[ObjectType, ...]) -> None:
        for t in types:
            if not isinstance(t, ObjectType):
                raise SchemaShapeError(
                    f"Union {owner!r} members must be Object kinds, got {render_type(t)}",
                    type=owner,
                )

    return validate


# ---------------------------------------------------------------------------
# Named kinds
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class ObjectType:
    """A named set of fields, possibly defined lazily for cyclic graphs."""

    kind: ClassVar[Kind] = Kind.OBJECT

    name: str
    field_source: Sequence[Field] | Callable[[], Iterable[Field]] = field(repr=False)
    description: str | None = None
    _fields: Lazy[Field] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        check_name(self.name, "object")
        lazy: Lazy[Field] = Lazy(
            self.field_source, owner=self.name, validate=_unique_field_names(self.name)
        )
        object.__setattr__(self, "_fields", lazy)

    @property
    def fields(self) -> tuple[Field, ...]:
        """The field list, produced on first access and cached."""
        return self._fields.get()

    @property
    def is_resolved(self) -> bool:
        return self._fields.evaluated

    def field(self, name: str) -> Field | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass(frozen=True, eq=False)
class UnionType:
    """Candidate Object kinds plus a runtime discriminator.

    ``resolve_type`` must answer with one of ``types`` for every value a
    union-typed field can produce. :meth:`resolve` enforces that contract.
    """

    kind: ClassVar[Kind] = Kind.UNION

    type_source: Sequence[ObjectType] | Callable[[], Iterable[ObjectType]] = field(repr=False)
    resolve_type: Callable[[Any], ObjectType] = field(repr=False)
    explicit_name: str | None = None
    description: str | None = None
    _types: Lazy[ObjectType] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.explicit_name is not None:
            check_name(self.explicit_name, "union")
        owner = self.explicit_name or "<union>"
        object.__setattr__(
            self, "_types", Lazy(self.type_source, owner=owner, validate=_object_members(owner))
        )

    @property
    def types(self) -> tuple[ObjectType, ...]:
        return self._types.get()

    @property
    def name(self) -> str:
        """Declared name, or the member names joined with ``Or``."""
        if self.explicit_name is not None:
            return self.explicit_name
        return "Or".join(t.name for t in self.types)

    @property
    def identity(self) -> frozenset[str]:
        return frozenset(t.name for t in self.types)

    def is_member(self, candidate: object) -> bool:
        return any(candidate is t for t in self.types)

    def resolve(self, value: Any) -> ObjectType:
        """Pick the member describing *value*, rejecting undeclared answers."""
        chosen = self.resolve_type(value)
        if not self.is_member(chosen):
            got = chosen.name if isinstance(chosen, ObjectType) else repr(chosen)
            raise UndeclaredUnionMemberError(
                f"Union {self.name!r} resolved to undeclared type {got}",
                union=self.name,
                resolved=got,
                members=[t.name for t in self.types],
            )
        return chosen


@dataclass(frozen=True)
class ScalarType:
    """Leaf type; ``coerce`` maps an internal value to str/int/float/bool."""

    kind: ClassVar[Kind] = Kind.SCALAR

    name: str
    coerce: Callable[[Any], str | int | float | bool] = field(repr=False)
    description: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        check_name(self.name, "scalar")

    def serialize(self, value: Any) -> str | int | float | bool:
        try:
            result = self.coerce(value)
        except CoercionError:
            raise
        except (TypeError, ValueError, OverflowError) as exc:
            raise CoercionError(
                f"{self.name} cannot represent {value!r}: {exc}", scalar=self.name
            ) from exc
        if not isinstance(result, OUTPUT_PRIMITIVES):
            raise CoercionError(
                f"{self.name} coercion produced {type(result).__name__}, "
                "expected string, number or boolean",
                scalar=self.name,
            )
        return result


@dataclass(frozen=True)
class EnumType:
    """Leaf type restricted to a closed, ordered set of values."""

    kind: ClassVar[Kind] = Kind.ENUM

    values: tuple[Any, ...]
    name: str | None = None
    description: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.name is not None:
            check_name(self.name, "enum")

    @staticmethod
    def value_name(value: Any) -> str:
        if isinstance(value, enum.Enum):
            return value.name
        return str(value)

    def value_names(self) -> list[str]:
        return [self.value_name(v) for v in self.values]

    def declares(self, value: Any) -> bool:
        """Membership test that keeps True and 1 apart."""
        is_bool = isinstance(value, bool)
        return any(v == value and isinstance(v, bool) is is_bool for v in self.values)

    def serialize(self, value: Any) -> str:
        if not self.declares(value):
            raise CoercionError(
                f"Enum {self.name or '<enum>'!s} cannot represent {value!r}",
                enum=self.name,
            )
        return self.value_name(value)


# ---------------------------------------------------------------------------
# Wrappers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NonNullType:
    """The payload's value is never ``None``."""

    kind: ClassVar[Kind] = Kind.NON_NULLABLE

    of_type: GraphType

    def __post_init__(self) -> None:
        _require_type(self.of_type)
        if isinstance(self.of_type, NonNullType):
            raise NestedNonNullError(
                f"Cannot wrap {render_type(self.of_type)} in NonNullable twice",
                type=render_type(self.of_type),
            )


@dataclass(frozen=True)
class ListType:
    """An ordered sequence of the payload, the sequence itself nullable."""

    kind: ClassVar[Kind] = Kind.LIST

    of_type: GraphType

    def __post_init__(self) -> None:
        _require_type(self.of_type)


type GraphType = ObjectType | UnionType | ScalarType | EnumType | NonNullType | ListType
type NamedType = ObjectType | UnionType | ScalarType | EnumType

GRAPH_TYPES = (ObjectType, UnionType, ScalarType, EnumType, NonNullType, ListType)


def _require_type(candidate: object) -> None:
    if not isinstance(candidate, GRAPH_TYPES):
        raise TypeError(f"Expected a gqltypes type, got {type(candidate).__name__}")


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def Object(  # noqa: N802
    name: str,
    fields: Sequence[Field] | Callable[[], Iterable[Field]],
    *,
    description: str | None = None,
) -> ObjectType:
    """Declare an Object kind. A callable *fields* is not invoked here."""
    return ObjectType(name=name, field_source=fields, description=description)


def Union(  # noqa: N802
    types: Sequence[ObjectType] | Callable[[], Iterable[ObjectType]],
    resolve_type: Callable[[Any], ObjectType],
    *,
    name: str | None = None,
    description: str | None = None,
) -> UnionType:
    return UnionType(
        type_source=types,
        resolve_type=resolve_type,
        explicit_name=name,
        description=description,
    )


def Scalar(  # noqa: N802
    name: str,
    coerce: Callable[[Any], str | int | float | bool],
    *,
    description: str | None = None,
) -> ScalarType:
    return ScalarType(name=name, coerce=coerce, description=description)


def Enum(  # noqa: N802
    values: Iterable[Any] | type[enum.Enum],
    *,
    name: str | None = None,
    description: str | None = None,
) -> EnumType:
    """Declare an Enum kind from values or a Python ``enum.Enum`` class.

    Declaration order is preserved. Given an ``enum.Enum`` class, the kind
    is named after the class unless *name* is passed.
    """
    if isinstance(values, type) and issubclass(values, enum.Enum):
        if name is None:
            name = values.__name__
        members: tuple[Any, ...] = tuple(values)
    else:
        members = tuple(values)
    return EnumType(values=members, name=name, description=description)


def NonNullable(of_type: GraphType) -> NonNullType:  # noqa: N802
    return NonNullType(of_type)


def List(of_type: GraphType) -> ListType:  # noqa: N802
    return ListType(of_type)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def named_type(t: GraphType) -> NamedType:
    """Strip every wrapper layer."""
    while isinstance(t, NonNullType | ListType):
        t = t.of_type
    return t


def is_nullable(t: GraphType) -> bool:
    return not isinstance(t, NonNullType)


def type_identity(t: GraphType) -> str | frozenset[str] | None:
    """Nominal identity: the name, or a union's member names.

    Wrappers have no identity of their own. Unnamed enums have none.
    """
    base = named_type(t)
    if isinstance(base, UnionType):
        return base.identity
    return base.name


def render_type(t: object) -> str:
    """Render *t* in ``[Book!]!`` notation."""
    match t:
        case NonNullType(of_type=inner):
            return f"{render_type(inner)}!"
        case ListType(of_type=inner):
            return f"[{render_type(inner)}]"
        case ObjectType() | UnionType() | ScalarType():
            return t.name
        case EnumType(name=name):
            return name or "<enum>"
        case _:
            return repr(t)
