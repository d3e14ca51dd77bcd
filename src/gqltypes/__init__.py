"""gqltypes: typed schema-definition primitives for GraphQL-like APIs."""

from __future__ import annotations

from gqltypes.domain.errors import (
    CoercionError,
    DuplicateNameError,
    GqlTypesError,
    InvalidNameError,
    NestedNonNullError,
    ResolverError,
    SchemaShapeError,
    UndeclaredUnionMemberError,
)
from gqltypes.domain.fields import (
    Arg,
    ArgBuilder,
    Field,
    ScalarArg,
    Thunk,
    await_thunk,
    default_resolver,
)
from gqltypes.domain.kinds import (
    Enum,
    EnumType,
    GraphType,
    Kind,
    List,
    ListType,
    NonNullable,
    NonNullType,
    Object,
    ObjectType,
    Scalar,
    ScalarType,
    Union,
    UnionType,
    named_type,
    render_type,
    type_identity,
)
from gqltypes.domain.scalars import (
    ID,
    Boolean,
    BooleanArg,
    Float,
    FloatArg,
    IDArg,
    Int,
    IntArg,
    String,
    StringArg,
)
from gqltypes.domain.schema import Operation, Schema

__version__ = "0.3.0"

__all__ = [
    "ID",
    "Arg",
    "ArgBuilder",
    "Boolean",
    "BooleanArg",
    "CoercionError",
    "DuplicateNameError",
    "Enum",
    "EnumType",
    "Field",
    "Float",
    "FloatArg",
    "GqlTypesError",
    "GraphType",
    "IDArg",
    "Int",
    "IntArg",
    "InvalidNameError",
    "Kind",
    "List",
    "ListType",
    "NestedNonNullError",
    "NonNullType",
    "NonNullable",
    "Object",
    "ObjectType",
    "Operation",
    "ResolverError",
    "Scalar",
    "ScalarArg",
    "ScalarType",
    "Schema",
    "SchemaShapeError",
    "String",
    "StringArg",
    "Thunk",
    "UndeclaredUnionMemberError",
    "Union",
    "UnionType",
    "__version__",
    "await_thunk",
    "default_resolver",
    "named_type",
    "render_type",
    "type_identity",
]
