"""Exception hierarchy for the type model.

Schema-shape errors are raised while the graph is being built (or when a
lazy field list is first forced). Coercion and resolver errors are raised
at resolution time and are expected to be isolated per field by whoever
drives the resolvers.
"""

from __future__ import annotations

from typing import Any


class GqlTypesError(Exception):
    """Base class for all gqltypes errors.

    Attributes:
        code: Stable machine-readable error code.
        detail: Extra structured context (type/field/argument names).
    """

    code = "GQLTYPES_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class SchemaShapeError(GqlTypesError):
    """The schema graph is malformed."""

    code = "SCHEMA_SHAPE"


class DuplicateNameError(SchemaShapeError):
    """Two fields or arguments share a name within one scope."""

    code = "DUPLICATE_NAME"


class NestedNonNullError(SchemaShapeError):
    """``NonNullable`` was applied to a type that is already non-nullable."""

    code = "NESTED_NON_NULL"


class InvalidNameError(SchemaShapeError):
    """A type, field or argument name is not a valid identifier."""

    code = "INVALID_NAME"


class UndeclaredUnionMemberError(SchemaShapeError):
    """A union's ``resolve_type`` answered with a type it does not declare."""

    code = "UNDECLARED_UNION_MEMBER"


class CoercionError(GqlTypesError, ValueError):
    """A scalar, enum or argument could not represent a value."""

    code = "COERCION_FAILED"


class NullabilityError(GqlTypesError):
    """``None`` was produced where the declared type is NonNullable."""

    code = "NULL_VIOLATION"


class ResolverError(GqlTypesError):
    """A resolver raised, directly or through its awaitable."""

    code = "RESOLVER_FAILED"


class SchemaLoadError(GqlTypesError):
    """A ``module:attribute`` target could not be imported as a Schema."""

    code = "SCHEMA_LOAD_FAILED"
