"""Schema: the root aggregate of query and mutation fields."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from gqltypes.domain.errors import DuplicateNameError
from gqltypes.domain.fields import Field


class Operation(StrEnum):
    """Root operation kinds."""

    QUERY = "query"
    MUTATION = "mutation"


ROOT_TYPE_NAMES: dict[Operation, str] = {
    Operation.QUERY: "Query",
    Operation.MUTATION: "Mutation",
}


def _check_root_fields(fields: Sequence[Field], scope: str) -> tuple[Field, ...]:
    result = tuple(fields)
    seen: set[str] = set()
    for f in result:
        if not isinstance(f, Field):
            raise TypeError(f"{scope} entries must be Field instances")
        if f.name in seen:
            raise DuplicateNameError(
                f"Duplicate {scope} field {f.name!r}", scope=scope, field=f.name
            )
        seen.add(f.name)
    return result


@dataclass(frozen=True)
class Schema:
    """Root query fields (always present) and optional mutation fields.

    Root resolvers are always invoked with ``source=None``.
    INVARIANT: field names are unique within ``queries`` and, separately,
    within ``mutations``.
    """

    queries: Sequence[Field]
    mutations: Sequence[Field] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "queries", _check_root_fields(self.queries, "query"))
        if self.mutations is not None:
            object.__setattr__(
                self, "mutations", _check_root_fields(self.mutations, "mutation")
            )

    def root_fields(self, operation: Operation | str = Operation.QUERY) -> tuple[Field, ...]:
        """Return the root fields for *operation* (empty when undefined)."""
        op = Operation(operation)
        if op is Operation.QUERY:
            return tuple(self.queries)
        return tuple(self.mutations or ())

    def root_field(self, name: str, operation: Operation | str = Operation.QUERY) -> Field | None:
        for f in self.root_fields(operation):
            if f.name == name:
                return f
        return None

    def query(self, name: str) -> Field | None:
        return self.root_field(name, Operation.QUERY)

    def mutation(self, name: str) -> Field | None:
        return self.root_field(name, Operation.MUTATION)

    def operations(self) -> list[Operation]:
        """Operations this schema defines, queries first."""
        ops = [Operation.QUERY]
        if self.mutations is not None:
            ops.append(Operation.MUTATION)
        return ops
