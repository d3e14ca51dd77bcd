"""Reference executor: walks selections against a schema's resolvers.

Selections are plain Python values (no query language)::

    Select("User", args={"age": 32}, fields=["fullName", Select("book", fields=["id"])])

For each selected field the executor coerces arguments through the
field's ``Arg`` descriptors, calls ``resolve(source, context, *args)``,
awaits the result when it is awaitable and completes it against the
declared type. Failures are isolated per field: the error is recorded
with its response path and the field becomes ``None``. A ``None`` in a
NonNullable position propagates to the nearest nullable ancestor.

A union-typed field's sub-selection is narrowed to the member its
``resolve_type`` picks, and ``__typename`` selects the concrete type name.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field as ModelField

from gqltypes.config.models import ExecutionConfig
from gqltypes.domain.errors import (
    GqlTypesError,
    NullabilityError,
    ResolverError,
)
from gqltypes.domain.fields import Field, await_thunk
from gqltypes.domain.kinds import (
    EnumType,
    GraphType,
    ListType,
    NonNullType,
    ObjectType,
    ScalarType,
    UnionType,
    render_type,
)
from gqltypes.domain.schema import ROOT_TYPE_NAMES, Operation, Schema
from gqltypes.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

type Path = list[str | int]
type Selection = Select | str

MASKED_MESSAGE = "Unexpected error while resolving field"
TYPENAME = "__typename"


class SelectionError(GqlTypesError):
    """A selection does not fit the schema."""

    code = "INVALID_SELECTION"


@dataclass(frozen=True)
class Select:
    """One selected field, with its arguments and sub-selections."""

    name: str
    args: Mapping[str, Any] | None = None
    fields: Sequence[Selection] = ()
    alias: str | None = None

    @property
    def response_key(self) -> str:
        return self.alias or self.name

    def children(self) -> tuple[Select, ...]:
        return tuple(as_select(s) for s in self.fields)


def as_select(selection: Selection) -> Select:
    return Select(selection) if isinstance(selection, str) else selection


class FieldError(BaseModel):
    """An error isolated to one response path."""

    model_config = {"frozen": True}

    message: str
    path: list[str | int]
    code: str


class ExecutionResult(BaseModel):
    """Response data plus the errors recorded while producing it."""

    model_config = {"frozen": True}

    data: dict[str, Any] | None = None
    errors: list[FieldError] = ModelField(default_factory=list)
    meta: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


class _Located(Exception):
    """A field error travelling up to the nearest nullable position."""

    def __init__(self, error: FieldError) -> None:
        super().__init__(error.message)
        self.error = error


class Executor:
    """Executes selections against one schema.

    One instance may run any number of operations concurrently; per-run
    state lives in :class:`_Run`.
    """

    def __init__(self, schema: Schema, config: ExecutionConfig | None = None) -> None:
        self._schema = schema
        self._config = config or ExecutionConfig()

    @traced
    async def execute(
        self,
        selections: Iterable[Selection],
        *,
        context: Any = None,
        operation: Operation | str = Operation.QUERY,
    ) -> ExecutionResult:
        op = Operation(operation)
        if op is Operation.MUTATION and self._schema.mutations is None:
            error = FieldError(
                message="Schema does not define mutations", path=[], code="UNSUPPORTED_OPERATION"
            )
            return ExecutionResult(data=None, errors=[error])
        run = _Run(self._schema, self._config, context)
        data = await run.execute_root(op, [as_select(s) for s in selections])
        return ExecutionResult(data=data, errors=run.errors)

    def execute_sync(
        self,
        selections: Iterable[Selection],
        *,
        context: Any = None,
        operation: Operation | str = Operation.QUERY,
    ) -> ExecutionResult:
        """Run :meth:`execute` on a fresh event loop."""
        return asyncio.run(self.execute(selections, context=context, operation=operation))


class _Run:
    """State for a single operation."""

    def __init__(self, schema: Schema, config: ExecutionConfig, context: Any) -> None:
        self.schema = schema
        self.config = config
        self.context = context
        self.errors: list[FieldError] = []

    # ------------------------------------------------------------------
    # Roots
    # ------------------------------------------------------------------

    async def execute_root(self, op: Operation, selections: list[Select]) -> dict[str, Any] | None:
        root_name = ROOT_TYPE_NAMES[op]

        def lookup(name: str) -> Field | None:
            return self.schema.root_field(name, op)

        try:
            if op is Operation.MUTATION:
                return await self._execute_serially(root_name, lookup, selections)
            return await self._execute_fields(root_name, lookup, None, selections, [])
        except _Located as exc:
            self.errors.append(exc.error)
            return None

    async def _execute_serially(
        self,
        parent: str,
        lookup: Callable[[str], Field | None],
        selections: list[Select],
    ) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for sel in selections:
            if sel.name == TYPENAME:
                result[sel.response_key] = parent
                continue
            with trace_span(f"{parent}.{sel.name}"):
                result[sel.response_key] = await self._execute_field(
                    parent, lookup(sel.name), None, sel, [sel.response_key]
                )
        return result

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    async def _execute_fields(
        self,
        parent: str,
        lookup: Callable[[str], Field | None],
        source: Any,
        selections: Sequence[Select],
        path: Path,
    ) -> dict[str, Any]:
        async def run_one(sel: Select) -> Any:
            if sel.name == TYPENAME:
                return parent
            with trace_span(f"{parent}.{sel.name}"):
                return await self._execute_field(
                    parent, lookup(sel.name), source, sel, [*path, sel.response_key]
                )

        outcomes = await asyncio.gather(*(run_one(s) for s in selections), return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return {sel.response_key: value for sel, value in zip(selections, outcomes, strict=True)}

    async def _execute_field(
        self,
        parent: str,
        field: Field | None,
        source: Any,
        sel: Select,
        path: Path,
    ) -> Any:
        if field is None:
            return self._handle_error(
                SelectionError(f"{parent} has no field {sel.name!r}", field=sel.name), None, path
            )
        try:
            depth = sum(1 for segment in path if isinstance(segment, str))
            if depth > self.config.max_depth:
                raise SelectionError(
                    f"Selection exceeds maximum depth {self.config.max_depth}",
                    field=sel.name,
                )
            args = field.coerce_args(sel.args)
            value = await self._resolve(parent, field, source, args)
            return await self._complete(field.type, parent, field, sel, value, path)
        except Exception as exc:
            return self._handle_error(exc, field.type, path)

    async def _resolve(self, parent: str, field: Field, source: Any, args: list[Any]) -> Any:
        try:
            return await await_thunk(field.invoke(source, self.context, args))
        except GqlTypesError:
            raise
        except Exception as exc:
            logger.debug("Resolver %s.%s failed", parent, field.name, exc_info=True)
            message = MASKED_MESSAGE if self.config.mask_errors else f"{exc}"
            raise ResolverError(message, type=parent, field=field.name) from exc

    def _handle_error(self, exc: Exception, return_type: GraphType | None, path: Path) -> None:
        """Record *exc* here, or re-raise it if this position is non-nullable."""
        if isinstance(exc, _Located):
            located = exc
        else:
            if isinstance(exc, GqlTypesError):
                code, message = exc.code, exc.message
            else:
                logger.debug("Unexpected error at %s", path, exc_info=exc)
                code = ResolverError.code
                message = MASKED_MESSAGE if self.config.mask_errors else str(exc)
            located = _Located(FieldError(message=message, path=list(path), code=code))
        if isinstance(return_type, NonNullType):
            raise located
        self.errors.append(located.error)
        return None

    # ------------------------------------------------------------------
    # Value completion
    # ------------------------------------------------------------------

    async def _complete(
        self,
        return_type: GraphType,
        parent: str,
        field: Field,
        sel: Select,
        value: Any,
        path: Path,
    ) -> Any:
        match return_type:
            case NonNullType(of_type=inner):
                completed = await self._complete(inner, parent, field, sel, value, path)
                if completed is None:
                    raise NullabilityError(
                        f"Cannot return null for non-nullable field {parent}.{field.name}",
                        type=parent,
                        field=field.name,
                    )
                return completed
            case _ if value is None:
                return None
            case ListType(of_type=item_type):
                return await self._complete_list(item_type, parent, field, sel, value, path)
            case ScalarType() | EnumType():
                if sel.fields:
                    raise SelectionError(
                        f"Field {parent}.{field.name} of type {render_type(return_type)} "
                        "cannot have a sub-selection",
                        field=field.name,
                    )
                return return_type.serialize(value)
            case ObjectType():
                return await self._complete_object(return_type, field, sel, value, path)
            case UnionType():
                member = return_type.resolve(value)
                return await self._complete_object(
                    member, field, sel, value, path, union=return_type
                )
            case _:
                raise TypeError(f"Unknown type {return_type!r}")

    async def _complete_list(
        self,
        item_type: GraphType,
        parent: str,
        field: Field,
        sel: Select,
        value: Any,
        path: Path,
    ) -> list[Any]:
        if isinstance(value, str | bytes | Mapping) or not isinstance(value, Iterable):
            raise ResolverError(
                f"Expected a list for field {parent}.{field.name}, "
                f"got {type(value).__name__}",
                type=parent,
                field=field.name,
            )

        async def complete_item(index: int, item: Any) -> Any:
            item_path = [*path, index]
            try:
                return await self._complete(item_type, parent, field, sel, item, item_path)
            except Exception as exc:
                return self._handle_error(exc, item_type, item_path)

        outcomes = await asyncio.gather(
            *(complete_item(i, item) for i, item in enumerate(value)), return_exceptions=True
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        return list(outcomes)

    async def _complete_object(
        self,
        object_type: ObjectType,
        field: Field,
        sel: Select,
        value: Any,
        path: Path,
        union: UnionType | None = None,
    ) -> dict[str, Any]:
        children = sel.children()
        if not children:
            raise SelectionError(
                f"Field {field.name!r} of type {object_type.name} needs a sub-selection",
                field=field.name,
            )
        if union is not None:
            children = _narrow(union, object_type, children)
        return await self._execute_fields(object_type.name, object_type.field, value, children, path)


def _narrow(
    union: UnionType, member: ObjectType, children: tuple[Select, ...]
) -> tuple[Select, ...]:
    """Keep the selections that apply to *member*.

    A union sub-selection may mix fields of different members; fields the
    resolved member lacks are skipped. A name no member defines is an error.
    """
    kept: list[Select] = []
    for child in children:
        if child.name == TYPENAME or member.field(child.name) is not None:
            kept.append(child)
        elif not any(t.field(child.name) is not None for t in union.types):
            raise SelectionError(
                f"No member of union {union.name} has field {child.name!r}", field=child.name
            )
    return tuple(kept)


async def execute(
    schema: Schema,
    selections: Iterable[Selection],
    *,
    context: Any = None,
    operation: Operation | str = Operation.QUERY,
    config: ExecutionConfig | None = None,
) -> ExecutionResult:
    """Shortcut for ``Executor(schema, config).execute(...)``."""
    return await Executor(schema, config).execute(
        selections, context=context, operation=operation
    )
