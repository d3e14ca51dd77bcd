"""Fields, arguments and resolvers.

A Field binds a name, ordered scalar-only arguments, an output type and a
resolver ``resolve(source, context, *args)``. The resolver may return the
value directly or an awaitable of it (a Thunk); callers must not assume
immediacy.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from gqltypes.domain.errors import CoercionError, DuplicateNameError
from gqltypes.domain.kinds import GRAPH_TYPES, GraphType, check_name, render_type

type Thunk[T] = T | Awaitable[T]
type Resolver = Callable[..., Thunk[Any]]
type InputCoercer[T] = Callable[[Any], T]


async def await_thunk[T](value: Thunk[T]) -> T:
    """Return *value*, awaiting it first if it is awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArgScalar:
    """Declared scalar name plus its input coercion."""

    name: str
    coerce: InputCoercer[Any] = field(repr=False)


@dataclass(frozen=True)
class Arg:
    """A named, scalar-only input descriptor."""

    name: str
    scalar: ArgScalar
    type: Literal["Scalar"] = "Scalar"

    def __post_init__(self) -> None:
        check_name(self.name, "argument")

    def coerce(self, value: Any) -> Any:
        """Coerce an external *value*; ``None`` means the argument is absent."""
        if value is None:
            return None
        try:
            return self.scalar.coerce(value)
        except CoercionError as exc:
            raise CoercionError(
                f"Argument {self.name!r}: {exc.message}",
                argument=self.name,
                scalar=self.scalar.name,
            ) from exc
        except (TypeError, ValueError, OverflowError) as exc:
            raise CoercionError(
                f"Argument {self.name!r} of type {self.scalar.name} "
                f"cannot represent {value!r}",
                argument=self.name,
                scalar=self.scalar.name,
            ) from exc


class ArgBuilder:
    """Second stage of :func:`ScalarArg`: turns an argument name into an Arg.

    One builder is shared by every argument of the same scalar, so the
    coercion logic is written once.
    """

    __slots__ = ("scalar",)

    def __init__(self, scalar: ArgScalar) -> None:
        self.scalar = scalar

    def __call__(self, arg_name: str) -> Arg:
        return Arg(name=arg_name, scalar=self.scalar)

    def __repr__(self) -> str:
        return f"ArgBuilder({self.scalar.name})"


def ScalarArg(name: str, coerce: InputCoercer[Any]) -> ArgBuilder:  # noqa: N802
    """First stage: fix the scalar name and coercion for later arguments."""
    check_name(name, "scalar")
    return ArgBuilder(ArgScalar(name=name, coerce=coerce))


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def default_resolver(name: str) -> Resolver:
    """Resolver reading *name* as a mapping key or attribute of the source."""

    def resolve(source: Any, _context: Any, *_args: Any) -> Any:
        if source is None:
            return None
        if isinstance(source, Mapping):
            return source.get(name)
        return getattr(source, name, None)

    resolve.__qualname__ = f"default_resolver.<{name}>"
    return resolve


@dataclass(frozen=True)
class Field:
    """An immutable field descriptor.

    No runtime check ties the resolver's return shape to ``type``; that
    correspondence is the caller's contract.
    """

    name: str
    type: GraphType
    resolve: Resolver | None = field(default=None, repr=False, compare=False)
    args: Sequence[Arg] = ()
    description: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        check_name(self.name, "field")
        if not isinstance(self.type, GRAPH_TYPES):
            raise TypeError(
                f"Field {self.name!r} type must be a gqltypes type, "
                f"got {type(self.type).__name__}"
            )
        args = tuple(self.args)
        seen: set[str] = set()
        for arg in args:
            if not isinstance(arg, Arg):
                raise TypeError(f"Field {self.name!r} arguments must be Arg instances")
            if arg.name in seen:
                raise DuplicateNameError(
                    f"Duplicate argument {arg.name!r} on field {self.name!r}",
                    field=self.name,
                    argument=arg.name,
                )
            seen.add(arg.name)
        object.__setattr__(self, "args", args)
        if self.resolve is None:
            object.__setattr__(self, "resolve", default_resolver(self.name))

    def arg(self, name: str) -> Arg | None:
        for a in self.args:
            if a.name == name:
                return a
        return None

    def coerce_args(self, supplied: Mapping[str, Any] | None) -> list[Any]:
        """Coerce *supplied* external values into positional resolver args.

        Raises CoercionError for an unknown argument name or a value the
        argument's scalar cannot represent.
        """
        supplied = supplied or {}
        unknown = sorted(set(supplied) - {a.name for a in self.args})
        if unknown:
            raise CoercionError(
                f"Unknown argument(s) {', '.join(unknown)} on field {self.name!r}",
                field=self.name,
                arguments=unknown,
            )
        return [a.coerce(supplied.get(a.name)) for a in self.args]

    def invoke(self, source: Any, context: Any, args: Sequence[Any]) -> Thunk[Any]:
        """Call the resolver positionally."""
        assert self.resolve is not None
        return self.resolve(source, context, *args)

    def signature(self) -> str:
        """``name(arg: Scalar, ...): Type`` notation."""
        params = ", ".join(f"{a.name}: {a.scalar.name}" for a in self.args)
        head = f"{self.name}({params})" if params else self.name
        return f"{head}: {render_type(self.type)}"
