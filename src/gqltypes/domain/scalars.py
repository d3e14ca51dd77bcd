"""Built-in scalars and their argument builders.

Output coercion (``serialize_*``) turns resolver values into wire-safe
primitives; input coercion (``parse_*``) turns untyped external values
into the argument's internal type. Both raise ``CoercionError`` rather
than guessing.
"""

from __future__ import annotations

import math
import re
from typing import Any

from gqltypes.domain.errors import CoercionError
from gqltypes.domain.fields import ScalarArg
from gqltypes.domain.kinds import Scalar, ScalarType

MAX_INT = 2**31 - 1
MIN_INT = -(2**31)

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _check_int_range(value: int, original: Any) -> int:
    if not MIN_INT <= value <= MAX_INT:
        raise CoercionError(f"Int cannot represent non 32-bit signed integer {original!r}")
    return value


# --- Output coercion ---


def serialize_int(value: Any) -> int:
    if isinstance(value, bool):
        raise CoercionError(f"Int cannot represent boolean {value!r}")
    if isinstance(value, int):
        return _check_int_range(value, value)
    if isinstance(value, float) and value.is_integer():
        return _check_int_range(int(value), value)
    raise CoercionError(f"Int cannot represent {value!r}")


def serialize_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise CoercionError(f"Float cannot represent {value!r}")
    if not math.isfinite(value):
        raise CoercionError(f"Float cannot represent non-finite {value!r}")
    return float(value)


def serialize_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise CoercionError(f"String cannot represent {value!r}")


def serialize_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise CoercionError(f"Boolean cannot represent {value!r}")


def serialize_id(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise CoercionError(f"ID cannot represent {value!r}")


# --- Input coercion ---


def parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise CoercionError(f"Int cannot represent boolean {value!r}")
    if isinstance(value, int):
        return _check_int_range(value, value)
    if isinstance(value, float):
        if not value.is_integer():
            raise CoercionError(f"Int cannot represent non-integer {value!r}")
        return _check_int_range(int(value), value)
    if isinstance(value, str):
        text = value.strip()
        if not _INT_TEXT.fullmatch(text):
            raise CoercionError(f"Int cannot represent {value!r}")
        return _check_int_range(int(text), value)
    raise CoercionError(f"Int cannot represent {value!r}")


def parse_float(value: Any) -> float:
    if isinstance(value, bool):
        raise CoercionError(f"Float cannot represent boolean {value!r}")
    if isinstance(value, int | float):
        result = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _FLOAT_TEXT.fullmatch(text):
            raise CoercionError(f"Float cannot represent {value!r}")
        result = float(text)
    else:
        raise CoercionError(f"Float cannot represent {value!r}")
    if not math.isfinite(result):
        raise CoercionError(f"Float cannot represent non-finite {value!r}")
    return result


def parse_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise CoercionError(f"String cannot represent {value!r}")


def parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"true", "false"}:
        return value.lower() == "true"
    raise CoercionError(f"Boolean cannot represent {value!r}")


def parse_id(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise CoercionError(f"ID cannot represent {value!r}")


# --- Output kinds ---

Int = Scalar("Int", serialize_int, description="Signed 32-bit integer.")
Float = Scalar("Float", serialize_float, description="Double-precision floating point.")
String = Scalar("String", serialize_string, description="UTF-8 text.")
Boolean = Scalar("Boolean", serialize_boolean, description="true or false.")
ID = Scalar("ID", serialize_id, description="Opaque unique identifier.")

BUILTIN_SCALARS: dict[str, ScalarType] = {s.name: s for s in (Int, Float, String, Boolean, ID)}

# --- Argument builders ---

IntArg = ScalarArg("Int", parse_int)
FloatArg = ScalarArg("Float", parse_float)
StringArg = ScalarArg("String", parse_string)
BooleanArg = ScalarArg("Boolean", parse_boolean)
IDArg = ScalarArg("ID", parse_id)


def is_builtin_scalar(scalar: ScalarType) -> bool:
    return BUILTIN_SCALARS.get(scalar.name) is scalar
