"""What services hand back to the CLI.

Service methods return a ServiceResult instead of raising; a
GqlTypesError caught at the service boundary becomes ``ok=False`` with a
ServiceError carrying its code, message and JSON-safe detail.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from gqltypes.domain.errors import GqlTypesError

_PLAIN = str | int | float | bool | list


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: GqlTypesError) -> ServiceError:
        """Copy *exc*, repr-ing detail values JSON cannot carry."""
        detail = {
            key: value if isinstance(value, _PLAIN) else repr(value)
            for key, value in exc.detail.items()
        }
        return cls(code=exc.code, message=exc.message, detail=detail)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False when the operation failed; ``error`` then says why.
        op: Operation name, e.g. ``"check"`` or ``"graph"``.
        data: Payload, shaped per operation by :mod:`gqltypes.services.contracts`.
        warnings: Problems that did not stop the operation.
        error: Set only on failure.
        meta: Extra information such as the telemetry span tree.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: GqlTypesError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
