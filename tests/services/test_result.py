"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gqltypes.domain.errors import DuplicateNameError
from gqltypes.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="check")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="check")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_failure_from_exception(self) -> None:
        exc = DuplicateNameError("Duplicate field 'a'", type="T", field="a")
        result = ServiceResult.failure("check", exc)
        assert result.ok is False
        assert result.error == ServiceError(
            code="DUPLICATE_NAME",
            message="Duplicate field 'a'",
            detail={"type": "T", "field": "a"},
        )

    def test_non_plain_detail_is_repr(self) -> None:
        exc = DuplicateNameError("dup", owner=object)
        error = ServiceError.from_exception(exc)
        assert error.detail["owner"] == repr(object)

    def test_json_round_trip(self) -> None:
        result = ServiceResult(ok=True, op="graph", data={"nodes": ["A"]}, warnings=["w"])
        assert ServiceResult.model_validate_json(result.model_dump_json()) == result
