"""CheckService: schema integrity checking.

Single command following the linter pattern. Construction already
rejects most shape errors eagerly; this pass catches what only shows up
once the whole graph is forced: lazy field lists that fail or repeat a
name, colliding type names, empty kinds and degenerate unions/enums.
"""

from __future__ import annotations

from typing import Any

from gqltypes.domain.errors import GqlTypesError
from gqltypes.domain.kinds import NAME_PATTERN, EnumType
from gqltypes.domain.schema import ROOT_TYPE_NAMES
from gqltypes.services.base import BaseService
from gqltypes.services.contracts import CheckResultData, Severity, dump_validated
from gqltypes.services.result import ServiceError, ServiceResult
from gqltypes.services.telemetry import trace_span, traced

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_NAMES = "name_uniqueness"
CAT_FIELDS = "field_integrity"
CAT_UNIONS = "union_integrity"
CAT_ENUMS = "enum_integrity"
CAT_ROOTS = "root_operations"

_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}


def _issue(
    category: str,
    severity: Severity,
    code: str,
    message: str,
    *,
    type_name: str | None = None,
    field_name: str | None = None,
) -> dict[str, Any]:
    return {
        "category": category,
        "severity": severity,
        "code": code,
        "message": message,
        "type_name": type_name,
        "field_name": field_name,
    }


class CheckService(BaseService):
    """Reports schema integrity issues without modifying anything."""

    @traced
    def check(
        self,
        *,
        min_severity: Severity = SEVERITY_WARNING,
        fail_on_warning: bool = False,
    ) -> ServiceResult:
        issues: list[dict[str, Any]] = []
        with trace_span("name_uniqueness"):
            issues.extend(self._check_names())
        with trace_span("field_integrity"):
            issues.extend(self._check_fields())
        with trace_span("union_integrity"):
            issues.extend(self._check_unions())
        with trace_span("enum_integrity"):
            issues.extend(self._check_enums())
        with trace_span("root_operations"):
            issues.extend(self._check_roots())

        threshold = _SEVERITY_RANK[min_severity]
        shown = [i for i in issues if _SEVERITY_RANK[i["severity"]] >= threshold]
        error_count = sum(1 for i in shown if i["severity"] == SEVERITY_ERROR)
        warning_count = len(shown) - error_count
        healthy = error_count == 0 and not (fail_on_warning and warning_count)

        data = dump_validated(
            CheckResultData,
            {
                "issues": shown,
                "count": len(shown),
                "error_count": error_count,
                "warning_count": warning_count,
                "healthy": healthy,
                "types_checked": len(self.index.types),
            },
        )
        if healthy:
            return ServiceResult(ok=True, op="check", data=data)
        return ServiceResult(
            ok=False,
            op="check",
            data=data,
            error=ServiceError(
                code="SCHEMA_UNHEALTHY",
                message=f"{error_count} error(s), {warning_count} warning(s)",
                detail={"error_count": error_count, "warning_count": warning_count},
            ),
        )

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def _check_names(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for collision in self.index.collisions:
            issues.append(
                _issue(
                    CAT_NAMES,
                    SEVERITY_ERROR,
                    "TYPE_NAME_COLLISION",
                    f"Two different {type(collision.first).__name__}/"
                    f"{type(collision.second).__name__} definitions share the name "
                    f"{collision.name!r}",
                    type_name=collision.name,
                )
            )
        reserved = set(ROOT_TYPE_NAMES.values())
        for name in self.index.types:
            if name in reserved:
                issues.append(
                    _issue(
                        CAT_NAMES,
                        SEVERITY_WARNING,
                        "RESERVED_TYPE_NAME",
                        f"Type name {name!r} shadows a root operation type",
                        type_name=name,
                    )
                )
        return issues

    def _check_fields(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for failure in self.index.failures:
            issues.append(
                _issue(
                    CAT_FIELDS,
                    SEVERITY_ERROR,
                    failure.error.code,
                    failure.error.message,
                    type_name=failure.type_name,
                    field_name=failure.error.detail.get("field"),
                )
            )
        failed = {f.type_name for f in self.index.failures}
        for obj in self.index.objects():
            if obj.name in failed:
                continue
            if not obj.fields:
                issues.append(
                    _issue(
                        CAT_FIELDS,
                        SEVERITY_ERROR,
                        "EMPTY_OBJECT",
                        f"Object {obj.name!r} defines no fields",
                        type_name=obj.name,
                    )
                )
        return issues

    def _check_unions(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for union in self.index.unions():
            try:
                members = union.types
            except GqlTypesError:
                continue  # reported under field_integrity
            if not members:
                issues.append(
                    _issue(
                        CAT_UNIONS,
                        SEVERITY_ERROR,
                        "EMPTY_UNION",
                        "Union declares no member types",
                        type_name=union.explicit_name,
                    )
                )
                continue
            seen: set[int] = set()
            for member in members:
                if id(member) in seen:
                    issues.append(
                        _issue(
                            CAT_UNIONS,
                            SEVERITY_WARNING,
                            "DUPLICATE_UNION_MEMBER",
                            f"Union {union.name!r} lists {member.name!r} more than once",
                            type_name=union.name,
                        )
                    )
                seen.add(id(member))
        return issues

    def _check_enums(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for enum_type in [*self.index.enums(), *self.index.unnamed_enums]:
            issues.extend(self._check_enum(enum_type))
        for _ in self.index.unnamed_enums:
            issues.append(
                _issue(
                    CAT_ENUMS,
                    SEVERITY_WARNING,
                    "UNNAMED_ENUM",
                    "Enum has no name and cannot be referenced in SDL output",
                )
            )
        return issues

    @staticmethod
    def _check_enum(enum_type: EnumType) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        if not enum_type.values:
            issues.append(
                _issue(
                    CAT_ENUMS,
                    SEVERITY_ERROR,
                    "EMPTY_ENUM",
                    "Enum declares no values",
                    type_name=enum_type.name,
                )
            )
        names = enum_type.value_names()
        seen: set[str] = set()
        for value_name in names:
            if value_name in seen:
                issues.append(
                    _issue(
                        CAT_ENUMS,
                        SEVERITY_ERROR,
                        "DUPLICATE_ENUM_VALUE",
                        f"Enum value {value_name!r} is declared more than once",
                        type_name=enum_type.name,
                    )
                )
            seen.add(value_name)
            if not NAME_PATTERN.match(value_name):
                issues.append(
                    _issue(
                        CAT_ENUMS,
                        SEVERITY_WARNING,
                        "INVALID_ENUM_VALUE_NAME",
                        f"Enum value {value_name!r} is not a valid identifier",
                        type_name=enum_type.name,
                    )
                )
        return issues

    def _check_roots(self) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        if not self.schema.queries:
            issues.append(
                _issue(
                    CAT_ROOTS,
                    SEVERITY_WARNING,
                    "EMPTY_QUERY_ROOT",
                    "Schema defines no query fields",
                    type_name="Query",
                )
            )
        if self.schema.mutations is not None and not self.schema.mutations:
            issues.append(
                _issue(
                    CAT_ROOTS,
                    SEVERITY_WARNING,
                    "EMPTY_MUTATION_ROOT",
                    "Schema declares mutations but lists none",
                    type_name="Mutation",
                )
            )
        return issues
