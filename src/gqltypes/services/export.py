"""ExportService: render a schema as SDL-style text.

Rendering is read-only and follows discovery order unless
``sort_types`` is set. Built-in scalars are omitted by default.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import assert_never

from gqltypes.config.models import SdlConfig
from gqltypes.domain.errors import GqlTypesError
from gqltypes.domain.fields import Field
from gqltypes.domain.kinds import (
    EnumType,
    NamedType,
    ObjectType,
    ScalarType,
    UnionType,
    named_type,
    render_type,
)
from gqltypes.domain.scalars import is_builtin_scalar
from gqltypes.domain.schema import ROOT_TYPE_NAMES, Schema
from gqltypes.services.base import BaseService
from gqltypes.services.contracts import SdlResultData, dump_validated
from gqltypes.services.result import ServiceResult
from gqltypes.services.telemetry import traced


def _description(text: str | None, indent: str = "") -> list[str]:
    if not text:
        return []
    if "\n" in text or '"' in text:
        escaped = text.replace('"""', '\\"""')
        body = "\n".join(f"{indent}{line}" for line in escaped.splitlines())
        return [f'{indent}"""', body, f'{indent}"""']
    return [f'{indent}"{text}"']


class ExportService(BaseService):
    """Renders schemas for humans and diff tools."""

    def __init__(self, schema: Schema, config: SdlConfig | None = None) -> None:
        super().__init__(schema)
        self._config = config or SdlConfig()
        self._omitted: list[str] = []

    @traced
    def sdl(self) -> ServiceResult:
        try:
            text = self.render()
        except GqlTypesError as exc:
            return ServiceResult.failure("sdl", exc)
        types = [self._summary(name, named) for name, named in self._named_types()]
        data = dump_validated(
            SdlResultData, {"sdl": text, "type_count": len(types), "types": types}
        )
        warnings = [
            f"Skipped {failure.type_name}: {failure.error.message}"
            for failure in self.index.failures
        ]
        warnings.extend(
            f"Omitted {path}: unnamed enums have no SDL form" for path in self._omitted
        )
        return ServiceResult(ok=True, op="sdl", data=data, warnings=warnings)

    def render(self) -> str:
        """SDL text; fields typed with an unnamed enum are left out."""
        self._omitted = []
        blocks: list[str] = []
        for op in self.schema.operations():
            blocks.append(self._render_object(ROOT_TYPE_NAMES[op], self.schema.root_fields(op)))
        failed = {f.type_name for f in self.index.failures}
        for name, named in self._named_types():
            if name in failed:
                continue
            blocks.append(self._render_named(named))
        return "\n\n".join(blocks) + "\n"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _named_types(self) -> list[tuple[str, NamedType]]:
        types = [
            (name, t)
            for name, t in self.index.types.items()
            if self._config.include_builtin_scalars
            or not (isinstance(t, ScalarType) and is_builtin_scalar(t))
        ]
        if self._config.sort_types:
            types.sort(key=lambda item: item[0])
        return types

    def _descr(self, text: str | None, indent: str = "") -> list[str]:
        if not self._config.include_descriptions:
            return []
        return _description(text, indent)

    def _render_named(self, named: NamedType) -> str:
        match named:
            case ObjectType():
                return self._render_object(named.name, named.fields, named.description)
            case UnionType():
                lines = self._descr(named.description)
                members = " | ".join(m.name for m in named.types)
                lines.append(f"union {named.name} = {members}")
                return "\n".join(lines)
            case EnumType():
                lines = self._descr(named.description)
                lines.append(f"enum {named.name} {{")
                lines.extend(f"  {value}" for value in named.value_names())
                lines.append("}")
                return "\n".join(lines)
            case ScalarType():
                lines = self._descr(named.description)
                lines.append(f"scalar {named.name}")
                return "\n".join(lines)
            case _:
                assert_never(named)

    def _render_object(
        self, name: str, fields: Sequence[Field], description: str | None = None
    ) -> str:
        lines = self._descr(description)
        lines.append(f"type {name} {{")
        for f in fields:
            leaf = named_type(f.type)
            if isinstance(leaf, EnumType) and leaf.name is None:
                self._omitted.append(f"{name}.{f.name}")
                continue
            lines.extend(self._descr(f.description, "  "))
            args = ", ".join(f"{a.name}: {a.scalar.name}" for a in f.args)
            head = f"{f.name}({args})" if args else f.name
            lines.append(f"  {head}: {render_type(f.type)}")
        lines.append("}")
        return "\n".join(lines)

    def _summary(self, name: str, named: NamedType) -> dict[str, object]:
        summary: dict[str, object] = {"name": name, "kind": str(named.kind)}
        if isinstance(named, ObjectType):
            summary["resolved"] = named.is_resolved
            try:
                summary["fields"] = len(named.fields)
            except GqlTypesError:
                summary["fields"] = None
        return summary
