"""Rich/JSON output helpers.

The CLI renders a ServiceResult for humans (Rich) or machines (--json).
SDL output is printed verbatim so it can be redirected to a file.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from gqltypes.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from gqltypes.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _render_check(console: Console, data: dict[str, Any]) -> None:
    issues = data.get("issues", [])
    if issues:
        table = Table(show_header=True, header_style="gql.key", box=None)
        table.add_column("severity")
        table.add_column("code")
        table.add_column("type")
        table.add_column("message")
        for issue in issues:
            severity = issue["severity"]
            table.add_row(
                f"[{style_for_severity(severity)}]{severity}[/]",
                f"[gql.code]{issue['code']}[/]",
                escape(issue.get("type_name") or "-"),
                escape(issue["message"]),
            )
        console.print(table)
    console.print(
        f"[gql.key]types checked:[/] {data.get('types_checked', 0)}  "
        f"[gql.key]errors:[/] {data.get('error_count', 0)}  "
        f"[gql.key]warnings:[/] {data.get('warning_count', 0)}"
    )


def _render_graph(console: Console, data: dict[str, Any]) -> None:
    for edge in data.get("edges", []):
        via = ", ".join(edge["via"])
        console.print(f"  [gql.type]{edge['source']}[/] -> [gql.type]{edge['target']}[/] ({via})")


def _render_cycles(console: Console, data: dict[str, Any]) -> None:
    for cycle in data.get("cycles", []):
        console.print("  " + " <-> ".join(f"[gql.type]{name}[/]" for name in cycle))


def _render_generic(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if isinstance(value, dict | list):
            rendered = _json.dumps(value, separators=(",", ":"))
        else:
            rendered = str(value)
        console.print(f"  [gql.key]{key}:[/] {escape(rendered)}")


_RENDERERS = {
    "check": _render_check,
    "graph": _render_graph,
    "cycles": _render_cycles,
}


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if result.ok and result.op == "sdl":
        return str(result.data.get("sdl", "")).rstrip("\n")

    console = create_console()
    if result.ok:
        console.print(f"[gql.ok]OK[/]: [gql.op]{result.op}[/]")
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(f"[gql.error]ERROR[/]: [gql.op]{result.op}[/] - {escape(message)}")
    if not settings.quiet and result.data:
        _RENDERERS.get(result.op, _render_generic)(console, result.data)
    if settings.verbose and result.meta:
        console.print(f"[gql.key]meta:[/] {escape(_json.dumps(result.meta))}")
    return get_output(console).rstrip("\n")
