"""Rich Console factory and theme for gqltypes output.

Consoles render into a StringIO buffer so that formatting stays a pure
``format_result() -> str`` function. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

GQL_THEME = Theme(
    {
        "gql.ok": "bold green",
        "gql.error": "bold red",
        "gql.warning": "bold yellow",
        "gql.op": "bold cyan",
        "gql.key": "dim",
        "gql.type": "bold blue",
        "gql.field": "bold",
        "gql.code": "magenta",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "gql.error",
    "warning": "gql.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=GQL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    return _SEVERITY_STYLES.get(severity, "")
