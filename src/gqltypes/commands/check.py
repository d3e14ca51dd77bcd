"""Command: schema integrity checking."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gqltypes.commands._base import GqlCommand

if TYPE_CHECKING:
    from gqltypes.commands._context import AppContext


@click.command(
    cls=GqlCommand,
    examples="""\
  gqltypes --schema app.schema:schema check
  gqltypes check --errors-only
  gqltypes check --min-severity error
  gqltypes check --strict
  gqltypes --json check""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default=None,
    help="Hide issues below this severity (default from [check] config).",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option("--strict", is_flag=True, help="Fail on warnings as well as errors.")
@click.pass_obj
def check(app: AppContext, min_severity: str | None, errors_only: bool, strict: bool) -> None:
    """Check schema integrity (names, lazy fields, unions, enums, roots)."""
    from gqltypes.services.check import CheckService

    config = app.settings.check
    threshold = "error" if errors_only else (min_severity or config.min_severity)
    svc = CheckService(app.schema)
    app.emit(
        svc.check(
            min_severity=threshold,  # type: ignore[arg-type]
            fail_on_warning=strict or config.fail_on_warning,
        )
    )
