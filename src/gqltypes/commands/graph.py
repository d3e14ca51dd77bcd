"""Command: inspect the type reference graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gqltypes.commands._base import GqlCommand

if TYPE_CHECKING:
    from gqltypes.commands._context import AppContext


@click.command(
    cls=GqlCommand,
    examples="""\
  gqltypes graph
  gqltypes graph --cycles
  gqltypes graph --reachable User
  gqltypes --json graph""",
)
@click.option("--cycles", is_flag=True, help="List reference cycles.")
@click.option("--reachable", "reachable_from", default=None, help="Types reachable from NAME.")
@click.pass_obj
def graph(app: AppContext, cycles: bool, reachable_from: str | None) -> None:
    """Show which types reference which."""
    from gqltypes.services.graph import GraphService

    svc = GraphService(app.schema)
    if cycles:
        app.emit(svc.cycles())
    elif reachable_from:
        app.emit(svc.reachable(reachable_from))
    else:
        app.emit(svc.summary())
