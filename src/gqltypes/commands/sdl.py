"""Command: print the schema as SDL-style text."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from gqltypes.commands._base import GqlCommand

if TYPE_CHECKING:
    from gqltypes.commands._context import AppContext


@click.command(
    cls=GqlCommand,
    examples="""\
  gqltypes --schema app.schema:schema sdl
  gqltypes sdl --sort > schema.graphql
  gqltypes sdl --no-descriptions --builtins""",
)
@click.option("--sort", "sort_types", is_flag=True, help="Sort types by name.")
@click.option("--no-descriptions", is_flag=True, help="Omit description strings.")
@click.option("--builtins", is_flag=True, help="Also print built-in scalars.")
@click.pass_obj
def sdl(app: AppContext, sort_types: bool, no_descriptions: bool, builtins: bool) -> None:
    """Print the schema in SDL notation.

    Flags only switch options on; defaults come from the [sdl] config.
    """
    from gqltypes.services.export import ExportService

    overrides: dict[str, Any] = {}
    if sort_types:
        overrides["sort_types"] = True
    if no_descriptions:
        overrides["include_descriptions"] = False
    if builtins:
        overrides["include_builtin_scalars"] = True
    config = app.settings.sdl.model_copy(update=overrides)
    app.emit(ExportService(app.schema, config).sdl())
