"""Subcommand modules for gqltypes.

register_commands() uses deferred imports to keep ``gqltypes --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from gqltypes.commands.check import check
    from gqltypes.commands.graph import graph
    from gqltypes.commands.sdl import sdl

    cli.add_command(check)
    cli.add_command(sdl)
    cli.add_command(graph)
