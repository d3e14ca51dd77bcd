"""Root CLI group for gqltypes with global flags and command registration."""

from __future__ import annotations

import click

from gqltypes import __version__
from gqltypes.commands import register_commands
from gqltypes.commands._context import AppContext
from gqltypes.config.settings import GqlSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="gqltypes")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing telemetry.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-s", "--schema", "schema_target", default=None, help="Schema target 'module:attribute'."
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    schema_target: str | None,
) -> None:
    """gqltypes: inspect and check typed GraphQL-like schemas."""
    settings = GqlSettings.from_cli(
        config_path=config_path,
        schema_target=schema_target,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
