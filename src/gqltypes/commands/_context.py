"""Per-invocation state handed to every subcommand.

The root group builds one AppContext and commands receive it through
``@click.pass_obj``. Importing the user's schema waits until a command
asks for it, so ``--help`` and ``--version`` work without a target.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gqltypes.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from gqltypes.config.settings import GqlSettings
    from gqltypes.domain.schema import Schema
    from gqltypes.services.result import ServiceResult


class AppContext:
    def __init__(self, settings: GqlSettings) -> None:
        from gqltypes.config.logging import configure_logging
        from gqltypes.services.telemetry import enable_telemetry

        self.settings = settings
        self._schema: Schema | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    @property
    def schema(self) -> Schema:
        """The target schema, imported on first access.

        A missing or broken target is emitted as a failed ``load_schema``
        result, which exits with code 1.
        """
        if self._schema is not None:
            return self._schema

        from gqltypes.domain.errors import SchemaLoadError
        from gqltypes.services.loader import load_schema
        from gqltypes.services.result import ServiceResult

        target = self.settings.schema_target
        try:
            if not target:
                raise SchemaLoadError(
                    "No schema target: pass --schema or set 'schema' in gqltypes.toml"
                )
            self._schema = load_schema(target, search_path=self.settings.project_root)
        except SchemaLoadError as exc:
            self.emit(ServiceResult.failure("load_schema", exc))
        assert self._schema is not None
        return self._schema

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; failures go to stderr and exit with code 1.

        Warnings of a successful result are repeated on stderr unless the
        output is JSON, where they are already part of the payload.
        """
        out = self.output_settings
        text = format_result(result, settings=out)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not out.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
