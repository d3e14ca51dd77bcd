"""Unified settings: CLI flags, env vars and ``gqltypes.toml`` in one object.

Precedence, highest first: keyword arguments (CLI flags), ``GQLTYPES_*``
environment variables (``__`` separates nested keys, e.g.
``GQLTYPES_EXECUTION__MAX_DEPTH``), the TOML file, then the defaults baked
into :mod:`gqltypes.config.models`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from gqltypes.config.discovery import find_config, normalize_toml
from gqltypes.config.models import CheckConfig, ExecutionConfig, SdlConfig

# File chosen by GqlSettings.from_cli, read while the model is built.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*; syntax errors become a ClickException."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc
    return normalize_toml(data)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings values taken from one ``gqltypes.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(toml_path) if toml_path is not None else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


def _locate_config(config_path: str | None, project_root: Path | None) -> Path | None:
    if not config_path:
        return find_config(project_root)
    explicit = Path(config_path)
    if not explicit.is_file():
        raise click.ClickException(f"Config file not found: {config_path}")
    return explicit


class GqlSettings(BaseSettings):
    """Settings for the gqltypes CLI and services.

    Attributes:
        project_root: Directory holding ``gqltypes.toml`` (or the CWD).
            Put on ``sys.path`` when the schema target is imported.
        config_path: The config file in effect, if any.
        schema_target: ``package.module:attribute`` naming the Schema.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GQLTYPES_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    schema_target: str | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    check: CheckConfig = Field(default_factory=CheckConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    sdl: SdlConfig = Field(default_factory=SdlConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> GqlSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* must exist; otherwise ``gqltypes.toml`` is
        discovered by walking up from *project_root* (or the CWD). Flags
        left as ``None`` are dropped so they never mask env or TOML values.
        """
        toml_path = _locate_config(config_path, project_root)
        if project_root is None:
            project_root = toml_path.parent if toml_path is not None else Path.cwd()
        overrides = {key: value for key, value in cli_flags.items() if value is not None}
        token = _active_toml.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **overrides)
        finally:
            _active_toml.reset(token)
