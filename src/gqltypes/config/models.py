"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``gqltypes.toml`` only holds
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    min_severity: Literal["warning", "error"] = "warning"
    fail_on_warning: bool = False


class ExecutionConfig(BaseModel):
    """[execution] section."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=32, ge=1)
    mask_errors: bool = False


class SdlConfig(BaseModel):
    """[sdl] section."""

    model_config = {"frozen": True}

    sort_types: bool = False
    include_descriptions: bool = True
    include_builtin_scalars: bool = False


class GqlConfig(BaseModel):
    """Full ``gqltypes.toml`` contents."""

    model_config = {"frozen": True}

    schema_target: str | None = None
    check: CheckConfig = Field(default_factory=CheckConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    sdl: SdlConfig = Field(default_factory=SdlConfig)
