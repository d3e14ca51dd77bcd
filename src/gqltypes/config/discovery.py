"""Locating and reading ``gqltypes.toml``.

The nearest file in the current directory or any parent is used, unless
GQLTYPES_CONFIG names one explicitly (``--config`` is handled by settings).
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from gqltypes.config.models import GqlConfig

CONFIG_FILENAME = "gqltypes.toml"
CONFIG_ENV_VAR = "GQLTYPES_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for gqltypes.toml.

    GQLTYPES_CONFIG wins when set; it must point at an existing file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def normalize_toml(data: dict[str, Any]) -> dict[str, Any]:
    """Map the top-level ``schema`` key onto ``schema_target``."""
    if "schema" in data and "schema_target" not in data:
        data = {**data, "schema_target": data["schema"]}
        del data["schema"]
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> GqlConfig:
    """Load and validate config from a TOML file.

    Returns the default GqlConfig when no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return GqlConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return GqlConfig.model_validate(normalize_toml(data))
