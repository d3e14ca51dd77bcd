"""Resolve ``package.module:attribute`` targets to Schema objects."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

from gqltypes.domain.errors import GqlTypesError, SchemaLoadError
from gqltypes.domain.schema import Schema

logger = logging.getLogger(__name__)


def load_schema(target: str, *, search_path: Path | None = None) -> Schema:
    """Import *target* and return the Schema it names.

    The attribute may also be a zero-argument callable returning a Schema.
    *search_path* (usually the project root) is put on ``sys.path`` first
    so project-local modules import without installation.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise SchemaLoadError(
            f"Schema target must look like 'package.module:attribute', got {target!r}",
            target=target,
        )

    if search_path is not None:
        entry = str(search_path.resolve())
        if entry not in sys.path:
            sys.path.insert(0, entry)

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise SchemaLoadError(
            f"Cannot import {module_name!r}: {exc}", target=target
        ) from exc
    except GqlTypesError as exc:
        raise SchemaLoadError(
            f"Building {module_name!r} failed: {exc.message}", target=target, cause=exc.code
        ) from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise SchemaLoadError(
                f"{module_name!r} has no attribute {attr_path!r}", target=target
            ) from exc

    if callable(obj) and not isinstance(obj, Schema):
        try:
            obj = obj()
        except GqlTypesError as exc:
            raise SchemaLoadError(
                f"Schema factory {target!r} failed: {exc.message}", target=target, cause=exc.code
            ) from exc
        except Exception as exc:
            raise SchemaLoadError(
                f"Schema factory {target!r} failed: {exc}", target=target
            ) from exc
    if not isinstance(obj, Schema):
        raise SchemaLoadError(
            f"{target!r} is a {type(obj).__name__}, not a Schema", target=target
        )
    logger.debug("Loaded schema %s", target)
    return obj
