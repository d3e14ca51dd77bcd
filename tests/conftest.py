"""Shared pytest fixtures and helpers for gqltypes tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from gqltypes import Schema
from gqltypes.services.execution import Executor
from gqltypes.services.telemetry import _current_span, disable_telemetry
from tests.example_schema import build_schema


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def schema() -> Schema:
    """A fresh User/Book schema (lazy field lists not yet forced)."""
    return build_schema()


@pytest.fixture
def executor(schema: Schema) -> Executor:
    return Executor(schema)


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory as CWD, with no config discovered above it."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GQLTYPES_CONFIG", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo root logger changes made by configure_logging (CLI runs)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("gqltypes")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)

