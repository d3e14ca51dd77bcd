"""Span trees for ``--verbose`` runs.

Disabled, every hook costs one ContextVar lookup. Enabled, each
``@traced`` call opens a root span, ``trace_span`` blocks nest beneath
whichever span is current, and the finished tree lands in
``result.meta["telemetry"]`` of any pydantic result with a ``meta`` field.

asyncio tasks copy the current context when created, so spans opened in
``asyncio.gather`` children hang off the span that spawned them.
"""

from __future__ import annotations

import functools
import inspect
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import BaseModel

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

log = structlog.get_logger("gqltypes.telemetry")


@dataclass
class Span:
    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    ok: bool = True

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds, 0.0 while the span is still open."""
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def close(self, *, ok: bool = True) -> None:
        self.finished = time.perf_counter()
        self.ok = ok

    def annotate(self, **attributes: Any) -> None:
        self.attributes.update(attributes)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if not self.ok:
            out["ok"] = False
        if self.attributes:
            out["attributes"] = dict(self.attributes)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a child of the current span for the duration of the block.

    Yields None when telemetry is off or nothing is being traced.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name, parent=parent)
    parent.children.append(span)
    token = _current_span.set(span)
    ok = False
    try:
        yield span
        ok = True
    finally:
        span.close(ok=ok)
        _current_span.reset(token)


def _start(name: str) -> tuple[Span, Token[Span | None]]:
    span = Span(name=name)
    return span, _current_span.set(span)


def _finish(span: Span, token: Token[Span | None], *, ok: bool) -> None:
    _current_span.reset(token)
    span.close(ok=ok)
    log.debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 2),
        ok=ok,
        children=len(span.children),
    )


def _attach(result: Any, span: Span) -> Any:
    """Copy *result* with the span tree merged into its ``meta``."""
    if not isinstance(result, BaseModel) or "meta" not in type(result).model_fields:
        return result
    meta = {**(result.meta or {}), "telemetry": span.to_dict()}
    return result.model_copy(update={"meta": meta})


def traced[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Trace each call of *func* as a root span; coroutine functions included."""
    name = func.__qualname__

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def run_async(*args: P.args, **kwargs: P.kwargs) -> Any:
            if not _enabled.get():
                return await func(*args, **kwargs)
            span, token = _start(name)
            try:
                result = await func(*args, **kwargs)
            except Exception:
                _finish(span, token, ok=False)
                raise
            _finish(span, token, ok=True)
            return _attach(result, span)

        return run_async  # type: ignore[return-value]

    @functools.wraps(func)
    def run(*args: P.args, **kwargs: P.kwargs) -> R:
        if not _enabled.get():
            return func(*args, **kwargs)
        span, token = _start(name)
        try:
            result = func(*args, **kwargs)
        except Exception:
            _finish(span, token, ok=False)
            raise
        _finish(span, token, ok=True)
        return _attach(result, span)  # type: ignore[no-any-return]

    return run


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def telemetry_enabled() -> bool:
    return _enabled.get()


def get_current_span() -> Span | None:
    """The innermost open span, for ad-hoc ``annotate`` calls."""
    return _current_span.get() if _enabled.get() else None
