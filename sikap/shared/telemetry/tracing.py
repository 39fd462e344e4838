"""Span helpers for pipeline stages.

Span attributes from call arguments are limited to an allowlist: filenames,
tokens and file bytes never leave the process.
"""

import asyncio
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

SAFE_ARGUMENT_NAMES = frozenset({
    "application_id", "document_id", "document_type", "category",
    "declared_mime_type", "relative_path",
})

_tracer = trace.get_tracer("sikap")


@contextmanager
def _stage_span(name: str, kwargs: dict[str, Any]) -> Iterator[trace.Span]:
    with _tracer.start_as_current_span(name, record_exception=False) as span:
        for key, value in kwargs.items():
            if key in SAFE_ARGUMENT_NAMES and value is not None:
                span.set_attribute(f"sikap.{key}", str(value))
        try:
            yield span
        except Exception as e:
            # Exception type only; messages can carry filenames.
            span.set_status(Status(StatusCode.ERROR, type(e).__name__))
            span.set_attribute("sikap.error", type(e).__name__)
            raise
        span.set_status(Status(StatusCode.OK))


def traced(name: str | None = None) -> Callable:
    """Run the decorated function (sync or async) inside a span.

    Without a configured tracer provider the span is a no-op.
    """

    def decorator(func: Callable) -> Callable:
        span_name = name or func.__qualname__

        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _stage_span(span_name, kwargs):
                    return await func(*args, **kwargs)

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _stage_span(span_name, kwargs):
                return func(*args, **kwargs)

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(f"sikap.{key}", value)
