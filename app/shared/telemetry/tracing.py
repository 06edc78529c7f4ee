"""Span helpers for application code.

With no tracer provider installed (telemetry off) the global provider
hands out non-recording spans, so these helpers cost almost nothing.
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

_tracer = trace.get_tracer("app")

# Keyword arguments copied onto spans as arg.<name>. Search terms are
# user input and are never recorded.
_RECORDED_ARGS = frozenset({"page", "per_page", "offset", "limit", "ttl"})


def _record_args(span: trace.Span, kwargs: dict[str, Any]) -> None:
    for name, value in kwargs.items():
        if name in _RECORDED_ARGS:
            span.set_attribute(f"arg.{name}", value)


def _fail(span: trace.Span, exc: BaseException) -> None:
    span.record_exception(exc)
    span.set_status(Status(StatusCode.ERROR, type(exc).__name__))


def traced(
    operation_name: str | None = None,
    attributes: dict[str, str | int | float | bool] | None = None,
) -> Callable:
    """Run the decorated function (sync or async) inside its own span.

    Args:
        operation_name: Span name; defaults to module.qualname.
        attributes: Static attributes set on every span.

    Exceptions are recorded on the span and re-raised unchanged.
    """

    def decorator(func: Callable) -> Callable:
        name = operation_name or f"{func.__module__}.{func.__qualname__}"

        def start() -> Any:
            return _tracer.start_as_current_span(
                name,
                attributes=attributes,
                record_exception=False,
                set_status_on_exception=False,
            )

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with start() as span:
                    _record_args(span, kwargs)
                    try:
                        return await func(*args, **kwargs)
                    except Exception as exc:
                        _fail(span, exc)
                        raise

            return async_wrapper

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with start() as span:
                _record_args(span, kwargs)
                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    _fail(span, exc)
                    raise

        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set attributes on the current span (no-op when it is not recording)."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)
