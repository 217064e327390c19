"""Span helpers: one span per provisioning operation or provider round trip."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

_tracer = trace.get_tracer("custom_domains")

AsyncFunc = Callable[..., Awaitable[Any]]


def _record_error(span: trace.Span, exc: Exception) -> None:
    """Mark the span failed and copy scalar error details (provider, code, fatal)."""
    span.set_status(Status(StatusCode.ERROR, str(exc)))
    span.record_exception(exc)
    error_code = getattr(exc, "error_code", None)
    if error_code:
        span.set_attribute("error.code", error_code)
    details = getattr(exc, "details", None) or {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)):
            span.set_attribute(f"error.{key}", value)


def traced(span_name: str) -> Callable[[AsyncFunc], AsyncFunc]:
    """Wrap a coroutine function in a span named span_name.

    Arguments are not recorded (they may carry tokens); use
    add_span_attributes() inside the function for safe values.
    """

    def decorator(func: AsyncFunc) -> AsyncFunc:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            with _tracer.start_as_current_span(
                span_name, record_exception=False, set_status_on_exception=False
            ) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _record_error(span, e)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def add_span_attributes(**attributes: Any) -> None:
    """Set attributes on the current span; None values are skipped."""
    span = trace.get_current_span()
    if not span.is_recording():
        return
    for key, value in attributes.items():
        if value is not None:
            span.set_attribute(key, value)


def get_trace_id() -> str | None:
    """Current trace id as 32 hex chars, or None outside a valid span."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return None
    return format(ctx.trace_id, "032x")
