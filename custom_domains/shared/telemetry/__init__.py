"""Logging setup, OpenTelemetry wiring and span helpers."""

from custom_domains.shared.telemetry.logging import get_logger, setup_logging
from custom_domains.shared.telemetry.telemetry import setup_tracing, shutdown_tracing
from custom_domains.shared.telemetry.tracing import (
    add_span_attributes,
    get_trace_id,
    traced,
)

__all__ = [
    "add_span_attributes",
    "get_logger",
    "get_trace_id",
    "setup_logging",
    "setup_tracing",
    "shutdown_tracing",
    "traced",
]
