"""Shared telemetry: OpenTelemetry tracing config and tracer helpers."""

from advisy.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    get_tracer,
    set_telemetry,
)

__all__ = [
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "get_tracer",
]
