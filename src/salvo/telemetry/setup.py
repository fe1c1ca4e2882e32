"""One-call telemetry bootstrap for entry points."""

from __future__ import annotations

import logging

from salvo.config import TelemetryConfig, load_telemetry_config

from .logger import configure_console_logging, init_logging
from .metrics import init_metrics
from .tracer import init_tracing


def init_telemetry(
    config: TelemetryConfig | None = None, log_level: str | int | None = None
) -> TelemetryConfig:
    """Set up console logging, then start whichever exporters the config enables.

    Without an explicit config the environment-derived one is used.
    """
    if log_level is not None:
        configure_console_logging(log_level)

    resolved = config or load_telemetry_config()
    started = []
    if resolved.enable_tracing:
        init_tracing(resolved)
        started.append("tracing")
    if resolved.enable_metrics:
        init_metrics(resolved)
        started.append("metrics")
    if resolved.enable_logging:
        init_logging(resolved)
        started.append("logging")
    if started:
        logging.getLogger(__name__).info(
            "telemetry_started",
            extra={"exporters": ",".join(started), "service": resolved.service_name},
        )
    return resolved
