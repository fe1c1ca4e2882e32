"""Public telemetry helpers for Salvo."""

from __future__ import annotations

from .logger import get_logger, init_logging
from .metrics import get_meter, init_metrics
from .setup import init_telemetry
from .tracer import get_tracer, init_tracing

__all__ = [
    "get_logger",
    "get_tracer",
    "get_meter",
    "init_logging",
    "init_tracing",
    "init_metrics",
    "init_telemetry",
]
