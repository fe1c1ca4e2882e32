"""Logging helpers with optional OpenTelemetry export."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from salvo.config import TelemetryConfig

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s "
    "| trace_id=%(otelTraceID)s span_id=%(otelSpanID)s"
)

_HANDLER_INSTALLED = False


class _OtelContextFilter(logging.Filter):
    """Ensures trace/span placeholders exist even when no context is active."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        if not hasattr(record, "otelTraceID"):
            record.otelTraceID = "-"
        if not hasattr(record, "otelSpanID"):
            record.otelSpanID = "-"
        return True


def get_logger(name: str = "salvo") -> logging.Logger:
    return logging.getLogger(name)


def configure_console_logging(level: str | int = logging.WARNING) -> None:
    """Install the default stderr handler on the root logger once."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for existing in root_logger.handlers:
        existing.addFilter(_OtelContextFilter())


def init_logging(config: TelemetryConfig) -> logging.Logger:
    """Ship log records over OTLP when an endpoint is configured."""
    global _HANDLER_INSTALLED

    logger = get_logger(config.service_name)
    if not config.otlp_logs_endpoint or _HANDLER_INSTALLED:
        return logger

    from opentelemetry._logs import set_logger_provider
    from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
    from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
    from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
    from opentelemetry.sdk.resources import Resource

    attributes = {
        "service.name": config.service_name,
        "service.namespace": config.service_namespace,
    }
    attributes.update(config.resource_attributes)
    provider = LoggerProvider(resource=Resource.create(attributes))
    exporter = OTLPLogExporter(endpoint=config.otlp_logs_endpoint, insecure=True)
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    set_logger_provider(provider)

    handler = LoggingHandler(level=logging.INFO, logger_provider=provider)
    handler.addFilter(_OtelContextFilter())
    logging.getLogger().addHandler(handler)
    _HANDLER_INSTALLED = True
    return logger
