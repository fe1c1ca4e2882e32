"""Tracing helpers built on OpenTelemetry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.trace import Tracer

if TYPE_CHECKING:  # pragma: no cover - typing only
    from salvo.config import TelemetryConfig


_TRACERS: dict[str, Tracer] = {}
_TRACER_PROVIDER: TracerProvider | None = None


def get_tracer(name: str = "salvo") -> Tracer:
    """Return a named tracer, proxied through whichever provider is active."""
    tracer = _TRACERS.get(name)
    if tracer is None:
        tracer = trace.get_tracer(name)
        _TRACERS[name] = tracer
    return tracer


def init_tracing(config: TelemetryConfig) -> Tracer:
    """Install a TracerProvider exporting over OTLP, or to the console without an endpoint."""
    global _TRACER_PROVIDER

    attributes = {
        "service.name": config.service_name,
        "service.namespace": config.service_namespace,
    }
    attributes.update(config.resource_attributes)
    provider = TracerProvider(resource=Resource.create(attributes))

    if config.otlp_traces_endpoint:
        exporter = OTLPSpanExporter(endpoint=config.otlp_traces_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
    else:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _TRACER_PROVIDER = provider
    _TRACERS[config.service_name] = provider.get_tracer(config.service_name)
    return _TRACERS[config.service_name]
