"""Metrics helper utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import metrics as otel_metrics
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.metrics import Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

if TYPE_CHECKING:  # pragma: no cover
    from salvo.config import TelemetryConfig

_METER_PROVIDER: MeterProvider | None = None
_METERS: dict[str, Meter] = {}


def get_meter(name: str = "salvo") -> Meter:
    meter = _METERS.get(name)
    if meter is None:
        meter = otel_metrics.get_meter(name)
        _METERS[name] = meter
    return meter


def init_metrics(config: TelemetryConfig) -> Meter:
    global _METER_PROVIDER

    resource = Resource.create(
        {
            "service.name": config.service_name,
            "service.namespace": config.service_namespace,
            **config.resource_attributes,
        }
    )

    readers = []
    if config.otlp_metrics_endpoint:
        exporter = OTLPMetricExporter(endpoint=config.otlp_metrics_endpoint, insecure=True)
        readers.append(PeriodicExportingMetricReader(exporter, export_interval_millis=5000))

    provider = MeterProvider(resource=resource, metric_readers=readers)
    otel_metrics.set_meter_provider(provider)

    _METER_PROVIDER = provider
    _METERS[config.service_name] = provider.get_meter(config.service_name)
    return _METERS[config.service_name]
