"""Runtime configuration loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, Field

TRUTHY = {"1", "true", "yes", "on"}


def _bool_from_env(*names: str) -> bool | None:
    for name in names:
        value = os.getenv(name)
        if value is not None:
            return value.strip().lower() in TRUTHY
    return None


def _with_suffix(base: str | None, suffix: str) -> str | None:
    if not base:
        return None
    return f"{base.rstrip('/')}/{suffix}"


class TelemetryConfig(BaseModel):
    """Which OpenTelemetry exporters to start and where they send data."""

    enable_tracing: bool = False
    enable_metrics: bool = False
    enable_logging: bool = False
    otlp_traces_endpoint: str | None = None
    otlp_metrics_endpoint: str | None = None
    otlp_logs_endpoint: str | None = None
    service_name: str = "salvo"
    service_namespace: str = "game"
    resource_attributes: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides: Any) -> "TelemetryConfig":
        """Construct config from env vars (`SALVO_*` + `OTEL_*`)."""

        data: Dict[str, Any] = cls().model_dump()
        data.update(overrides)

        bool_fields = {
            "enable_tracing": ("SALVO_ENABLE_TRACING", "OTEL_TRACES_ENABLED"),
            "enable_metrics": ("SALVO_ENABLE_METRICS", "OTEL_METRICS_ENABLED"),
            "enable_logging": ("SALVO_ENABLE_LOGGING", "OTEL_LOGS_ENABLED"),
        }
        for field, env_names in bool_fields.items():
            env_value = _bool_from_env(*env_names)
            if env_value is not None:
                data[field] = env_value

        base_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        endpoints = {
            "otlp_traces_endpoint": ("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", "v1/traces"),
            "otlp_metrics_endpoint": ("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT", "v1/metrics"),
            "otlp_logs_endpoint": ("OTEL_EXPORTER_OTLP_LOGS_ENDPOINT", "v1/logs"),
        }
        for field, (env_name, suffix) in endpoints.items():
            if data.get(field) is None:
                data[field] = os.getenv(env_name) or _with_suffix(base_endpoint, suffix)

        if os.getenv("OTEL_SERVICE_NAME"):
            data["service_name"] = os.environ["OTEL_SERVICE_NAME"]
        if os.getenv("OTEL_SERVICE_NAMESPACE"):
            data["service_namespace"] = os.environ["OTEL_SERVICE_NAMESPACE"]

        resource_env = os.getenv("OTEL_RESOURCE_ATTRIBUTES")
        if resource_env:
            attrs = {**data.get("resource_attributes", {})}
            for part in resource_env.split(","):
                if "=" not in part:
                    continue
                key, value = part.split("=", 1)
                attrs[key.strip()] = value.strip()
            data["resource_attributes"] = attrs

        # An endpoint turns its exporter on.
        if data.get("otlp_traces_endpoint"):
            data["enable_tracing"] = True
        if data.get("otlp_metrics_endpoint"):
            data["enable_metrics"] = True
        if data.get("otlp_logs_endpoint"):
            data["enable_logging"] = True

        return cls(**data)


class SessionConfig(BaseModel):
    """Settings for a terminal game session."""

    rng_seed: int | None = None
    auto_place: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, **overrides: Any) -> "SessionConfig":
        """Construct config from `SALVO_RNG_SEED`, `SALVO_AUTO_PLACE` and `SALVO_LOG_LEVEL`."""

        data: Dict[str, Any] = {}
        seed = os.getenv("SALVO_RNG_SEED")
        if seed:
            data["rng_seed"] = seed
        auto_place = _bool_from_env("SALVO_AUTO_PLACE")
        if auto_place is not None:
            data["auto_place"] = auto_place
        if os.getenv("SALVO_LOG_LEVEL"):
            data["log_level"] = os.environ["SALVO_LOG_LEVEL"].upper()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)


@lru_cache(maxsize=1)
def load_telemetry_config() -> TelemetryConfig:
    """Load and cache telemetry config from the environment."""

    return TelemetryConfig.from_env()


@lru_cache(maxsize=1)
def load_session_config() -> SessionConfig:
    """Load and cache session config from the environment."""

    return SessionConfig.from_env()
