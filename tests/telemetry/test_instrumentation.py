"""Telemetry instrumentation unit tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import salvo.telemetry as telemetry
from salvo import config as config_module
from salvo.config import TelemetryConfig
from salvo.engine import board as board_module
from salvo.engine import game as game_module
from salvo.engine.board import Board
from salvo.engine.game import GameSession
from salvo.engine.ship import Ship
from salvo.telemetry import logger as logger_module
from salvo.telemetry import metrics as metrics_module
from salvo.telemetry import setup as telemetry_setup_module
from salvo.telemetry import tracer as tracer_module


class DummySpan:
    def __init__(self, names: list[str], span_name: str) -> None:
        self._names = names
        self._names.append(span_name)
        self.attributes: dict[str, object] = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def set_attribute(self, key, value):
        self.attributes[key] = value


class DummyTracer:
    def __init__(self) -> None:
        self.span_names: list[str] = []

    def start_as_current_span(self, name: str):
        return DummySpan(self.span_names, name)


def test_get_tracer_and_meter_cached_per_name() -> None:
    assert tracer_module.get_tracer("salvo.test") is tracer_module.get_tracer("salvo.test")
    assert metrics_module.get_meter("salvo.test") is metrics_module.get_meter("salvo.test")


def test_init_tracing_uses_otlp_exporter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tracer_module, "_TRACERS", {})
    provider_instance = MagicMock()
    provider_instance.get_tracer.return_value = MagicMock()
    exporter = MagicMock()
    monkeypatch.setattr(tracer_module, "TracerProvider", MagicMock(return_value=provider_instance))
    monkeypatch.setattr(tracer_module, "OTLPSpanExporter", exporter)
    monkeypatch.setattr(tracer_module, "BatchSpanProcessor", MagicMock())
    monkeypatch.setattr(tracer_module.trace, "set_tracer_provider", MagicMock())

    tracer = tracer_module.init_tracing(
        TelemetryConfig(enable_tracing=True, otlp_traces_endpoint="http://example")
    )
    assert tracer is provider_instance.get_tracer.return_value
    exporter.assert_called_once_with(endpoint="http://example", insecure=True)
    provider_instance.add_span_processor.assert_called_once()


def test_init_metrics_installs_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(metrics_module, "_METERS", {})
    meter_provider = MagicMock()
    meter_provider.get_meter.return_value = MagicMock()
    monkeypatch.setattr(metrics_module, "MeterProvider", MagicMock(return_value=meter_provider))
    monkeypatch.setattr(metrics_module, "OTLPMetricExporter", MagicMock(return_value=MagicMock()))
    monkeypatch.setattr(metrics_module, "PeriodicExportingMetricReader", MagicMock())
    setter = MagicMock()
    monkeypatch.setattr(metrics_module.otel_metrics, "set_meter_provider", setter)

    meter = metrics_module.init_metrics(
        TelemetryConfig(enable_metrics=True, otlp_metrics_endpoint="http://example")
    )
    assert meter is meter_provider.get_meter.return_value
    setter.assert_called_once_with(meter_provider)


def test_logging_init_noop_without_endpoint() -> None:
    logger = logger_module.get_logger("salvo")
    assert logger_module.init_logging(TelemetryConfig()) is logger


def test_init_telemetry_noop(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    monkeypatch.setattr(telemetry_setup_module, "init_tracing", lambda cfg: calls.append("tr"))
    monkeypatch.setattr(telemetry_setup_module, "init_metrics", lambda cfg: calls.append("me"))
    monkeypatch.setattr(telemetry_setup_module, "init_logging", lambda cfg: calls.append("lo"))

    telemetry.init_telemetry(TelemetryConfig())
    assert calls == []


def test_init_telemetry_respects_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    monkeypatch.setattr(telemetry_setup_module, "init_tracing", lambda cfg: calls.append("tr"))
    monkeypatch.setattr(telemetry_setup_module, "init_metrics", lambda cfg: calls.append("me"))
    monkeypatch.setattr(telemetry_setup_module, "init_logging", lambda cfg: calls.append("lo"))

    telemetry.init_telemetry(TelemetryConfig(enable_tracing=True, enable_logging=True))
    assert calls == ["tr", "lo"]


def test_init_telemetry_configures_console_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[object] = []
    monkeypatch.setattr(telemetry_setup_module, "configure_console_logging", levels.append)

    telemetry.init_telemetry(TelemetryConfig(), log_level="DEBUG")
    telemetry.init_telemetry(TelemetryConfig())
    assert levels == ["DEBUG"]


def test_load_telemetry_config_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    config_module.load_telemetry_config.cache_clear()
    calls = {"count": 0}

    def fake_from_env(cls, **overrides):
        calls["count"] += 1
        return TelemetryConfig(enable_tracing=True)

    monkeypatch.setattr(TelemetryConfig, "from_env", classmethod(fake_from_env))

    first = config_module.load_telemetry_config()
    second = config_module.load_telemetry_config()
    assert first is second
    assert calls["count"] == 1
    config_module.load_telemetry_config.cache_clear()


def test_board_operations_emit_spans(monkeypatch: pytest.MonkeyPatch) -> None:
    tracer = DummyTracer()
    monkeypatch.setattr(board_module, "tracer", tracer)

    board = Board(owner="player")
    board.place_ship(Ship(2), 0, 0, False)
    board.receive_attack(0, 0)
    board.receive_attack(5, 5)

    assert tracer.span_names == [
        "board.place_ship",
        "board.receive_attack",
        "board.receive_attack",
    ]


def test_session_turn_emits_span(monkeypatch: pytest.MonkeyPatch) -> None:
    tracer = DummyTracer()
    monkeypatch.setattr(game_module, "tracer", tracer)

    session = GameSession(rng_seed=2)
    for row in range(5):
        session.place_player_ship(row * 2, 0, False)
    session.end_placement_phase()
    session.play_turn(0, 0)

    assert "game.end_placement_phase" in tracer.span_names
    assert "game.play_turn" in tracer.span_names


def test_turn_counter_records_outcome(monkeypatch: pytest.MonkeyPatch) -> None:
    counter = MagicMock()
    monkeypatch.setattr(game_module, "TURN_COUNTER", counter)

    session = GameSession(rng_seed=2)
    for row in range(5):
        session.place_player_ship(row * 2, 0, False)
    session.end_placement_phase()
    session.play_turn(0, 0)

    counter.add.assert_called_once()
    _, kwargs = counter.add.call_args
    assert kwargs["attributes"]["player"] == "player"
