"""Unit tests for structlog configuration and correlation ids."""

import structlog

from taskflow.infrastructure.observability import (
    configure_structlog,
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


class TestCorrelation:
    def test_processor_adds_correlation_id(self) -> None:
        set_correlation_id("req-42")

        event = correlation_id_processor(None, "info", {"event": "ping"})

        assert get_correlation_id() == "req-42"
        assert event["correlation_id"] == "req-42"

    def test_processor_keeps_explicit_value(self) -> None:
        set_correlation_id("req-42")

        event = correlation_id_processor(
            None, "info", {"event": "ping", "correlation_id": "given"}
        )

        assert event["correlation_id"] == "given"

    def test_processor_skips_unset_id(self) -> None:
        set_correlation_id("")

        assert "correlation_id" not in correlation_id_processor(None, "info", {})

    def test_generated_ids_are_unique(self) -> None:
        assert generate_correlation_id() != generate_correlation_id()

    def test_scope_restores_previous_id(self) -> None:
        set_correlation_id("outer")

        with correlation_scope("inner") as inner:
            assert inner == "inner"
            assert get_correlation_id() == "inner"

        assert get_correlation_id() == "outer"

    def test_scope_generates_missing_id(self) -> None:
        with correlation_scope("  ") as generated:
            assert generated.strip()
            assert get_correlation_id() == generated


class TestConfigureStructlog:
    def test_production_renders_json(self) -> None:
        configure_structlog("production")

        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_structlog("development")

        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
