"""Tests for configuration and structured logging."""

import logging

import pytest
import structlog
from pydantic import ValidationError
from structlog.testing import capture_logs

from jurisguide.config import Settings, settings
from jurisguide.core.models import AdaptationContext, LegalGuidance, MediationCase
from jurisguide.cultural.adapter import GuidanceAdaptationEngine
from jurisguide.mediation.escalation import EscalationRiskDetector
from jurisguide.utils.logging import (
    add_package_name,
    configure_logging,
    get_logger,
    log_adaptation_context,
)


class TestSettings:
    """Test cases for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("JURISGUIDE_DEBUG", "JURISGUIDE_ESCALATION_WINDOW_SIZE"):
            monkeypatch.delenv(name, raising=False)

        config = Settings(_env_file=None)

        assert config.debug is False
        assert config.log_level == "INFO"
        assert config.escalation_window_size == 10
        assert config.rapid_exchange_threshold_ms == 300_000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("JURISGUIDE_ESCALATION_WINDOW_SIZE", "5")
        monkeypatch.setenv("jurisguide_rapid_exchange_threshold_ms", "60000")
        monkeypatch.setenv("JURISGUIDE_DEBUG", "true")

        config = Settings(_env_file=None)

        assert config.escalation_window_size == 5
        assert config.rapid_exchange_threshold_ms == 60_000
        assert config.debug is True

    def test_window_size_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("JURISGUIDE_ESCALATION_WINDOW_SIZE", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_detector_reads_global_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "escalation_window_size", 4)

        assert EscalationRiskDetector().window_size == 4


class TestLogging:
    """Test cases for structlog configuration."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_json_renderer_by_default(self, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_in_debug(self, monkeypatch):
        monkeypatch.setattr(settings, "debug", True)

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_explicit_arguments_override_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)

        configure_logging(log_level="warning", debug=True)

        config = structlog.get_config()
        assert isinstance(config["processors"][-1], structlog.dev.ConsoleRenderer)
        assert config["wrapper_class"] is structlog.make_filtering_bound_logger(logging.WARNING)

    def test_events_are_tagged_with_package(self):
        configure_logging()

        assert add_package_name in structlog.get_config()["processors"]
        assert add_package_name(None, "info", {"event": "x"}) == {"event": "x", "package": "jurisguide"}
        assert add_package_name(None, "info", {"event": "x", "package": "host"})["package"] == "host"

    def test_get_logger_binds(self):
        with capture_logs() as logs:
            logger = get_logger("jurisguide.tests").bind(component="test")
            logger.info("hello", value=1)

        assert logs == [{"event": "hello", "value": 1, "component": "test", "log_level": "info"}]

    def test_adaptation_context_drops_private_keys(self):
        context = log_adaptation_context("Asian", "family_law", "low", language="zh", _text="secret")

        assert context == {
            "adaptation_context": {
                "background": "Asian",
                "legal_category": "family_law",
                "urgency": "low",
                "language": "zh",
            }
        }

    def test_adaptation_is_logged_without_guidance_text(self):
        guidance = LegalGuidance(
            query_id="q-log",
            confidence=0.9,
            created_at="2024-03-01T09:30:00Z",
        )

        with capture_logs() as logs:
            GuidanceAdaptationEngine().adapt(guidance, AdaptationContext(user_background="Asian"))

        entry = next(log for log in logs if log["event"] == "Guidance adapted")
        assert entry["log_level"] == "info"
        assert entry["query_id"] == "q-log"
        assert entry["component"] == "guidance_adaptation_engine"
        assert entry["adaptation_context"]["background"] == "Asian"

    def test_escalation_assessment_is_logged(self):
        with capture_logs() as logs:
            EscalationRiskDetector().assess(MediationCase(id="case-log"))

        entry = next(log for log in logs if log["event"] == "Escalation risk assessed")
        assert entry["case_id"] == "case-log"
        assert entry["risk_level"] == "low"
