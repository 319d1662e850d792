"""Tests for settings and logging setup."""

import logging

from kitchen_intake.config import LOG_FORMAT, Settings, configure_logging
from kitchen_intake.extraction import parse_extraction_response


class TestSettings:
    def test_defaults(self, settings):
        assert settings.match_max_results == 5
        assert settings.duplicate_similarity_threshold == 0.7
        assert settings.low_confidence_threshold == 0.7
        assert settings.ingredient_match_threshold == 0.3
        assert settings.log_level == "INFO"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MATCH_MAX_RESULTS", "3")
        monkeypatch.setenv("LOW_CONFIDENCE_THRESHOLD", "0.6")
        settings = Settings(_env_file=None)
        assert settings.match_max_results == 3
        assert settings.low_confidence_threshold == 0.6


class TestConfigureLogging:
    def test_explicit_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging("debug")
        assert calls == [{"level": logging.DEBUG, "format": LOG_FORMAT}]

    def test_unknown_level_falls_back(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging("chatty")
        assert calls[0]["level"] == logging.INFO

    def test_degraded_paths_log(self, caplog):
        with caplog.at_level(logging.WARNING, logger="kitchen_intake.extraction"):
            parse_extraction_response("nothing to see")
        assert "no JSON object" in caplog.text
