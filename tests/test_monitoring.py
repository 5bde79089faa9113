"""Tests for Sentry setup and event scrubbing."""

from unittest.mock import patch

import pytest

from pcp_tool.core.monitoring import (
    SENTRY_DSN_ENV,
    SENTRY_ENVIRONMENT_ENV,
    scrub_event,
    setup_sentry,
)


@pytest.mark.unit
class TestSetupSentry:
    def test_disabled_without_dsn(self, monkeypatch):
        monkeypatch.delenv(SENTRY_DSN_ENV, raising=False)
        with patch("pcp_tool.core.monitoring.sentry_sdk.init") as init:
            assert setup_sentry() is False
        init.assert_not_called()

    def test_enabled_with_dsn(self, monkeypatch):
        monkeypatch.setenv(SENTRY_DSN_ENV, "https://key@example.invalid/1")
        monkeypatch.setenv(SENTRY_ENVIRONMENT_ENV, "staging")
        with patch("pcp_tool.core.monitoring.sentry_sdk.init") as init:
            assert setup_sentry() is True
        kwargs = init.call_args.kwargs
        assert kwargs["dsn"] == "https://key@example.invalid/1"
        assert kwargs["environment"] == "staging"
        assert kwargs["send_default_pii"] is False
        assert kwargs["before_send"] is scrub_event

    def test_explicit_environment_wins(self, monkeypatch):
        monkeypatch.setenv(SENTRY_DSN_ENV, "https://key@example.invalid/1")
        monkeypatch.setenv(SENTRY_ENVIRONMENT_ENV, "staging")
        with patch("pcp_tool.core.monitoring.sentry_sdk.init") as init:
            setup_sentry(environment="prod")
        assert init.call_args.kwargs["environment"] == "prod"


@pytest.mark.unit
class TestScrubEvent:
    def test_nested_secrets_filtered(self):
        event = {
            "extra": {"password": "secret", "hostname": "pgpool"},
            "breadcrumbs": {
                "values": [{"data": {"PCPPASSFILE": "/tmp/pgpool2abc", "command": "pcp_node_count"}}]
            },
        }
        scrubbed = scrub_event(event, {})
        assert scrubbed["extra"] == {"password": "[Filtered]", "hostname": "pgpool"}
        assert scrubbed["breadcrumbs"]["values"][0]["data"] == {
            "PCPPASSFILE": "[Filtered]",
            "command": "pcp_node_count",
        }

    def test_empty_values_kept(self):
        assert scrub_event({"extra": {"password": None}}, {}) == {"extra": {"password": None}}
