"""Tests for settings loading."""

from __future__ import annotations

import pytest

from kubepulse.config.settings import LogFormat, LogLevel, Settings, WorkloadSettings
from kubepulse.core.exceptions import ConfigurationException
from kubepulse.workloads.kinds import DEFAULT_KINDS, ResourceKind


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("WORKLOAD_KINDS", "WORKLOAD_ALLOW_EMPTY_KINDS", "WORKLOAD_STRICT",
                "K8S_NAMESPACE", "K8S_CALL_TIMEOUT_SECONDS", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.log_level == LogLevel.INFO
        assert settings.log_format == LogFormat.TEXT
        assert settings.kubernetes.namespace == "default"
        assert settings.kubernetes.call_timeout_seconds == 120.0
        assert settings.workloads.resolved_kinds() == DEFAULT_KINDS
        assert settings.workloads.resolved_allow_empty_kinds() == ()
        assert settings.workloads.strict is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKLOAD_KINDS", '["deploy", "po"]')
        monkeypatch.setenv("WORKLOAD_ALLOW_EMPTY_KINDS", '["ds"]')
        monkeypatch.setenv("WORKLOAD_STRICT", "true")
        monkeypatch.setenv("K8S_CALL_TIMEOUT_SECONDS", "15")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.workloads.resolved_kinds() == (ResourceKind.DEPLOYMENT, ResourceKind.POD)
        assert settings.workloads.resolved_allow_empty_kinds() == (ResourceKind.DAEMON_SET,)
        assert settings.workloads.strict is True
        assert settings.kubernetes.call_timeout_seconds == 15.0
        assert settings.log_level == LogLevel.DEBUG

    def test_unknown_kind_is_rejected(self) -> None:
        settings = WorkloadSettings(kinds=["pods", "widgets"])

        with pytest.raises(ConfigurationException, match="widgets"):
            settings.resolved_kinds()
