"""Tests for selfhosted_check.config — environment variable loading and validation."""

from __future__ import annotations

import pytest

from selfhosted_check.config import load_config
from selfhosted_check.models.config import SelfHostedCheckConfig

_VARS = (
    "LOG_LEVEL",
    "ACTIVE_FILTERS",
    "OPERATOR_NAMESPACE",
    "OPERATOR_LABEL_SELECTOR",
    "CUSTOM_RESOURCE_API_VERSION",
    "LOG_LOOKBACK_LINES",
    "COLOR",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(f"SELFHOSTED_CHECK_{name}", raising=False)


class TestConfigDefaults:
    def test_returns_config_type(self) -> None:
        assert isinstance(load_config(), SelfHostedCheckConfig)

    def test_defaults(self) -> None:
        config = load_config()
        assert config.log.level == "info"
        assert config.active_filters == ("SelfHostedInstallCheck",)
        assert config.operator_logs.namespace == "instana-operator"
        assert config.operator_logs.label_selector == "app.kubernetes.io/component=operator"
        assert config.operator_logs.lookback_lines == 10
        assert config.custom_resource_api_version == "instana.io/v1beta2"
        assert config.output.color is True


class TestConfigCustomValues:
    def test_log_level_uppercase_normalised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_LOG_LEVEL", "WARNING")
        assert load_config().log.level == "warning"

    def test_invalid_log_level_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            load_config()

    def test_active_filters_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_ACTIVE_FILTERS", "SelfHostedInstallCheck, Pod ,,")
        assert load_config().active_filters == ("SelfHostedInstallCheck", "Pod")

    def test_operator_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_OPERATOR_NAMESPACE", "ops")
        monkeypatch.setenv("SELFHOSTED_CHECK_OPERATOR_LABEL_SELECTOR", "app=operator")
        config = load_config()
        assert config.operator_logs.namespace == "ops"
        assert config.operator_logs.label_selector == "app=operator"

    def test_api_version(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_CUSTOM_RESOURCE_API_VERSION", "instana.io/v1")
        assert load_config().custom_resource_api_version == "instana.io/v1"

    @pytest.mark.parametrize(("raw", "expected"), [("0", 1), ("25", 25), ("5000", 1000)])
    def test_lookback_clamped(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_LOG_LOOKBACK_LINES", raw)
        assert load_config().operator_logs.lookback_lines == expected

    def test_lookback_not_an_int_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_LOG_LOOKBACK_LINES", "ten")
        with pytest.raises(ValueError, match="integer"):
            load_config()

    @pytest.mark.parametrize(("raw", "expected"), [("false", False), ("0", False), ("YES", True), ("on", True)])
    def test_color_bool(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_COLOR", raw)
        assert load_config().output.color is expected

    def test_color_invalid_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SELFHOSTED_CHECK_COLOR", "maybe")
        with pytest.raises(ValueError, match="boolean"):
            load_config()
