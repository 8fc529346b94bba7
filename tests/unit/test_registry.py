"""Tests for selfhosted_check.registry and selfhosted_check.integration."""

from __future__ import annotations

import pytest

from selfhosted_check.analyzer import SelfHostedInstallAnalyzer
from selfhosted_check.integration import SelfHostedIntegration
from selfhosted_check.models.results import DiagnosticResult
from selfhosted_check.registry import Analyzer, AnalyzerRegistry, DuplicateAnalyzerError
from tests.fakes import FakeClusterClient


class _StubAnalyzer:
    def __init__(self, name: str) -> None:
        self.name = name

    async def analyze(self) -> list[DiagnosticResult]:
        return []

    def is_active(self, active_filters: set[str] | frozenset[str]) -> bool:
        return self.name in active_filters


class TestAnalyzerRegistry:
    def test_register_and_select(self) -> None:
        registry = AnalyzerRegistry()
        stub = _StubAnalyzer("A")
        registry.register("A", stub)
        assert registry.names() == ["A"]
        assert registry.active({"A"}) == [("A", stub)]

    def test_empty_registry_has_nothing_active(self) -> None:
        assert AnalyzerRegistry().active({"A"}) == []

    def test_duplicate_name_rejected(self) -> None:
        registry = AnalyzerRegistry()
        registry.register("A", _StubAnalyzer("A"))
        with pytest.raises(DuplicateAnalyzerError):
            registry.register("A", _StubAnalyzer("A"))

    def test_active_filters_in_registration_order(self) -> None:
        registry = AnalyzerRegistry()
        for name in ("B", "A", "C"):
            registry.register(name, _StubAnalyzer(name))
        assert registry.names() == ["B", "A", "C"]
        assert [name for name, _ in registry.active({"C", "B"})] == ["B", "C"]

    def test_stub_satisfies_protocol(self) -> None:
        assert isinstance(_StubAnalyzer("A"), Analyzer)


class TestSelfHostedIntegration:
    def test_names_and_ownership(self) -> None:
        integration = SelfHostedIntegration(FakeClusterClient())
        assert integration.analyzer_names() == ["SelfHostedInstallCheck"]
        assert integration.owns_analyzer("SelfHostedInstallCheck") is True
        assert integration.owns_analyzer("Pod") is False

    def test_is_active(self) -> None:
        integration = SelfHostedIntegration(FakeClusterClient())
        assert integration.is_active({"Pod", "SelfHostedInstallCheck"}) is True
        assert integration.is_active(set()) is False

    def test_add_analyzers_registers_install_check(self) -> None:
        registry = AnalyzerRegistry()
        SelfHostedIntegration(FakeClusterClient()).add_analyzers(registry)
        assert registry.names() == ["SelfHostedInstallCheck"]
        analyzer = dict(registry.active({"SelfHostedInstallCheck"}))["SelfHostedInstallCheck"]
        assert isinstance(analyzer, SelfHostedInstallAnalyzer)
        assert isinstance(analyzer, Analyzer)
