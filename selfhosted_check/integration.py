"""Integration descriptor that plugs the analyzer into a registry."""

from __future__ import annotations

from selfhosted_check.analyzer import SelfHostedInstallAnalyzer
from selfhosted_check.cluster.client import ClusterClient
from selfhosted_check.console import ConsoleReporter
from selfhosted_check.models.config import DEFAULT_ANALYZER_NAME, SelfHostedCheckConfig
from selfhosted_check.registry import AnalyzerRegistry


class SelfHostedIntegration:
    """Owns the ``SelfHostedInstallCheck`` analyzer.

    The integration is active when any of its analyzer names is among the
    active filters.
    """

    def __init__(
        self,
        cluster: ClusterClient,
        config: SelfHostedCheckConfig | None = None,
        console: ConsoleReporter | None = None,
    ) -> None:
        self._cluster = cluster
        self._config = config or SelfHostedCheckConfig()
        self._console = console

    def analyzer_names(self) -> list[str]:
        return [DEFAULT_ANALYZER_NAME]

    def owns_analyzer(self, name: str) -> bool:
        return name in self.analyzer_names()

    def is_active(self, active_filters: set[str] | frozenset[str]) -> bool:
        return any(name in active_filters for name in self.analyzer_names())

    def add_analyzers(self, registry: AnalyzerRegistry) -> None:
        registry.register(
            DEFAULT_ANALYZER_NAME,
            SelfHostedInstallAnalyzer(self._cluster, config=self._config, console=self._console),
        )
