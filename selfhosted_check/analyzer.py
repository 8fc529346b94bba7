"""Self-hosted install analyzer.

Runs the three check groups in order and merges their results:

1. Data stores - StatefulSet, Deployment and Pod readiness in every namespace
   named after one of the backing stores (or the operator).
2. Core - readiness of the ``Core`` custom resource. When it is not ready the
   operator's error log excerpt is attached to the result.
3. Unit - readiness of the ``Unit`` custom resource.

ClusterQueryError from namespace resolution, custom resource listing or
operator log reading aborts the whole run. Failed workload listings are
reported as results instead.
"""

from __future__ import annotations

import time

from selfhosted_check.checks.custom_resources import check_custom_resource
from selfhosted_check.checks.namespaces import resolve_namespaces, select_namespace
from selfhosted_check.checks.operator_logs import collect_operator_errors
from selfhosted_check.checks.workloads import check_deployments, check_pods, check_stateful_sets
from selfhosted_check.cluster.client import ClusterClient
from selfhosted_check.console import ConsoleReporter, silent_reporter
from selfhosted_check.models.config import DEFAULT_ANALYZER_NAME, SelfHostedCheckConfig
from selfhosted_check.models.results import DiagnosticResult, Failure
from selfhosted_check.observability.logging import get_logger
from selfhosted_check.observability.metrics import analyze_duration_seconds

DATA_STORE_KEYWORDS: tuple[str, ...] = (
    "kafka",
    "elasticsearch",
    "postgres",
    "clickhouse",
    "cassandra",
    "beeinstana",
    "instana-operator",
)
CORE_KEYWORD = "core"
CORE_KIND = "Core"
UNIT_KEYWORD = "unit"
UNIT_KIND = "Unit"


class SelfHostedInstallAnalyzer:
    """Checks a self-hosted install end to end.

    Args:
        cluster: Cluster access used for every query.
        config: Settings; defaults apply when omitted.
        console: Narration target; silent when omitted.
    """

    name = DEFAULT_ANALYZER_NAME

    def __init__(
        self,
        cluster: ClusterClient,
        config: SelfHostedCheckConfig | None = None,
        console: ConsoleReporter | None = None,
    ) -> None:
        self._cluster = cluster
        self._config = config or SelfHostedCheckConfig()
        self._console = console or silent_reporter()
        self._log = get_logger("analyzer")

    def is_active(self, active_filters: set[str] | frozenset[str]) -> bool:
        return self.name in active_filters

    async def analyze(self) -> list[DiagnosticResult]:
        """Run all check groups and return every problem found."""
        started = time.monotonic()
        self._log.info("analyze_start", analyzer=self.name)

        results: list[DiagnosticResult] = []
        results.extend(await self._check_data_stores())
        results.extend(await self._check_core())
        results.extend(await self._check_unit())

        elapsed = time.monotonic() - started
        analyze_duration_seconds.observe(elapsed)
        self._log.info("analyze_complete", analyzer=self.name, results=len(results), duration_s=round(elapsed, 3))
        return results

    # ------------------------------------------------------------------
    # Check groups
    # ------------------------------------------------------------------

    async def _check_data_stores(self) -> list[DiagnosticResult]:
        results: list[DiagnosticResult] = []
        for namespace in await resolve_namespaces(self._cluster, *DATA_STORE_KEYWORDS):
            self._console.namespace(namespace)
            results.extend(await check_stateful_sets(self._cluster, namespace, self._console))
            results.extend(await check_deployments(self._cluster, namespace, self._console))
            results.extend(await check_pods(self._cluster, namespace, self._console))
        return results

    async def _check_core(self) -> list[DiagnosticResult]:
        namespace = select_namespace(await resolve_namespaces(self._cluster, CORE_KEYWORD), CORE_KEYWORD)
        if namespace is None:
            self._log.info("subsystem_not_found", keyword=CORE_KEYWORD)
            return []

        results = await self._check_custom_resource(CORE_KEYWORD, CORE_KIND, namespace)
        if results and results[0].has_failures:
            operator = self._config.operator_logs
            excerpt = await collect_operator_errors(
                self._cluster,
                operator.namespace,
                label_selector=operator.label_selector,
                lookback=operator.lookback_lines,
            )
            results[0].failures.append(
                Failure(text=f"Core is not ready\nExternal {operator.namespace} Log:\n{excerpt}")
            )
        return results

    async def _check_unit(self) -> list[DiagnosticResult]:
        namespace = select_namespace(await resolve_namespaces(self._cluster, UNIT_KEYWORD), UNIT_KEYWORD)
        if namespace is None:
            self._log.info("subsystem_not_found", keyword=UNIT_KEYWORD)
            return []
        return await self._check_custom_resource(UNIT_KEYWORD, UNIT_KIND, namespace)

    async def _check_custom_resource(self, keyword: str, kind: str, namespace: str) -> list[DiagnosticResult]:
        return await check_custom_resource(
            self._cluster,
            keyword,
            kind,
            namespace,
            self._console,
            api_version=self._config.custom_resource_api_version,
        )
