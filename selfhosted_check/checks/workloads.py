"""Readiness of StatefulSets, Deployments and Pods.

Each check lists one kind in a namespace and returns a DiagnosticResult for
every unhealthy object. Healthy objects are only narrated and logged.

Missing or mistyped fields fall back to the not-ready value: 0 replicas for
the counters and ``"Unknown"`` for the pod phase. Note that this makes a
workload with no ``spec.replicas`` and no status count as ready (0 == 0).

A failed listing does not raise: it is returned as a single result carrying
the raw error text so that the other kinds and namespaces still get checked.
"""

from __future__ import annotations

from typing import Any

from selfhosted_check.cluster.client import ClusterClient
from selfhosted_check.cluster.errors import ClusterQueryError
from selfhosted_check.console import ConsoleReporter
from selfhosted_check.models.document import nested_int, nested_str, object_name
from selfhosted_check.models.results import DiagnosticResult, failure_result
from selfhosted_check.observability.logging import get_logger
from selfhosted_check.observability.metrics import checks_total

_logger = get_logger("checks.workloads")

_APPS_V1 = "apps/v1"
_CORE_V1 = "v1"
_RUNNING = "Running"
_UNKNOWN_PHASE = "Unknown"


async def check_stateful_sets(
    cluster: ClusterClient, namespace: str, console: ConsoleReporter
) -> list[DiagnosticResult]:
    """Flag StatefulSets whose ``status.readyReplicas`` differs from ``spec.replicas``."""
    items = await _list_or_result(cluster, _APPS_V1, "StatefulSet", namespace)
    if isinstance(items, DiagnosticResult):
        return [items]

    results: list[DiagnosticResult] = []
    for sts in items:
        name = object_name(sts)
        ready = nested_int(sts, "status", "readyReplicas").or_default(0)
        replicas = nested_int(sts, "spec", "replicas").or_default(0)
        line = f"StatefulSet: {name}, ReadyReplicas: {ready}/{replicas}"
        if ready == replicas:
            _observe_healthy(console, line, "StatefulSet", namespace, name)
            continue
        _observe_unhealthy(console, line, "StatefulSet", namespace, name)
        results.append(
            failure_result(
                f"In namespace {namespace}, statefulSet {name} is not running",
                kind="StatefulSet",
                name=name,
            )
        )
    return results


async def check_deployments(
    cluster: ClusterClient, namespace: str, console: ConsoleReporter
) -> list[DiagnosticResult]:
    """Flag Deployments whose ``status.availableReplicas`` differs from ``spec.replicas``."""
    items = await _list_or_result(cluster, _APPS_V1, "Deployment", namespace)
    if isinstance(items, DiagnosticResult):
        return [items]

    results: list[DiagnosticResult] = []
    for deploy in items:
        name = object_name(deploy)
        available = nested_int(deploy, "status", "availableReplicas").or_default(0)
        replicas = nested_int(deploy, "spec", "replicas").or_default(0)
        line = f"Deployment: {name}, AvailableReplicas: {available}/{replicas}"
        if available == replicas:
            _observe_healthy(console, line, "Deployment", namespace, name)
            continue
        _observe_unhealthy(console, line, "Deployment", namespace, name)
        results.append(
            failure_result(
                f"In namespace {namespace}, deployment {name} is not available",
                kind="Deployment",
                name=name,
            )
        )
    return results


async def check_pods(cluster: ClusterClient, namespace: str, console: ConsoleReporter) -> list[DiagnosticResult]:
    """Flag Pods whose ``status.phase`` is not ``Running``."""
    items = await _list_or_result(cluster, _CORE_V1, "Pod", namespace)
    if isinstance(items, DiagnosticResult):
        return [items]

    results: list[DiagnosticResult] = []
    for pod in items:
        name = object_name(pod)
        phase = nested_str(pod, "status", "phase").or_default(_UNKNOWN_PHASE)
        line = f"Pod: {name}, Status: {phase}"
        if phase == _RUNNING:
            _observe_healthy(console, line, "Pod", namespace, name)
            continue
        _observe_unhealthy(console, line, "Pod", namespace, name)
        results.append(
            failure_result(
                f"In namespace {namespace}, pod {name} is not running",
                kind="Pod",
                name=name,
            )
        )
    return results


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _list_or_result(
    cluster: ClusterClient, api_version: str, kind: str, namespace: str
) -> list[dict[str, Any]] | DiagnosticResult:
    try:
        return await cluster.list_objects(api_version, kind, namespace)
    except ClusterQueryError as err:
        _logger.error("workload_list_failed", kind=kind, namespace=namespace, error=str(err))
        checks_total.labels(kind=kind, outcome="error").inc()
        return failure_result(str(err))


def _observe_healthy(console: ConsoleReporter, line: str, kind: str, namespace: str, name: str) -> None:
    console.healthy(line)
    checks_total.labels(kind=kind, outcome="healthy").inc()
    _logger.info("workload_healthy", kind=kind, namespace=namespace, name=name)


def _observe_unhealthy(console: ConsoleReporter, line: str, kind: str, namespace: str, name: str) -> None:
    console.unhealthy(line)
    checks_total.labels(kind=kind, outcome="unhealthy").inc()
    _logger.warning("workload_unhealthy", kind=kind, namespace=namespace, name=name, observed=line)
