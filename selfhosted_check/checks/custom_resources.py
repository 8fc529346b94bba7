"""Readiness of the application's own custom resources (Core, Unit)."""

from __future__ import annotations

from typing import Any

from selfhosted_check.cluster.client import ClusterClient
from selfhosted_check.cluster.errors import ClusterQueryError
from selfhosted_check.console import ConsoleReporter
from selfhosted_check.models.document import nested_str, object_name
from selfhosted_check.models.results import DiagnosticResult, failure_result
from selfhosted_check.observability.logging import get_logger
from selfhosted_check.observability.metrics import checks_total

_logger = get_logger("checks.custom_resources")

DEFAULT_API_VERSION = "instana.io/v1beta2"
READY = "Ready"


async def check_custom_resource(
    cluster: ClusterClient,
    keyword: str,
    kind: str,
    namespace: str,
    console: ConsoleReporter,
    api_version: str = DEFAULT_API_VERSION,
) -> list[DiagnosticResult]:
    """Check ``status.componentsStatus`` of the first *kind* instance named like *keyword*.

    Returns an empty list when the resource reports ``Ready`` and a single
    result otherwise. If several instances match, the first one listed wins.

    Raises:
        ClusterQueryError: only when the initial listing fails. A failed fetch
            of the selected instance is returned as a result instead.
    """
    console.namespace(namespace)

    candidates = await cluster.list_objects(api_version, kind, namespace)
    name = _first_matching_name(candidates, keyword)
    if name is None:
        text = f"In namespace {namespace}, no {kind} resource with a name containing {keyword!r} was found"
        console.unhealthy(f"Custom Resource: {kind} matching {keyword!r} not found")
        checks_total.labels(kind=kind, outcome="missing").inc()
        _logger.warning("custom_resource_missing", kind=kind, namespace=namespace, keyword=keyword)
        return [failure_result(text, kind=kind)]

    try:
        resource = await cluster.get_object(api_version, kind, namespace, name)
    except ClusterQueryError as err:
        checks_total.labels(kind=kind, outcome="error").inc()
        _logger.error("custom_resource_fetch_failed", kind=kind, namespace=namespace, name=name, error=str(err))
        return [failure_result(str(err))]

    status = nested_str(resource, "status", "componentsStatus")
    if status.ok and status.value == READY:
        console.healthy(f"Custom Resource: {name} status: Ready")
        checks_total.labels(kind=kind, outcome="healthy").inc()
        _logger.info("custom_resource_ready", kind=kind, namespace=namespace, name=name)
        return []

    reason = f"componentsStatus is {status.value!r}" if status.ok else status.describe()
    console.unhealthy(f"Custom Resource: {name} status: NotReady")
    checks_total.labels(kind=kind, outcome="unhealthy").inc()
    _logger.warning("custom_resource_not_ready", kind=kind, namespace=namespace, name=name, reason=reason)
    return [failure_result(f"In namespace {namespace}, {name} is not ready: {reason}", kind=kind, name=name)]


def _first_matching_name(candidates: list[dict[str, Any]], keyword: str) -> str | None:
    for candidate in candidates:
        name = object_name(candidate)
        if keyword in name:
            return name
    return None
