"""Read-only cluster access.

:class:`ClusterClient` is the minimal interface the checks need from the
Kubernetes API. :class:`KubernetesClusterClient` implements it on top of
kubernetes_asyncio and hands every object back as a plain camelCase dict so
that built-in kinds and custom resources are handled the same way.

Every failed call is re-raised as :class:`ClusterQueryError`; nothing is
retried here.
"""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

import aiohttp
from kubernetes_asyncio import client as k8s_client
from kubernetes_asyncio.client.exceptions import ApiException

from selfhosted_check.cluster.errors import ClusterQueryError
from selfhosted_check.observability.logging import get_logger
from selfhosted_check.observability.metrics import cluster_query_errors_total

_logger = get_logger("cluster.client")

_QUERY_ERRORS: tuple[type[BaseException], ...] = (ApiException, aiohttp.ClientError, TimeoutError)


class LogStream(Protocol):
    """An open pod log stream."""

    async def read(self) -> str: ...


@runtime_checkable
class ClusterClient(Protocol):
    """Minimal interface the checks need from the cluster."""

    async def list_namespaces(self) -> list[str]: ...

    async def list_objects(self, api_version: str, kind: str, namespace: str) -> list[dict[str, Any]]: ...

    async def get_object(self, api_version: str, kind: str, namespace: str, name: str) -> dict[str, Any]: ...

    async def list_pods(self, namespace: str, label_selector: str = "") -> list[dict[str, Any]]: ...

    def pod_log_stream(self, namespace: str, name: str) -> contextlib.AbstractAsyncContextManager[LogStream]: ...


class _ResponseLogStream:
    """Adapts an unread aiohttp response to :class:`LogStream`."""

    def __init__(self, response: aiohttp.ClientResponse) -> None:
        self._response = response

    async def read(self) -> str:
        return await _read_text(self._response)


class KubernetesClusterClient:
    """ClusterClient backed by a kubernetes_asyncio ``ApiClient``.

    Example::

        async with k8s_client.ApiClient() as api_client:
            cluster = KubernetesClusterClient(api_client)
            names = await cluster.list_namespaces()
    """

    def __init__(self, api_client: Any) -> None:
        self._api_client = api_client
        self._core = k8s_client.CoreV1Api(api_client)
        self._apps = k8s_client.AppsV1Api(api_client)
        self._custom = k8s_client.CustomObjectsApi(api_client)

    # ------------------------------------------------------------------
    # ClusterClient interface
    # ------------------------------------------------------------------

    async def list_namespaces(self) -> list[str]:
        result = await self._call("list_namespaces", self._core.list_namespace)
        names: list[str] = []
        for item in getattr(result, "items", None) or []:
            metadata = getattr(item, "metadata", None)
            name = getattr(metadata, "name", None)
            if name:
                names.append(str(name))
        return names

    async def list_objects(self, api_version: str, kind: str, namespace: str) -> list[dict[str, Any]]:
        operation = f"list_{kind.lower()}"
        methods = _builtin_methods(self._core, self._apps, api_version, kind)
        if methods is not None:
            result = await self._call(operation, methods[0], namespace)
            items = getattr(result, "items", None) or []
            return [self._to_document(item) for item in items]

        group, version = _split_api_version(api_version)
        raw = await self._call(
            operation,
            self._custom.list_namespaced_custom_object,
            group,
            version,
            namespace,
            _plural(kind),
        )
        items = raw.get("items", []) if isinstance(raw, dict) else []
        return [item for item in items if isinstance(item, dict)]

    async def get_object(self, api_version: str, kind: str, namespace: str, name: str) -> dict[str, Any]:
        operation = f"get_{kind.lower()}"
        methods = _builtin_methods(self._core, self._apps, api_version, kind)
        if methods is not None:
            result = await self._call(operation, methods[1], name, namespace)
            return self._to_document(result)

        group, version = _split_api_version(api_version)
        raw = await self._call(
            operation,
            self._custom.get_namespaced_custom_object,
            group,
            version,
            namespace,
            _plural(kind),
            name,
        )
        return raw if isinstance(raw, dict) else {}

    async def list_pods(self, namespace: str, label_selector: str = "") -> list[dict[str, Any]]:
        kwargs: dict[str, Any] = {}
        if label_selector:
            kwargs["label_selector"] = label_selector
        result = await self._call("list_pod", self._core.list_namespaced_pod, namespace, **kwargs)
        return [self._to_document(item) for item in getattr(result, "items", None) or []]

    @contextlib.asynccontextmanager
    async def pod_log_stream(self, namespace: str, name: str) -> AsyncIterator[LogStream]:
        """Open the full log of a pod; the HTTP response is closed on exit."""
        response = await self._call(
            "read_pod_log",
            self._core.read_namespaced_pod_log,
            name,
            namespace,
            _preload_content=False,
        )
        # The status is only checked by the client when content is preloaded
        if not 200 <= response.status <= 299:
            try:
                body = await _read_text(response)
            finally:
                response.close()
            reason = f"{response.reason}: {body.strip()}" if body.strip() else response.reason
            raise _query_error("read_pod_log", ApiException(status=response.status, reason=reason))
        try:
            yield _ResponseLogStream(response)
        finally:
            response.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _call(self, operation: str, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except _QUERY_ERRORS as exc:
            raise _query_error(operation, exc) from exc

    def _to_document(self, obj: Any) -> dict[str, Any]:
        """Convert a typed model into its API dict form (camelCase keys)."""
        doc = self._api_client.sanitize_for_serialization(obj)
        return doc if isinstance(doc, dict) else {}


# ---------------------------------------------------------------------------
# Module helpers
# ---------------------------------------------------------------------------


def _builtin_methods(core: Any, apps: Any, api_version: str, kind: str) -> tuple[Any, Any] | None:
    """Return (list, read) methods for built-in kinds, or None for custom resources."""
    kind_to_methods: dict[tuple[str, str], tuple[Any, str, str]] = {
        ("v1", "Pod"): (core, "list_namespaced_pod", "read_namespaced_pod"),
        ("apps/v1", "StatefulSet"): (apps, "list_namespaced_stateful_set", "read_namespaced_stateful_set"),
        ("apps/v1", "Deployment"): (apps, "list_namespaced_deployment", "read_namespaced_deployment"),
    }
    entry = kind_to_methods.get((api_version, kind))
    if entry is None:
        return None
    api, list_name, read_name = entry
    return getattr(api, list_name), getattr(api, read_name)


def _split_api_version(api_version: str) -> tuple[str, str]:
    group, sep, version = api_version.partition("/")
    if not sep:
        # Core group ("v1") has no group prefix
        return "", group
    return group, version


def _plural(kind: str) -> str:
    return kind.lower() + "s"


async def _read_text(response: aiohttp.ClientResponse) -> str:
    """Read a whole response body; undecodable bytes are replaced."""
    try:
        raw = await response.read()
    except _QUERY_ERRORS as exc:
        raise _query_error("read_pod_log", exc) from exc
    return raw.decode("utf-8", errors="replace")


def _query_error(operation: str, exc: BaseException) -> ClusterQueryError:
    cluster_query_errors_total.labels(operation=operation).inc()
    _logger.error("cluster_query_failed", operation=operation, error=str(exc))
    return ClusterQueryError(operation, str(exc) or type(exc).__name__)
