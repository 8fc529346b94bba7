"""Namespace discovery by naming convention."""

from __future__ import annotations

from selfhosted_check.cluster.client import ClusterClient
from selfhosted_check.observability.logging import get_logger

_logger = get_logger("checks.namespaces")


async def resolve_namespaces(cluster: ClusterClient, *keywords: str) -> list[str]:
    """Return namespaces whose name contains at least one keyword.

    Matching is a case-sensitive substring test, OR-ed across keywords. Each
    namespace appears once, in listing order. An empty list means nothing
    matched; a failed listing raises ClusterQueryError.
    """
    matched: list[str] = []
    seen: set[str] = set()
    for name in await cluster.list_namespaces():
        if name in seen:
            continue
        if any(keyword in name for keyword in keywords):
            matched.append(name)
            seen.add(name)

    _logger.debug("namespaces_resolved", keywords=list(keywords), matched=matched)
    return matched


def select_namespace(namespaces: list[str], keyword: str) -> str | None:
    """Pick one namespace out of several matches: the first by name.

    Listing order from the API server is not stable, so the choice is made on
    sorted names. More than one match is logged since only one is checked.
    """
    if not namespaces:
        return None
    ordered = sorted(namespaces)
    if len(ordered) > 1:
        _logger.warning(
            "namespace_ambiguous",
            keyword=keyword,
            candidates=ordered,
            selected=ordered[0],
        )
    return ordered[0]
