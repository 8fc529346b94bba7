"""Analyzer registration.

Analyzers are registered explicitly at startup under a unique name. The
caller decides which ones run by passing the set of active filter names.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from selfhosted_check.models.results import DiagnosticResult


@runtime_checkable
class Analyzer(Protocol):
    """What the registry needs from an analyzer."""

    async def analyze(self) -> list[DiagnosticResult]: ...

    def is_active(self, active_filters: set[str] | frozenset[str]) -> bool: ...


class DuplicateAnalyzerError(ValueError):
    """Raised when a name is registered twice."""


class AnalyzerRegistry:
    """Analyzers keyed by name, kept in registration order."""

    def __init__(self) -> None:
        self._analyzers: dict[str, Analyzer] = {}

    def register(self, name: str, analyzer: Analyzer) -> None:
        if name in self._analyzers:
            raise DuplicateAnalyzerError(f"analyzer {name!r} is already registered")
        self._analyzers[name] = analyzer

    def names(self) -> list[str]:
        return list(self._analyzers)

    def active(self, active_filters: set[str] | frozenset[str]) -> list[tuple[str, Analyzer]]:
        """Return (name, analyzer) pairs that report themselves active."""
        return [(name, a) for name, a in self._analyzers.items() if a.is_active(active_filters)]

