"""Errors raised by the cluster access layer."""

from __future__ import annotations


class ClusterQueryError(Exception):
    """A list, get or log-stream call against the API server failed.

    ``str(err)`` is the raw detail text; it is what ends up in a
    DiagnosticResult when the failure is downgraded instead of propagated.
    """

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(detail)
        self.operation = operation
        self.detail = detail
