"""Human-readable narration of every observation.

Green lines are healthy objects, yellow lines are namespace headers and red
lines are problems. This is telemetry for whoever runs the check; the
structured results are what callers consume.
"""

from __future__ import annotations

from typing import IO

import click

_STATE_COLORS: dict[str, str] = {
    "healthy": "green",
    "header": "yellow",
    "unhealthy": "red",
}


class ConsoleReporter:
    """Writes one styled line per observation.

    Args:
        enabled: When False nothing is written.
        color: When False lines are written without ANSI styling.
        file: Target stream; defaults to stdout.
    """

    def __init__(self, enabled: bool = True, color: bool = True, file: IO[str] | None = None) -> None:
        self._enabled = enabled
        self._color = color
        self._file = file

    def namespace(self, namespace: str) -> None:
        self._emit("header", f"Namespace: {namespace}")

    def healthy(self, message: str) -> None:
        self._emit("healthy", message)

    def unhealthy(self, message: str) -> None:
        self._emit("unhealthy", message)

    def _emit(self, state: str, message: str) -> None:
        if not self._enabled:
            return
        text = click.style(message, fg=_STATE_COLORS[state]) if self._color else message
        click.echo(text, file=self._file, color=self._color)


def silent_reporter() -> ConsoleReporter:
    """A reporter that discards everything."""
    return ConsoleReporter(enabled=False)
