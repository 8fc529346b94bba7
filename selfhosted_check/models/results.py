"""Diagnostic result data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Sensitive:
    """A value that must be masked before a failure text leaves the cluster.

    Reserved: nothing in this project populates it yet.
    """

    unmasked: str
    masked: str


@dataclass
class Failure:
    """A single human-readable problem attached to a DiagnosticResult."""

    text: str
    sensitive: list[Sensitive] = field(default_factory=list)


@dataclass
class DiagnosticResult:
    """Outcome of one check that found a problem.

    ``kind`` and ``name`` are empty when the result only carries a raw
    cluster query error (e.g. a failed workload listing).
    """

    kind: str = ""
    name: str = ""
    failures: list[Failure] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable representation."""
        return {
            "kind": self.kind,
            "name": self.name,
            "failures": [
                {
                    "text": f.text,
                    "sensitive": [{"unmasked": s.unmasked, "masked": s.masked} for s in f.sensitive],
                }
                for f in self.failures
            ],
        }


def failure_result(text: str, kind: str = "", name: str = "") -> DiagnosticResult:
    """Build a result carrying exactly one failure."""
    return DiagnosticResult(kind=kind, name=name, failures=[Failure(text=text)])
