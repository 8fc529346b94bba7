"""Schema-agnostic access to Kubernetes objects held as nested dicts.

Objects are kept in their API (camelCase) dict form regardless of kind or API
version. Lookups never raise; they return a :class:`FieldLookup` that tells an
absent field apart from one that is present with the wrong type, and the
caller picks the default explicitly::

    replicas = nested_int(sts, "spec", "replicas").or_default(0)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

Document = Mapping[str, Any]


@dataclass(frozen=True)
class FieldLookup:
    """Result of a nested field lookup."""

    value: Any = None
    found: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.found and self.error is None

    def or_default(self, default: Any) -> Any:
        """Return the value when usable, otherwise *default*."""
        return self.value if self.ok else default

    def describe(self) -> str:
        """Short explanation of why the value is unusable, or the value itself."""
        if not self.found:
            return "field not found"
        if self.error is not None:
            return self.error
        return str(self.value)


def nested_field(doc: Document, *path: str) -> FieldLookup:
    """Walk *path* through nested mappings."""
    current: Any = doc
    for i, key in enumerate(path):
        if not isinstance(current, Mapping):
            prefix = ".".join(path[:i])
            return FieldLookup(
                value=current,
                found=True,
                error=f"{prefix} accessor error: {current!r} is of type {type(current).__name__}, expected map",
            )
        if key not in current:
            return FieldLookup()
        current = current[key]
    return FieldLookup(value=current, found=True)


def nested_int(doc: Document, *path: str) -> FieldLookup:
    """Look up an integer field. ``bool`` is rejected even though it subclasses int."""
    lookup = nested_field(doc, *path)
    if not lookup.ok:
        return lookup
    if isinstance(lookup.value, bool) or not isinstance(lookup.value, int):
        return _type_error(lookup.value, path, "int")
    return lookup


def nested_str(doc: Document, *path: str) -> FieldLookup:
    """Look up a string field."""
    lookup = nested_field(doc, *path)
    if not lookup.ok:
        return lookup
    if not isinstance(lookup.value, str):
        return _type_error(lookup.value, path, "string")
    return lookup


def object_name(doc: Document) -> str:
    """Return ``metadata.name`` or an empty string."""
    return str(nested_str(doc, "metadata", "name").or_default(""))


def _type_error(value: Any, path: tuple[str, ...], expected: str) -> FieldLookup:
    return FieldLookup(
        value=value,
        found=True,
        error=f".{'.'.join(path)} accessor error: {value!r} is of type {type(value).__name__}, expected {expected}",
    )
