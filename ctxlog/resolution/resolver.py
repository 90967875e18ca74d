"""Resolve marked values into context entries through the extractor registry."""
from __future__ import annotations

from typing import Any, FrozenSet, Mapping

from ..constants import SINGLE_PROPERTY
from ..extractors.registry import ExtractorRegistry
from ..markers import context_fields
from .lookup import AnnotatedObject, LookupResult


def is_single_property(entries: Mapping[str, Any]) -> bool:
    return len(entries) == 1 and entries.get(SINGLE_PROPERTY) is not None


def collapse(entries: Mapping[str, Any]) -> Any:
    """Return the sentinel value for single-property entries, else a copy of them."""

    if is_single_property(entries):
        return entries[SINGLE_PROPERTY]
    return dict(entries)


class AnnotatedObjectResolver:
    """Turns an :class:`AnnotatedObject` into a :class:`LookupResult`.

    Precedence for a value:

    1. an extractor registered for its exact type;
    2. field-wise recursion when the type carries the object's marker and
       declares ``ContextParam`` fields, each field nested under its own key
       after the single-value collapse;
    3. the registry default.

    ``None`` and values already on the current resolution path are unresolved.
    Extractor exceptions propagate unchanged.
    """

    def __init__(self, registry: ExtractorRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ExtractorRegistry:
        return self._registry

    def lookup(self, name: str, annotated: AnnotatedObject) -> LookupResult:
        """Resolve ``annotated`` logged under ``name``."""

        return self._lookup(name, annotated, frozenset())

    def _lookup(
        self, name: str, annotated: AnnotatedObject, path: FrozenSet[int]
    ) -> LookupResult:
        value = annotated.value
        if value is None or id(value) in path:
            return LookupResult.unresolved()

        extractor = self._registry.find(value)
        if extractor is not None:
            return LookupResult.resolved(extractor.extract_params(name, value))

        if annotated.is_annotation_present():
            fields = context_fields(type(value))
            if fields:
                return LookupResult.resolved(
                    self._lookup_fields(value, annotated.marker, path | {id(value)}, fields)
                )

        return LookupResult.resolved(self._registry.default.extract_params(name, value))

    def _lookup_fields(self, value, marker, path, fields) -> dict[str, Any]:
        entries: dict[str, Any] = {}
        for spec in fields:
            key = spec.context_key
            child = AnnotatedObject.create_with_annotation(getattr(value, spec.name, None), marker)
            result = self._lookup(key, child, path)
            if result.is_resolved:
                entries[key] = collapse(result.entries)
        return entries
