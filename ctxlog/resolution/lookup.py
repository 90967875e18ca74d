"""Values under resolution and the outcome of resolving them."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..common.maps import empty_if_none
from ..markers import LoggableType


@dataclass(frozen=True)
class AnnotatedObject:
    """A value paired with the marker it was discovered under."""

    value: Any
    marker: type = LoggableType

    @classmethod
    def create_with_annotation(cls, value: Any, marker: type = LoggableType) -> "AnnotatedObject":
        return cls(value=value, marker=marker)

    def is_annotation_present(self) -> bool:
        return self.marker.is_present_on(self.value)


@dataclass(frozen=True)
class LookupResult:
    """Either resolved context entries or nothing at all."""

    is_resolved: bool
    entries: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def resolved(cls, entries: Optional[Mapping[str, Any]]) -> "LookupResult":
        return cls(is_resolved=True, entries=MappingProxyType(dict(empty_if_none(entries))))

    @classmethod
    def unresolved(cls) -> "LookupResult":
        return _UNRESOLVED

    def execute_for_result(self) -> dict[str, Any]:
        """Return a mutable copy of the entries.

        Raises:
            ValueError: if the lookup did not resolve.
        """

        if not self.is_resolved:
            raise ValueError("Unresolved lookup has no context entries")
        return dict(self.entries)


_UNRESOLVED = LookupResult(is_resolved=False)
