"""Build the ordered context map for one monitored call."""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from .common.maps import to_immutable_map
from .markers import LoggableType, ParameterSpec
from .resolution import AnnotatedObject, AnnotatedObjectResolver, collapse


class ContextInfoBuilder:
    """Resolves a call's context-marked arguments into one ordered map.

    Keys follow parameter declaration order. When two parameters share a key
    the later value wins while the key keeps its first position.
    """

    def __init__(self, resolver: AnnotatedObjectResolver) -> None:
        self._resolver = resolver

    def build(
        self, parameters: Sequence[ParameterSpec], arguments: Sequence[Any]
    ) -> dict[str, Any]:
        """Return context entries for ``arguments`` paired with ``parameters``.

        Raises:
            ValueError: if ``parameters`` and ``arguments`` differ in length.
        """

        paired = to_immutable_map(parameters, arguments)
        named = [
            (spec.context_key, AnnotatedObject.create_with_annotation(value, LoggableType))
            for spec, value in paired.items()
            if spec.is_context
        ]
        return self.loggable_types_context_info(named)

    def loggable_types_context_info(
        self, named: Iterable[tuple[str, AnnotatedObject]]
    ) -> dict[str, Any]:
        context: dict[str, Any] = {}
        for key, annotated in named:
            result = self._resolver.lookup(key, annotated)
            if result.is_resolved:
                context[key] = collapse(result.entries)
        return context
