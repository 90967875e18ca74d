"""Type-keyed dispatch table for extraction strategies."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .base import DEFAULT_EXTRACTOR, ContextParamExtractor

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Maps a value's exact runtime type to its extractor.

    Lookups never fail: values whose type has no registered extractor get the
    default one. Subclasses of a registered type are not matched. The registry
    is filled during start-up and only read afterwards, so lookups need no lock.
    """

    def __init__(self, default: Optional[ContextParamExtractor] = None) -> None:
        self._extractors: Dict[type, ContextParamExtractor] = {}
        self._default: ContextParamExtractor = default or DEFAULT_EXTRACTOR

    @property
    def default(self) -> ContextParamExtractor:
        return self._default

    def register(self, extractor: ContextParamExtractor) -> None:
        """Register ``extractor`` under every type it declares.

        A later registration for the same type replaces the earlier one.
        """

        if not isinstance(extractor, ContextParamExtractor):
            raise TypeError(
                f"Expected a ContextParamExtractor, got {type(extractor).__name__}"
            )
        for value_type in extractor.extractable_types():
            previous = self._extractors.get(value_type)
            if previous is not None and previous is not extractor:
                logger.debug(
                    "Extractor for %s replaced: %r -> %r",
                    value_type.__qualname__,
                    previous,
                    extractor,
                )
            self._extractors[value_type] = extractor

    def set_default(self, extractor: ContextParamExtractor) -> None:
        if not isinstance(extractor, ContextParamExtractor):
            raise TypeError(
                f"Expected a ContextParamExtractor, got {type(extractor).__name__}"
            )
        self._default = extractor

    def find(self, value: Any) -> Optional[ContextParamExtractor]:
        """Return the extractor registered for ``type(value)``, if any."""

        return self._extractors.get(type(value))

    def resolve(self, value: Any) -> ContextParamExtractor:
        """Return the extractor for ``value``, falling back to the default."""

        return self._extractors.get(type(value), self._default)

    def __contains__(self, value_type: object) -> bool:
        return value_type in self._extractors

    def __len__(self) -> int:
        return len(self._extractors)
