"""Extraction strategies turning one value into named context entries."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence


class ContextParamExtractor(ABC):
    """Strategy responsible for a fixed set of value types.

    ``extract_params`` must not mutate ``value`` and should return an empty
    mapping, never ``None``, when there is nothing to report.
    """

    @abstractmethod
    def extractable_types(self) -> Sequence[type]:
        """Types this extractor is registered under."""

    @abstractmethod
    def extract_params(self, name: str, value: Any) -> Mapping[str, Any]:
        """Return context entries for ``value`` logged under ``name``."""


class DefaultExtractor(ContextParamExtractor):
    """Fallback that contributes nothing."""

    def extractable_types(self) -> Sequence[type]:
        return ()

    def extract_params(self, name: str, value: Any) -> Mapping[str, Any]:
        return {}

    def __repr__(self) -> str:
        return "DefaultExtractor()"


DEFAULT_EXTRACTOR = DefaultExtractor()
