"""Start-up wiring for the process-wide extractor registry."""
from __future__ import annotations

import logging
from threading import RLock
from typing import Iterable, Optional

from .base import DEFAULT_EXTRACTOR, ContextParamExtractor
from .registry import ExtractorRegistry

logger = logging.getLogger(__name__)

_registry_lock = RLock()
_registry: ExtractorRegistry | None = None


def build_extractor_registry(
    extractors: Iterable[ContextParamExtractor] = (),
    default_extractor: Optional[ContextParamExtractor] = None,
) -> ExtractorRegistry:
    """Create a registry from ``extractors`` in registration order.

    Without an explicit ``default_extractor`` the no-op default is installed.
    """

    registry = ExtractorRegistry()
    for extractor in extractors:
        registry.register(extractor)
    registry.set_default(default_extractor or DEFAULT_EXTRACTOR)
    return registry


def configure(
    extractors: Iterable[ContextParamExtractor] = (),
    default_extractor: Optional[ContextParamExtractor] = None,
) -> ExtractorRegistry:
    """Install the process-wide registry. Call once during start-up."""

    global _registry
    with _registry_lock:
        _registry = build_extractor_registry(extractors, default_extractor)
        logger.debug("Extractor registry configured with %d types", len(_registry))
        return _registry


def get_registry() -> ExtractorRegistry:
    """Return the process-wide registry, creating an empty one if needed."""

    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = build_extractor_registry()
        return _registry


def reset_registry() -> None:
    """Forget the process-wide registry, intended for tests."""

    global _registry
    with _registry_lock:
        _registry = None
