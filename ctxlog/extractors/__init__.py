"""Extraction strategies and their registry."""

from .base import DEFAULT_EXTRACTOR, ContextParamExtractor, DefaultExtractor  # noqa: F401
from .configuration import (  # noqa: F401
    build_extractor_registry,
    configure,
    get_registry,
    reset_registry,
)
from .registry import ExtractorRegistry  # noqa: F401

__all__ = [
    "ContextParamExtractor",
    "DefaultExtractor",
    "DEFAULT_EXTRACTOR",
    "ExtractorRegistry",
    "build_extractor_registry",
    "configure",
    "get_registry",
    "reset_registry",
]
