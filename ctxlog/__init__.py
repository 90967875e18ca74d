"""Structured call-context logging.

Marked arguments are resolved into named context entries through a registry
of per-type extractors and appended to log lines as ``ctx:{...}``.
"""

from .advice import CallInfo, LogEntryHandler, LogExitHandler, do_log  # noqa: F401
from .context_info import ContextInfoBuilder  # noqa: F401
from .core.log import log_context  # noqa: F401
from .extractors import (  # noqa: F401
    DEFAULT_EXTRACTOR,
    ContextParamExtractor,
    ExtractorRegistry,
    build_extractor_registry,
    configure,
    get_registry,
)
from .formatting import ContextMessageFormatter  # noqa: F401
from .markers import ContextParam, LoggableType, ParameterSpec, describe_parameters, loggable  # noqa: F401
from .pretty import PrettyLogger  # noqa: F401
from .resolution import AnnotatedObject, AnnotatedObjectResolver, LookupResult  # noqa: F401

__all__ = [
    "AnnotatedObject",
    "AnnotatedObjectResolver",
    "CallInfo",
    "ContextInfoBuilder",
    "ContextMessageFormatter",
    "ContextParam",
    "ContextParamExtractor",
    "DEFAULT_EXTRACTOR",
    "ExtractorRegistry",
    "LogEntryHandler",
    "LogExitHandler",
    "LoggableType",
    "LookupResult",
    "ParameterSpec",
    "PrettyLogger",
    "build_extractor_registry",
    "configure",
    "describe_parameters",
    "do_log",
    "get_registry",
    "log_context",
    "loggable",
]
