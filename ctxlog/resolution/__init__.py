"""Resolution of marked values into context entries."""

from .lookup import AnnotatedObject, LookupResult  # noqa: F401
from .resolver import AnnotatedObjectResolver, collapse, is_single_property  # noqa: F401

__all__ = [
    "AnnotatedObject",
    "AnnotatedObjectResolver",
    "LookupResult",
    "collapse",
    "is_single_property",
]
