"""Generic helpers shared across the package."""

from .maps import (  # noqa: F401
    default_if_none,
    empty_if_none,
    lower_case_values,
    merge_maps,
    to_immutable_map,
    to_mutable_map,
)

__all__ = [
    "default_if_none",
    "empty_if_none",
    "lower_case_values",
    "merge_maps",
    "to_immutable_map",
    "to_mutable_map",
]
