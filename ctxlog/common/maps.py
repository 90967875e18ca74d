"""Helpers for building, merging and defaulting context maps."""
from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def _last_wins(_first: V, second: V) -> V:
    return second


def default_if_none(
    mapping: Optional[Mapping[K, V]], default: Mapping[K, V]
) -> Mapping[K, V]:
    """Return ``mapping`` or ``default`` when it is ``None``."""

    return default if mapping is None else mapping


def empty_if_none(mapping: Optional[Mapping[K, V]]) -> Mapping[K, V]:
    """Return ``mapping`` or a fresh empty dict when it is ``None``."""

    return {} if mapping is None else mapping


def lower_case_values(mapping: Mapping[str, Optional[str]]) -> dict[str, str]:
    """Lower-case every value; ``None`` values become empty strings."""

    return {key: (value or "").lower() for key, value in mapping.items()}


def merge_maps(
    *maps: Optional[Mapping[K, V]],
    merge: Optional[Callable[[V, V], V]] = None,
) -> dict[K, V]:
    """Merge ``maps`` left to right into a new ordered dict.

    Keys keep the position of their first appearance. On collision ``merge``
    decides the value; by default the later map wins. ``None`` entries are
    skipped.
    """

    resolve = merge or _last_wins
    merged: dict[K, V] = {}
    for mapping in maps:
        if not mapping:
            continue
        for key, value in mapping.items():
            merged[key] = resolve(merged[key], value) if key in merged else value
    return merged


def to_mutable_map(
    keys: Optional[Sequence[K]], values: Optional[Sequence[V]]
) -> dict[K, V]:
    """Pair ``keys`` with ``values`` positionally.

    Raises:
        ValueError: if the sequences differ in length.
    """

    keys = keys or ()
    values = values or ()
    if len(keys) != len(values):
        raise ValueError("The number of keys doesn't match the number of values.")
    return dict(zip(keys, values))


def to_immutable_map(
    keys: Optional[Sequence[K]], values: Optional[Sequence[V]]
) -> Mapping[K, V]:
    """Read-only variant of :func:`to_mutable_map`."""

    return MappingProxyType(to_mutable_map(keys, values))
