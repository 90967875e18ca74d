"""Markers declaring which parameters and types contribute to logged context.

Parameters opt in through ``typing.Annotated``::

    def accept(quote: Annotated[Quote, ContextParam("quote")], note: str) -> None:
        ...

Types opt in to field-wise resolution with the :func:`loggable` decorator. The
metadata is read once per function or class and cached, never per call.
"""
from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass
from typing import Any, Callable, Optional

_LOGGABLE_ATTR = "__ctxlog_loggable__"
_FIELDS_ATTR = "__ctxlog_context_fields__"


@dataclass(frozen=True)
class ContextParam:
    """Marks a parameter or field as a source of context entries."""

    name: str = ""

    def key_for(self, declared_name: str) -> str:
        if self.name and self.name.strip():
            return self.name
        return declared_name


class LoggableType:
    """Marker for types known to the resolution engine."""

    @staticmethod
    def is_present_on(value: object) -> bool:
        return bool(getattr(type(value), _LOGGABLE_ATTR, False))


@dataclass(frozen=True)
class ParameterSpec:
    """One row of a function's static context metadata."""

    index: int
    name: str
    marker: Optional[ContextParam] = None

    @property
    def is_context(self) -> bool:
        return self.marker is not None

    @property
    def context_key(self) -> str:
        if self.marker is None:
            return self.name
        return self.marker.key_for(self.name)


def _find_marker(annotation: Any) -> Optional[ContextParam]:
    for extra in getattr(annotation, "__metadata__", ()):
        if isinstance(extra, ContextParam):
            return extra
    return None


def describe_parameters(func: Callable[..., Any]) -> tuple[ParameterSpec, ...]:
    """Build the ``ParameterSpec`` table for ``func`` in declaration order."""

    hints = typing.get_type_hints(func, include_extras=True)
    return tuple(
        ParameterSpec(index=index, name=name, marker=_find_marker(hints.get(name)))
        for index, name in enumerate(inspect.signature(func).parameters)
    )


def loggable(cls: type) -> type:
    """Class decorator attaching the :class:`LoggableType` marker."""

    setattr(cls, _LOGGABLE_ATTR, True)
    return cls


def context_fields(cls: type) -> tuple[ParameterSpec, ...]:
    """Return the ``ContextParam``-annotated fields of ``cls``, cached on the class."""

    cached = cls.__dict__.get(_FIELDS_ATTR)
    if cached is not None:
        return cached

    hints = typing.get_type_hints(cls, include_extras=True)
    fields = tuple(
        ParameterSpec(index=index, name=name, marker=marker)
        for index, (name, marker) in enumerate(
            (name, _find_marker(hint)) for name, hint in hints.items()
        )
        if marker is not None
    )
    setattr(cls, _FIELDS_ATTR, fields)
    return fields
