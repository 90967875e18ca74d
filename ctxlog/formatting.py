"""Render a message and its context map into one log line."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from .constants import (
    CONTEXT_PREFIX,
    CONTEXT_SUFFIX,
    DEFAULT_KEY_NAME,
    MESSAGE_SEPARATOR,
    SEGMENT_SEPARATOR,
)


def render_value(value: Any) -> str:
    """Render nested mappings as ``{a=1, b=2}`` and sequences as ``[x, y]``."""

    if isinstance(value, Mapping):
        inner = SEGMENT_SEPARATOR.join(f"{k}={render_value(v)}" for k, v in value.items())
        return f"{{{inner}}}"
    if isinstance(value, (list, tuple)):
        return f"[{SEGMENT_SEPARATOR.join(render_value(item) for item in value)}]"
    return str(value)


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


class ContextMessageFormatter:
    """Formats ``<message>. ctx:{key=<k>, name=value, ...}`` lines.

    The primary key segment comes first and is left out when its value is
    ``None``. Blank messages produce a line starting directly with the context
    block. The block itself is always rendered, even when empty.
    """

    def __init__(self, key_name: str = DEFAULT_KEY_NAME) -> None:
        if _is_blank(key_name):
            raise ValueError("Primary key name must not be blank")
        self.key_name = key_name

    def segments(self, key: Any, context: Optional[Mapping[str, Any]] = None) -> list[str]:
        parts: list[str] = []
        if key is not None:
            parts.append(f"{self.key_name}={render_value(key)}")
        for name, value in (context or {}).items():
            parts.append(f"{name}={render_value(value)}")
        return parts

    def format(
        self,
        message: Optional[str],
        key: Any = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> str:
        block = f"{CONTEXT_PREFIX}{SEGMENT_SEPARATOR.join(self.segments(key, context))}{CONTEXT_SUFFIX}"
        if _is_blank(message):
            return block
        return f"{message}{MESSAGE_SEPARATOR}{block}"
