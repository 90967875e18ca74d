"""Primary key and extra values bound to the current call chain."""
from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

_key_var: contextvars.ContextVar[Optional[object]] = contextvars.ContextVar(
    "ctxlog_key", default=None
)
_context_var: contextvars.ContextVar[dict[str, object]] = contextvars.ContextVar(
    "ctxlog_context", default={}
)


class LogContext:
    """Utility to bind contextual information to subsequent log lines."""

    @property
    def key(self) -> Optional[object]:
        return _key_var.get()

    def bind_key(self, value: Optional[object]) -> None:
        _key_var.set(value)

    @contextmanager
    def scope(self, key: Optional[object]) -> Iterator[None]:
        """Bind ``key`` for the duration of the ``with`` block."""

        token = _key_var.set(key)
        try:
            yield
        finally:
            _key_var.reset(token)

    def bind(self, **values: object) -> None:
        current = dict(_context_var.get())
        current.update({k: v for k, v in values.items() if v is not None})
        _context_var.set(current)

    def unbind(self, *keys: str) -> None:
        current = dict(_context_var.get())
        for key in keys:
            current.pop(key, None)
        _context_var.set(current)

    def clear(self) -> None:
        _key_var.set(None)
        _context_var.set({})

    def as_dict(self) -> Dict[str, object]:
        return dict(_context_var.get())


class ContextFilter(logging.Filter):
    """Attach the bound primary key to log records as ``ctx_key``."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Records stamped by the queue handler keep the producer thread's key.
        if not hasattr(record, "ctx_key"):
            key = _key_var.get()
            record.ctx_key = "-" if key is None else str(key)
        return True


log_context = LogContext()
