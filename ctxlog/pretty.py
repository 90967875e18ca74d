"""Logger facade that appends resolved context to every message."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .common.maps import merge_maps
from .core.config import get_settings
from .core.log import get_logger, log_context
from .formatting import ContextMessageFormatter


class PrettyLogger:
    """Render ``message`` plus context through a :class:`ContextMessageFormatter`.

    Values bound with ``log_context.bind`` come first; the call's own context
    overrides them on key collisions. The primary key is taken from
    ``log_context.key``.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        formatter: Optional[ContextMessageFormatter] = None,
    ) -> None:
        self._logger = logger
        self.formatter = formatter or ContextMessageFormatter(get_settings().primary_key_name)

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = get_logger("ctxlog.flow")
        return self._logger

    def render(self, message: Optional[str], context: Optional[Mapping[str, Any]] = None) -> str:
        merged = merge_maps(log_context.as_dict(), context)
        return self.formatter.format(message, log_context.key, merged)

    def log(
        self, level: int, message: Optional[str], context: Optional[Mapping[str, Any]] = None
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, self.render(message, context))

    def debug(self, message: Optional[str], context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(logging.DEBUG, message, context)

    def info(self, message: Optional[str], context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(logging.INFO, message, context)

    def warning(self, message: Optional[str], context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(logging.WARNING, message, context)

    def error(self, message: Optional[str], context: Optional[Mapping[str, Any]] = None) -> None:
        self.log(logging.ERROR, message, context)
