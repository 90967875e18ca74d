"""Logging setup with rich console output and optional daily log files."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .context import ContextFilter, LogContext, log_context

__all__ = [
    "ContextFilter",
    "DailyFileHandler",
    "LogContext",
    "LoggingConfig",
    "init_logging",
    "get_logger",
    "set_level",
    "shutdown_logging",
    "log_context",
]


@dataclass
class LoggingConfig:
    """Runtime configuration for the logging subsystem."""

    app_name: str = "ctxlog"
    level: str | int = "INFO"
    log_dir: Optional[Path] = None
    console: bool = True
    rich_tracebacks: bool = True
    queue: bool = True

    @classmethod
    def from_settings(cls) -> "LoggingConfig":
        from ..config import get_settings

        settings = get_settings()
        return cls(
            level=settings.log_level,
            log_dir=settings.log_dir,
            console=settings.console,
            rich_tracebacks=settings.rich_tracebacks,
        )


_config_lock = RLock()
_config: LoggingConfig | None = None
_listener: QueueListener | None = None
_queue: SimpleQueue | None = None
_installed: list[logging.Handler] = []
_context_filter = ContextFilter()


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


class DailyFileHandler(logging.FileHandler):
    """Write to ``<prefix>_<date>.log`` and roll over when a record's day changes."""

    def __init__(
        self,
        directory: Path,
        *,
        prefix: str = "ctxlog",
        encoding: str = "utf-8",
        date_format: str = "%Y_%m_%d",
    ) -> None:
        self.directory = directory
        self.prefix = prefix
        self.date_format = date_format
        self.directory.mkdir(parents=True, exist_ok=True)
        self.current_date: date = datetime.now().date()
        super().__init__(self.path_for(self.current_date), mode="a", encoding=encoding)

    def path_for(self, target_date: date) -> Path:
        return self.directory / f"{self.prefix}_{target_date.strftime(self.date_format)}.log"

    def _roll_to(self, target_date: date) -> None:
        if self.stream:
            try:
                self.stream.flush()
            finally:
                self.stream.close()
        self.current_date = target_date
        self.baseFilename = os.fspath(self.path_for(target_date))
        self.stream = self._open()

    def emit(self, record: logging.LogRecord) -> None:
        record_date = datetime.fromtimestamp(record.created).date()
        if record_date != self.current_date:
            self._roll_to(record_date)
        super().emit(record)


def _build_handlers(cfg: LoggingConfig, level: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if cfg.rich_tracebacks:
        install_rich_traceback(show_locals=False)

    if cfg.console:
        rich_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=cfg.rich_tracebacks,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="%Y-%m-%d %H:%M:%S",
        )
        rich_handler.setLevel(level)
        rich_handler.setFormatter(logging.Formatter("%(message)s"))
        rich_handler.addFilter(_context_filter)
        handlers.append(rich_handler)

    if cfg.log_dir:
        file_handler = DailyFileHandler(Path(cfg.log_dir), prefix=cfg.app_name)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(ctx_key)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        file_handler.addFilter(_context_filter)
        handlers.append(file_handler)

    return handlers


def init_logging(**kwargs: object) -> None:
    """Initialise the shared logging configuration.

    Defaults come from :func:`ctxlog.core.config.get_settings`; keyword
    arguments override individual ``LoggingConfig`` fields. The function is
    idempotent: repeating a call with the same effective configuration is a
    no-op, a different one replaces the handlers.
    """

    with _config_lock:
        global _config, _listener, _queue, _installed

        cfg = LoggingConfig.from_settings()
        for key, value in kwargs.items():
            if hasattr(cfg, key):
                setattr(cfg, key, value)  # type: ignore[arg-type]

        if _config is not None:
            if _config == cfg:
                return
            _teardown_locked()
        level = _parse_level(cfg.level)

        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        # ctxlog.* loggers must report disabled levels before any context is built.
        logging.getLogger(cfg.app_name).setLevel(level)

        handlers = _build_handlers(cfg, level)

        if cfg.queue and handlers:
            log_queue: SimpleQueue = SimpleQueue()
            queue_handler = QueueHandler(log_queue)
            queue_handler.setLevel(level)
            queue_handler.addFilter(_context_filter)
            root.addHandler(queue_handler)
            _installed = [queue_handler]
            listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
            listener.start()
            _queue = log_queue
            _listener = listener
        else:
            for handler in handlers:
                root.addHandler(handler)
            _installed = list(handlers)

        _config = cfg


def _teardown_locked() -> None:
    global _listener, _queue, _config, _installed
    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    if _listener:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
    if _config is not None:
        logging.getLogger(_config.app_name).setLevel(logging.NOTSET)
    _installed = []
    _listener = None
    _queue = None
    _config = None


def shutdown_logging() -> None:
    """Tear down queue listeners and close handlers, intended for tests."""

    with _config_lock:
        _teardown_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    with _config_lock:
        if _config is None:
            init_logging()
    cfg = _config or LoggingConfig()
    return logging.getLogger(name or cfg.app_name)


def set_level(level: str | int) -> None:
    new_level = _parse_level(level)
    with _config_lock:
        for handler in _installed:
            handler.setLevel(new_level)
        if _listener:
            for handler in _listener.handlers:
                handler.setLevel(new_level)
        if _config is not None:
            logging.getLogger(_config.app_name).setLevel(new_level)
    logging.getLogger().setLevel(logging.NOTSET)
