"""Entry and exit logging for decorated functions.

::

    @do_log
    def approve(quote: Annotated[Quote, ContextParam()], reviewer: str) -> None:
        ...

logs ``approve() -- > ctx:{key=..., quote=...}`` on entry and
``approve() < -- ...`` on exit at DEBUG level.
"""
from __future__ import annotations

import functools
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

from .constants import ENTRY_ARROW, EXIT_ARROW
from .context_info import ContextInfoBuilder
from .core.config import get_settings
from .extractors.configuration import get_registry
from .markers import ParameterSpec, describe_parameters
from .pretty import PrettyLogger
from .resolution import AnnotatedObjectResolver

F = TypeVar("F", bound=Callable[..., Any])

diagnostics = logging.getLogger("ctxlog.diagnostics")


@dataclass(frozen=True)
class CallInfo:
    """What the interception layer knows about one call."""

    name: str
    parameters: Sequence[ParameterSpec]
    arguments: Sequence[Any]


class LogFlowHandler:
    """Base for handlers that log a call together with its context info."""

    arrow = ""

    def __init__(
        self,
        pretty: Optional[PrettyLogger] = None,
        builder: Optional[ContextInfoBuilder] = None,
    ) -> None:
        self.pretty = pretty or PrettyLogger()
        self._builder = builder

    @property
    def builder(self) -> ContextInfoBuilder:
        # Looked up per call so a registry configured after decoration is honoured.
        if self._builder is not None:
            return self._builder
        return ContextInfoBuilder(AnnotatedObjectResolver(get_registry()))

    def context_info(self, call: CallInfo) -> dict[str, Any]:
        return self.builder.build(call.parameters, call.arguments)

    def perform(self, call: CallInfo) -> None:
        if not self.pretty.logger.isEnabledFor(logging.DEBUG):
            return
        self.pretty.debug(call.name + self.arrow, self.context_info(call))


class LogEntryHandler(LogFlowHandler):
    arrow = ENTRY_ARROW


class LogExitHandler(LogFlowHandler):
    arrow = EXIT_ARROW


def do_log(
    func: Optional[F] = None,
    *,
    on_entry: bool = True,
    on_exit: bool = True,
    pretty: Optional[PrettyLogger] = None,
    builder: Optional[ContextInfoBuilder] = None,
    suppress_errors: Optional[bool] = None,
) -> Any:
    """Log entry and exit of ``func`` with context from its marked parameters.

    Errors raised while logging are reported on the ``ctxlog.diagnostics``
    logger and swallowed so the call itself is unaffected, unless
    ``suppress_errors`` (default: ``Settings.suppress_errors``) is false.
    Exceptions raised by ``func`` propagate and skip the exit line.
    """

    def decorate(target: F) -> F:
        signature = inspect.signature(target)
        handlers: Optional[tuple[LogEntryHandler, LogExitHandler]] = None
        parameters: Optional[tuple[ParameterSpec, ...]] = None

        def flow_handlers() -> tuple[LogEntryHandler, LogExitHandler]:
            nonlocal handlers
            if handlers is None:
                shared = pretty or PrettyLogger()
                handlers = (LogEntryHandler(shared, builder), LogExitHandler(shared, builder))
            return handlers

        def metadata() -> tuple[ParameterSpec, ...]:
            nonlocal parameters
            if parameters is None:
                try:
                    parameters = describe_parameters(target)
                except Exception:
                    # Reported once; later calls log without context.
                    parameters = ()
                    raise
            return parameters

        def call_info(args: tuple, kwargs: dict) -> CallInfo:
            specs = metadata()
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            return CallInfo(
                name=target.__name__,
                parameters=specs,
                arguments=tuple(bound.arguments[spec.name] for spec in specs),
            )

        def guarded(stage: str, action: Callable[[], Any]) -> Any:
            try:
                return action()
            except Exception:
                suppress = suppress_errors
                if suppress is None:
                    suppress = get_settings().suppress_errors
                if not suppress:
                    raise
                diagnostics.exception("Failed to log %s of %s()", stage, target.__qualname__)
                return None

        def before(args: tuple, kwargs: dict) -> Optional[CallInfo]:
            call = guarded("entry", lambda: call_info(args, kwargs))
            if on_entry and call is not None:
                guarded("entry", lambda: flow_handlers()[0].perform(call))
            return call

        def after(call: Optional[CallInfo]) -> None:
            if on_exit and call is not None:
                guarded("exit", lambda: flow_handlers()[1].perform(call))

        if inspect.iscoroutinefunction(target):

            @functools.wraps(target)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                call = before(args, kwargs)
                result = await target(*args, **kwargs)
                after(call)
                return result

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(target)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            call = before(args, kwargs)
            result = target(*args, **kwargs)
            after(call)
            return result

        return wrapper  # type: ignore[return-value]

    if func is not None:
        return decorate(func)
    return decorate
