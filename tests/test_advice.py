"""Tests for entry/exit logging of decorated functions."""
from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Any, Mapping, Sequence

import pytest

from ctxlog.advice import CallInfo, LogEntryHandler, do_log
from ctxlog.constants import SINGLE_PROPERTY
from ctxlog.context_info import ContextInfoBuilder
from ctxlog.core.config import get_settings
from ctxlog.core.log import log_context
from ctxlog.extractors import (
    ContextParamExtractor,
    build_extractor_registry,
    configure,
    reset_registry,
)
from ctxlog.formatting import ContextMessageFormatter
from ctxlog.markers import ContextParam, ParameterSpec
from ctxlog.pretty import PrettyLogger
from ctxlog.resolution import AnnotatedObjectResolver

LOGGER_NAME = "tests.advice"


class Quote:
    def __init__(self, name: str, status: str = "Jumping") -> None:
        self.name = name
        self.status = status


class QuoteExtractor(ContextParamExtractor):
    def __init__(self) -> None:
        self.calls = 0

    def extractable_types(self) -> Sequence[type]:
        return (Quote,)

    def extract_params(self, name: str, value: Any) -> Mapping[str, Any]:
        self.calls += 1
        if value.name == "explode":
            raise RuntimeError("cannot extract")
        return {"quoteName": value.name, "quoteStatus": value.status}


class ScalarExtractor(ContextParamExtractor):
    def extractable_types(self) -> Sequence[type]:
        return (str, int)

    def extract_params(self, name: str, value: Any) -> Mapping[str, Any]:
        return {SINGLE_PROPERTY: value}


@pytest.fixture(autouse=True)
def clean_log_context():
    log_context.clear()
    yield
    log_context.clear()


@pytest.fixture()
def quote_extractor() -> QuoteExtractor:
    return QuoteExtractor()


@pytest.fixture()
def builder(quote_extractor: QuoteExtractor) -> ContextInfoBuilder:
    registry = build_extractor_registry([quote_extractor, ScalarExtractor()])
    return ContextInfoBuilder(AnnotatedObjectResolver(registry))


@pytest.fixture()
def pretty(caplog: pytest.LogCaptureFixture) -> PrettyLogger:
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    return PrettyLogger(logging.getLogger(LOGGER_NAME), ContextMessageFormatter())


def _messages(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [record.getMessage() for record in caplog.records if record.name == LOGGER_NAME]


def test_entry_and_exit_are_logged_with_context(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    @do_log(pretty=pretty, builder=builder)
    def approve(
        quote: Annotated[Quote, ContextParam()],
        reviewer: str,
        quote_id: Annotated[int, ContextParam("quoteId")] = 7,
    ) -> str:
        return f"approved by {reviewer}"

    with log_context.scope(47777):
        result = approve(Quote("UberQuote"), reviewer="bob")

    assert result == "approved by bob"
    assert _messages(caplog) == [
        "approve() -- >. ctx:{key=47777, quote={quoteName=UberQuote, quoteStatus=Jumping}, quoteId=7}",
        "approve() < --. ctx:{key=47777, quote={quoteName=UberQuote, quoteStatus=Jumping}, quoteId=7}",
    ]
    assert all(record.levelno == logging.DEBUG for record in caplog.records if record.name == LOGGER_NAME)


def test_bound_values_precede_call_context(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    @do_log(pretty=pretty, builder=builder, on_exit=False)
    def rename(name: Annotated[str, ContextParam("quoteName")]) -> None:
        pass

    log_context.bind(tenant="acme", quoteName="stale")
    rename("Fresh")

    assert _messages(caplog) == ["rename() -- >. ctx:{tenant=acme, quoteName=Fresh}"]


def test_methods_skip_unmarked_self(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    class Desk:
        @do_log(pretty=pretty, builder=builder, on_exit=False)
        def book(self, quote_id: Annotated[int, ContextParam("quoteId")]) -> int:
            return quote_id

    assert Desk().book(3) == 3
    assert _messages(caplog) == ["book() -- >. ctx:{quoteId=3}"]


def test_async_functions_are_supported(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    @do_log(pretty=pretty, builder=builder)
    async def fetch(quote_id: Annotated[int, ContextParam("quoteId")]) -> int:
        await asyncio.sleep(0)
        return quote_id * 2

    assert asyncio.run(fetch(21)) == 42
    assert _messages(caplog) == [
        "fetch() -- >. ctx:{quoteId=21}",
        "fetch() < --. ctx:{quoteId=21}",
    ]


def test_logging_failure_does_not_abort_call(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    @do_log(pretty=pretty, builder=builder, suppress_errors=True)
    def approve(quote: Annotated[Quote, ContextParam()]) -> str:
        return "done"

    assert approve(Quote("explode")) == "done"

    failures = [record for record in caplog.records if record.name == "ctxlog.diagnostics"]
    assert len(failures) == 2
    assert failures[0].getMessage().startswith("Failed to log entry of")
    assert failures[0].exc_info is not None
    assert isinstance(failures[0].exc_info[1], RuntimeError)
    assert _messages(caplog) == []


def test_logging_failure_propagates_when_not_suppressed(
    pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    @do_log(pretty=pretty, builder=builder, suppress_errors=False)
    def approve(quote: Annotated[Quote, ContextParam()]) -> str:
        return "done"

    with pytest.raises(RuntimeError, match="cannot extract"):
        approve(Quote("explode"))


def test_function_errors_propagate_without_exit_line(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    @do_log(pretty=pretty, builder=builder)
    def reject(quote_id: Annotated[int, ContextParam("quoteId")]) -> None:
        raise LookupError("no such quote")

    with pytest.raises(LookupError):
        reject(9)

    assert _messages(caplog) == ["reject() -- >. ctx:{quoteId=9}"]


def test_disabled_debug_skips_resolution(
    caplog: pytest.LogCaptureFixture,
    pretty: PrettyLogger,
    builder: ContextInfoBuilder,
    quote_extractor: QuoteExtractor,
) -> None:
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    @do_log(pretty=pretty, builder=builder)
    def approve(quote: Annotated[Quote, ContextParam()]) -> None:
        pass

    approve(Quote("UberQuote"))

    assert quote_extractor.calls == 0
    assert _messages(caplog) == []


def test_bare_decorator_uses_process_registry(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger
) -> None:
    reset_registry()

    @do_log(pretty=pretty)
    def approve(quote: Annotated[Quote, ContextParam()]) -> None:
        pass

    try:
        configure([QuoteExtractor()])
        approve(Quote("Configured"))
    finally:
        reset_registry()

    assert _messages(caplog)[0] == "approve() -- >. ctx:{quote={quoteName=Configured, quoteStatus=Jumping}}"


def test_entry_handler_logs_call_info(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    call = CallInfo(
        name="price",
        parameters=(ParameterSpec(0, "quote", ContextParam()), ParameterSpec(1, "note")),
        arguments=(Quote("UberQuote"), "ignored"),
    )

    LogEntryHandler(pretty, builder).perform(call)

    assert _messages(caplog) == [
        "price() -- >. ctx:{quote={quoteName=UberQuote, quoteStatus=Jumping}}"
    ]


def test_exit_only_when_entry_disabled(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    @do_log(pretty=pretty, builder=builder, on_entry=False)
    def settle(quote_id: Annotated[int, ContextParam("quoteId")]) -> None:
        pass

    settle(5)

    assert _messages(caplog) == ["settle() < --. ctx:{quoteId=5}"]


def test_decoration_does_not_read_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CTXLOG_PRIMARY_KEY", "  ")
    get_settings.cache_clear()
    try:

        @do_log
        def approve(quote: Annotated[Quote, ContextParam()]) -> str:
            return "done"

        with pytest.raises(ValueError, match="CTXLOG_PRIMARY_KEY"):
            get_settings()
        assert approve.__name__ == "approve"
    finally:
        get_settings.cache_clear()


def test_broken_annotations_are_reported_once(
    caplog: pytest.LogCaptureFixture, pretty: PrettyLogger, builder: ContextInfoBuilder
) -> None:
    @do_log(pretty=pretty, builder=builder, suppress_errors=True)
    def approve(quote: Annotated[MissingQuote, ContextParam()]) -> str:  # type: ignore[name-defined]  # noqa: F821
        return "done"

    assert approve(Quote("UberQuote")) == "done"
    assert approve(Quote("UberQuote")) == "done"

    failures = [record for record in caplog.records if record.name == "ctxlog.diagnostics"]
    assert len(failures) == 1
    assert isinstance(failures[0].exc_info[1], NameError)
    assert _messages(caplog) == ["approve() -- >. ctx:{}", "approve() < --. ctx:{}"]
