"""Tests for logging helpers and codec debug events."""

import logging

from codec import parse
from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled
from constants import Constants


def test_extra_context_orders_known_fields_and_drops_none():
    ctx = extra_context(custom=1, outcome="success", event="parse", target=None)
    assert list(ctx) == ["event", "outcome", "custom"]


def test_timer_measures_non_negative_duration():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0.0


def test_configure_logging_reads_environment(monkeypatch):
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "warning")
    configure_logging()
    assert logging.getLogger().level == logging.WARNING
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    assert is_debug_enabled(logging.getLogger("codec.reader"))


def test_reader_emits_debug_event(caplog):
    with caplog.at_level(logging.DEBUG, logger="codec.reader"):
        parse("a\n\truntime: 1\n")
    records = [r for r in caplog.records if r.message == "Parsed dependency declarations"]
    assert records
    assert records[0].component == "codec_reader"
    assert records[0].count == 1
