"""Unit tests for the JSON logging setup."""

from __future__ import annotations

import json
import logging

from account_service.core.logger import JSONFormatter, RequestIdFilter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("account_service.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_configure_logging_sets_level() -> None:
    configure_logging("DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
    finally:
        configure_logging("INFO")


def test_formatter_emits_one_json_line_with_known_extras() -> None:
    record = _record(request_id="r-1", user_id=7, affected=2, password="nope")

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello x"
    assert payload["request_id"] == "r-1"
    assert payload["user_id"] == 7
    assert payload["affected"] == 2
    assert "password" not in payload


def test_request_id_filter_outside_request() -> None:
    record = _record()
    assert RequestIdFilter().filter(record) is True
    assert record.request_id is None


def test_request_id_filter_inside_request(app) -> None:
    record = _record()
    with app.test_request_context(headers={"X-Correlation-ID": "corr-9"}):
        RequestIdFilter().filter(record)
    assert record.request_id == "corr-9"
