import json
import logging

from sales_analytics.core.logger import get_logger
from sales_analytics.core.logging_config import (
    CustomJsonFormatter,
    SensitiveDataFilter,
    configure_logging,
)


def _record(msg="hello", **extra):
    record = logging.LogRecord("test", logging.INFO, __file__, 1, msg, (), None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


class TestSensitiveDataFilter:
    def test_redacts_nested_keys(self):
        f = SensitiveDataFilter(["password", "token"])
        out = f.filter({"user": "a", "Password": "x", "nested": {"api_token": "y", "ok": 1}})
        assert out == {"user": "a", "Password": "[REDACTED]", "nested": {"api_token": "[REDACTED]", "ok": 1}}


class TestCustomJsonFormatter:
    def test_emits_json_with_service_fields(self):
        fmt = CustomJsonFormatter("analytics", "testing", ["secret"])
        payload = json.loads(fmt.format(_record("cache_hit", cache_key="analytics:*", secret="s")))
        assert payload["message"] == "cache_hit"
        assert payload["service"] == "analytics"
        assert payload["environment"] == "testing"
        assert payload["cache_key"] == "analytics:*"
        assert payload["secret"] == "[REDACTED]"

    def test_formats_exception(self):
        fmt = CustomJsonFormatter("analytics", "testing", [])
        try:
            raise ValueError("bad")
        except ValueError:
            import sys

            record = logging.LogRecord("t", logging.ERROR, __file__, 1, "boom", (), sys.exc_info())
        payload = json.loads(fmt.format(record))
        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "bad"


def test_configure_logging_installs_single_handler():
    root = configure_logging("analytics", "testing", "debug", ["password"])
    try:
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(logging.WARNING)


def test_get_logger_propagates():
    logger = get_logger("sales_analytics.test")
    assert logger.name == "sales_analytics.test"
    assert logger.propagate is True
