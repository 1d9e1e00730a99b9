import json
import logging

import pytest

from conduit.logging import (
    LoggingSettings,
    LogLevel,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def _record(msg: str, **context) -> logging.LogRecord:
    record = logging.LogRecord(
        name="conduit.test", level=logging.INFO, pathname="", lineno=0, msg=msg, args=(), exc_info=None
    )
    if context:
        record.conduit_context = context
    return record


def test_structured_formatter_json():
    fmt = StructuredFormatter(json_format=True, include_timestamp=False, include_level=True)
    data = json.loads(fmt.format(_record("msg", token="Mailer")))
    assert data["message"] == "msg"
    assert data["level"] == "INFO"
    assert data["token"] == "Mailer"
    assert "timestamp" not in data


def test_structured_formatter_plain():
    fmt = StructuredFormatter(json_format=False, include_timestamp=False, include_level=True)
    formatted = fmt.format(_record("plain", count=2))
    assert formatted.startswith("plain [INFO]")
    assert "count=2" in formatted


def test_log_level_coercion():
    assert LogLevel.coerce("warning") is LogLevel.WARNING
    assert LogLevel.coerce(" warn ") is LogLevel.WARNING
    assert LogLevel.coerce("FATAL") is LogLevel.CRITICAL
    assert LogLevel.coerce(logging.ERROR) is LogLevel.ERROR
    assert LogLevel.coerce(25) is LogLevel.INFO
    assert LogLevel.coerce("40") is LogLevel.ERROR
    assert LogLevel.ERROR.number == logging.ERROR


@pytest.mark.parametrize("value", ["LOUD", "NOTSET", 5, True, ""])
def test_log_level_rejects(value):
    with pytest.raises(ValueError):
        LogLevel.coerce(value)


def test_logging_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CONDUIT_LOGGING_LEVEL", "debug")
    monkeypatch.setenv("CONDUIT_LOGGING_JSON_FORMAT", "true")
    settings = LoggingSettings.load()
    assert settings.level == "DEBUG"
    assert settings.json_format is True


def test_logger_passes_structured_context(caplog):
    logger = get_logger("conduit.tests")
    with caplog.at_level(logging.INFO, logger="conduit"):
        logger.bind(request="r-1").info("handled", status=200)
    record = caplog.records[-1]
    assert record.getMessage() == "handled"
    assert record.conduit_context == {"request": "r-1", "status": 200}


def test_configure_logging_force_replaces_handler():
    root = logging.getLogger("conduit")
    configure_logging(LoggingSettings(console_enabled=False), force=True)
    handlers = list(root.handlers)
    configure_logging(LoggingSettings(console_enabled=False, level="DEBUG"), force=True)
    assert len(root.handlers) == len(handlers)
    assert root.level == logging.DEBUG
    configure_logging(LoggingSettings(), force=True)
    assert root.level == logging.INFO
