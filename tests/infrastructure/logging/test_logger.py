"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

from liqplan.infrastructure.logging import logger as logger_module


def test_logger_builder_writes_to_dated_file_under_logs(tmp_path, monkeypatch):
    """LoggerBuilder should place the log file in logs/<subdir>/."""
    monkeypatch.setattr(
        logger_module,
        "get_project_root",
        lambda: tmp_path,
    )
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20250601"),
    )

    builder = logger_module.LoggerBuilder()
    forecast_logger = (
        builder.name("liqplan.test.forecast")
        .subdir("forecast")
        .prefix("forecast_logs")
        .console(False)
        .level(logging.WARNING)
        .formatter(logger_module.LoggerBuilder._default_formatter)
        .file_handler(logger_module.LoggerBuilder._default_file_handler)
        .build()
    )

    assert forecast_logger.name == "liqplan.test.forecast"
    assert forecast_logger.level == logging.WARNING
    file_handlers = [
        h
        for h in forecast_logger.handlers
        if isinstance(h, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    expected = tmp_path / "logs" / "forecast" / "20250601_forecast_logs.log"
    assert file_handlers[0].baseFilename == str(expected)
    assert len(forecast_logger.handlers) == 1
    # Building again reuses the logger without adding handlers.
    assert builder.build() is forecast_logger
    assert len(forecast_logger.handlers) == 1

    for handler in forecast_logger.handlers:
        handler.close()
    forecast_logger.handlers.clear()


def test_logger_builder_uses_custom_handler_factories(tmp_path, monkeypatch):
    """Custom factories should receive the log path and the formatter."""
    monkeypatch.setattr(
        logger_module,
        "get_project_root",
        lambda: tmp_path,
    )
    fmt = logging.Formatter("%(message)s")
    captured = {}

    def file_factory(path, formatter):
        captured["path"] = path
        captured["file_fmt"] = formatter
        return logging.NullHandler()

    def console_factory(formatter):
        captured["console_fmt"] = formatter
        return logging.NullHandler()

    built = (
        logger_module.LoggerBuilder()
        .name("liqplan.test.factories")
        .subdir("usage")
        .prefix("usage_logs")
        .formatter(lambda: fmt)
        .file_handler(file_factory)
        .console_handler(console_factory)
        .build()
    )

    assert captured["path"].parent == tmp_path / "logs" / "usage"
    assert captured["path"].name.endswith("_usage_logs.log")
    assert captured["file_fmt"] is fmt
    assert captured["console_fmt"] is fmt
    assert len(built.handlers) == 2
    built.handlers.clear()


def test_default_handlers_use_formatter(tmp_path):
    """Default handlers should apply the provided formatter at INFO."""
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "liqplan.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert isinstance(file_handler, logging.FileHandler)
    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt

    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.level == logging.INFO
    assert console_handler.formatter is fmt
    file_handler.close()


def test_logger_singleton_delegates_to_underlying_logger(monkeypatch):
    """Logger info/warning/error/etc. should call the wrapped logger."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    logger = logger_module.Logger("liqplan")
    logger.info("forecast built")
    logger.warning("skipped record")
    logger.error("missing url")
    logger.debug("dbg")
    logger.critical("crit")

    fake_logger.info.assert_called_with("forecast built")
    fake_logger.warning.assert_called_with("skipped record")
    fake_logger.error.assert_called_with("missing url")
    fake_logger.debug.assert_called_with("dbg")
    fake_logger.critical.assert_called_with("crit")
    assert logger_module.Logger("liqplan") is logger


def test_app_and_usage_loggers_are_distinct_singletons(monkeypatch):
    """get_app_logger and get_usage_logger should return own singletons."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger_1 = logger_module.get_app_logger()
    app_logger_2 = logger_module.get_app_logger()
    usage_logger_1 = logger_module.get_usage_logger()
    usage_logger_2 = logger_module.get_usage_logger()

    assert app_logger_1 is app_logger_2
    assert usage_logger_1 is usage_logger_2
    assert app_logger_1 is not usage_logger_1
    assert isinstance(app_logger_1.logger, MagicMock)
    assert isinstance(usage_logger_1.logger, MagicMock)
