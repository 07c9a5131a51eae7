import logging

import colorama
import pytest

from mapsize import log


@pytest.fixture
def restore_root_logger(monkeypatch):
    monkeypatch.setattr(colorama, "init", lambda: None)
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    formatters = [handler.formatter for handler in handlers]
    yield root
    root.setLevel(level)
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for handler, formatter in zip(handlers, formatters):
        handler.setFormatter(formatter)


def test_color():
    assert log.color(colorama.Fore.RED, "boom") == (
        colorama.Fore.RED + "boom" + colorama.Style.RESET_ALL
    )
    assert log.color("", "plain") == "plain"
    assert log.color(colorama.Fore.RED, "boom", reset=False) == (
        colorama.Fore.RED + "boom"
    )


def test_formatter_colours_by_level():
    formatter = log.MapsizeLogFormatter(include_timestamp=False)
    record = logging.LogRecord(
        "mapsize", logging.ERROR, __file__, 1, "bad %s", ("map",), None
    )

    formatted = formatter.format(record)

    assert formatted.startswith(colorama.Fore.RED)
    assert "ERROR bad map" in formatted


def test_formatter_timestamp():
    formatter = log.MapsizeLogFormatter(include_timestamp=True)
    record = logging.LogRecord("mapsize", logging.INFO, __file__, 1, "hello", (), None)

    assert formatter.format(record) != log.MapsizeLogFormatter(
        include_timestamp=False
    ).format(record)


@pytest.mark.parametrize(
    "level, expected",
    (
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        (logging.ERROR, logging.ERROR),
    ),
)
def test_setup_log(restore_root_logger, level, expected):
    log.setup_log(level)

    assert restore_root_logger.level == expected
    assert restore_root_logger.handlers
    assert all(
        isinstance(handler.formatter, log.MapsizeLogFormatter)
        for handler in restore_root_logger.handlers
    )
