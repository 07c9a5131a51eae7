"""Coloured logging setup for the command line."""

import logging

import colorama

_LEVEL_COLORS = {
    "DEBUG": colorama.Fore.CYAN,
    "INFO": colorama.Fore.GREEN,
    "WARNING": colorama.Fore.YELLOW,
    "ERROR": colorama.Fore.RED,
    "CRITICAL": colorama.Fore.RED + colorama.Style.BRIGHT,
}


def color(col: str | tuple[str, ...], msg: str, reset: bool = True) -> str:
    prefix = "".join(col) if isinstance(col, tuple) else col
    suffix = colorama.Style.RESET_ALL if reset and prefix else ""
    return prefix + msg + suffix


class MapsizeLogFormatter(logging.Formatter):
    """Logging formatter that colours the whole record by level."""

    def __init__(self, *, include_timestamp: bool) -> None:
        fmt = "%(asctime)s " if include_timestamp else ""
        fmt += "%(levelname)s %(message)s"
        super().__init__(fmt=fmt, style="%")

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        return color(_LEVEL_COLORS.get(record.levelname, ""), formatted)


def setup_log(log_level: str | int = "INFO", include_timestamp: bool = False) -> None:
    colorama.init()

    root = logging.getLogger()
    root.setLevel(log_level.upper() if isinstance(log_level, str) else log_level)
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    for handler in root.handlers:
        handler.setFormatter(MapsizeLogFormatter(include_timestamp=include_timestamp))
