"""Console logging: coloured plain output or one JSON object per line."""

from __future__ import annotations

import json
import logging
import sys

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "soarpkg"

_RESET = "\x1b[0m"
_PREFIXES = {
    TRACE: "\x1b[35m[TRACE]" + _RESET,
    logging.DEBUG: "\x1b[34m[DEBUG]" + _RESET,
    logging.WARNING: "\x1b[33m[WARN]" + _RESET,
    logging.ERROR: "\x1b[31m[ERROR]" + _RESET,
}
_LEVEL_NAMES = {
    TRACE: "TRACE",
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "ERROR",
}


def _closest_level(levelno: int) -> int:
    for level in (logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG):
        if levelno >= level:
            return level
    return TRACE


class CustomFormatter(logging.Formatter):
    """Plain message, prefixed with a coloured tag for every level but INFO."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        prefix = _PREFIXES.get(_closest_level(record.levelno))
        return f"{prefix} {message}" if prefix else message


class JsonFormatter(logging.Formatter):
    """One JSON object per event: level, message and any ``fields`` extra."""

    def format(self, record: logging.LogRecord) -> str:
        event = {
            "level": _LEVEL_NAMES[_closest_level(record.levelno)],
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            event.update({key: str(value) for key, value in fields.items()})
        return json.dumps(event)


class _ConsoleHandler(logging.Handler):
    """Sends INFO to standard output and everything else to standard error."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = sys.stdout if record.levelno == logging.INFO else sys.stderr
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def level_for(verbose: int, quiet: bool) -> int:
    """Map the command-line verbosity options to a logging level."""
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return TRACE
    if verbose == 1:
        return logging.DEBUG
    return logging.INFO


def setup_logging(verbose: int, quiet: bool, json_output: bool) -> logging.Logger:
    """Configure the package logger and return it."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = _ConsoleHandler()
    handler.setFormatter(JsonFormatter() if json_output else CustomFormatter())
    logger.addHandler(handler)
    logger.setLevel(level_for(verbose, quiet))
    logger.propagate = False
    return logger