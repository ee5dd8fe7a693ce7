"""Logging setup for nuspecgen, including MSBuild-readable console output."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "nuspecgen"
_CONSOLE_FORMAT = "[nuspecgen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the nuspecgen hierarchy, e.g. `nuspecgen.merger`."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class MSBuildFormatter(logging.Formatter):
    """Render warnings and errors in MSBuild's canonical message format.

    A post-build step that prints `origin : warning : text` has the line
    surfaced as a build warning (or error) instead of plain output. The
    origin is the `path` passed through `extra`, falling back to the tool
    name. Records below WARNING are passed through as bare messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno < logging.WARNING:
            return message
        category = "error" if record.levelno >= logging.ERROR else "warning"
        origin = getattr(record, "path", None) or _LOGGER_NAME
        return f"{origin} : {category} : {message}"


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    msbuild: bool = False,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the nuspecgen logger.

    Existing handlers are closed first since a build may call the CLI
    entrypoint several times in one process.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(MSBuildFormatter() if msbuild else logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["MSBuildFormatter", "configure_logging", "get_logger"]
