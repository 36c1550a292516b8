"""Logging setup for the rawprofile command line.

configure_logging() installs rawprofile's own handlers on the root logger.
Every installed handler carries a ProfileContextFilter, which is also how a
later call recognizes and replaces them; handlers installed by anything else
(an embedding application, pytest) are left alone.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from rawprofile.logging.context import ProfileContextFilter
from rawprofile.logging.handlers import ProfileJSONFormatter

if TYPE_CHECKING:
    from rawprofile.config.models import LoggingConfig

# "[profile.json:threads[2]] " while an upgrade runs, empty otherwise
TEXT_FORMAT = "%(asctime)s - %(profile_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _is_rawprofile_handler(handler: logging.Handler) -> bool:
    return any(isinstance(f, ProfileContextFilter) for f in handler.filters)


def _make_formatter(log_format: str) -> logging.Formatter:
    if log_format.casefold() == "json":
        return ProfileJSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it cannot be created."""
    if config.file is None:
        return None
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> list[logging.Handler]:
    """Route log records according to ``config``.

    Records go to the log file when one is configured and can be opened,
    and to stderr when ``include_stderr`` is set or there is no usable file.
    Each record is tagged with the profile being upgraded.

    Args:
        config: Logging configuration.

    Returns:
        The handlers that were installed.
    """
    level = logging.getLevelNamesMapping()[config.level.upper()]
    root_logger = logging.getLogger()

    for handler in [h for h in root_logger.handlers if _is_rawprofile_handler(h)]:
        root_logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = []
    file_handler = _open_log_file(config)
    if file_handler is not None:
        handlers.append(file_handler)
    if config.include_stderr or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = _make_formatter(config.format)
    context_filter = ProfileContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    root_logger.setLevel(level)
    return handlers
