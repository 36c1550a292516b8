"""Profile context for structured logging.

Provides context propagation using contextvars, enabling automatic injection
of the profile being upgraded (its source and its nesting path inside the
parent profile) into log records.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

# Context variables for profile identification
_profile_source: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "profile_source", default=None
)
_profile_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "profile_path", default=None
)


def set_profile_context(
    source: Path | str | None = None, path: str | None = None
) -> None:
    """Set the current profile context.

    Args:
        source: Where the profile was loaded from (file name), or None.
        path: Nesting path of an embedded profile (e.g. "threads[2]"),
            or None for the top-level profile.
    """
    _profile_source.set(str(source) if source is not None else None)
    _profile_path.set(path)


def clear_profile_context() -> None:
    """Clear the current profile context."""
    _profile_source.set(None)
    _profile_path.set(None)


def get_profile_context() -> tuple[str | None, str | None]:
    """Get current profile context.

    Returns:
        Tuple of (source, path), either may be None.
    """
    return _profile_source.get(), _profile_path.get()


@contextmanager
def profile_context(
    source: Path | str | None = None, path: str | None = None
) -> Generator[None, None, None]:
    """Context manager for the profile being processed.

    Sets the profile context on entry and restores the previous one on exit.

    Example:
        with profile_context("profile.json"):
            logger.info("Upgrading")  # Tagged [profile.json]
    """
    old_source = _profile_source.get()
    old_path = _profile_path.get()
    try:
        set_profile_context(source, path)
        yield
    finally:
        _profile_source.set(old_source)
        _profile_path.set(old_path)


@contextmanager
def nested_profile_context(segment: str) -> Generator[str, None, None]:
    """Descend into an embedded profile, extending the nesting path.

    The source is kept; ``segment`` is appended to the current path.

    Yields:
        The full nesting path of the embedded profile.
    """
    parent = _profile_path.get()
    path = f"{parent}.{segment}" if parent else segment
    token = _profile_path.set(path)
    try:
        yield path
    finally:
        _profile_path.reset(token)


class ProfileContextFilter(logging.Filter):
    """Logging filter that injects profile context into log records.

    Adds profile_source and profile_path attributes to LogRecord from
    contextvars. For text format, also adds a formatted profile_tag for
    compact display like [profile.json:threads[2]].
    """

    def filter(self, record: logging.LogRecord) -> bool:
        source, path = get_profile_context()

        record.profile_source = source
        record.profile_path = path

        parts = [part for part in (source, path) if part]
        record.profile_tag = f"[{':'.join(parts)}] " if parts else ""

        return True  # Never filter out records
