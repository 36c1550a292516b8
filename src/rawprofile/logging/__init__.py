"""Structured logging module for rawprofile.

Provides configurable logging with JSON format support and file rotation.
Includes profile context support so that messages emitted while upgrading
embedded subprocess profiles say which one they belong to.
"""

from rawprofile.logging.config import configure_logging
from rawprofile.logging.context import (
    ProfileContextFilter,
    clear_profile_context,
    get_profile_context,
    nested_profile_context,
    profile_context,
    set_profile_context,
)
from rawprofile.logging.handlers import UPGRADE_FIELDS, ProfileJSONFormatter

__all__ = [
    "ProfileJSONFormatter",
    "UPGRADE_FIELDS",
    "ProfileContextFilter",
    "clear_profile_context",
    "configure_logging",
    "get_profile_context",
    "nested_profile_context",
    "profile_context",
    "set_profile_context",
]
