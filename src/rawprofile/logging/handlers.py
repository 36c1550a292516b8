"""JSON log formatting for rawprofile.

Each record becomes one JSON object per line. Fields that describe the
profile being upgraded are grouped so that log processors can filter on
them without parsing messages::

    {
      "timestamp": "2026-01-01T12:00:00+00:00",
      "level": "INFO",
      "logger": "rawprofile.versioning.upgrade",
      "message": "Upgraded raw profile from version 3 to 4",
      "profile": {"source": "profile.json", "path": "threads[1]"},
      "upgrade": {"from_version": 3, "to_version": 4}
    }

Upgrade fields are passed by the caller through ``extra=``; profile fields
come from ProfileContextFilter.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Keys callers pass via extra= to describe an upgrade attempt
UPGRADE_FIELDS: tuple[str, ...] = ("from_version", "to_version", "error_kind")

_PROFILE_FIELDS = {"profile_source": "source", "profile_path": "path"}

# Attributes every LogRecord has, plus those added by formatting and by
# ProfileContextFilter
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "profile_tag", *_PROFILE_FIELDS}


class ProfileJSONFormatter(logging.Formatter):
    """Format log records as JSON objects with profile and upgrade groups.

    - ``profile``: source file and nesting path of the profile being
      upgraded, when set.
    - ``upgrade``: any of UPGRADE_FIELDS given via ``extra=``.
    - ``context``: any other ``extra=`` values.
    - ``exception``: the formatted traceback, when there is one.
    """

    def _group(self, record: logging.LogRecord) -> dict[str, dict[str, Any]]:
        groups: dict[str, dict[str, Any]] = {
            "profile": {},
            "upgrade": {},
            "context": {},
        }
        for attr, key in _PROFILE_FIELDS.items():
            value = getattr(record, attr, None)
            if value:
                groups["profile"][key] = value
        for key, value in vars(record).items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            target = "upgrade" if key in UPGRADE_FIELDS else "context"
            groups[target][key] = value
        return {name: fields for name, fields in groups.items() if fields}

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(self._group(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
