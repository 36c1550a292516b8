"""Raw profile migration from version 3 to version 4.

Version 4 changed two things:
- ``libs`` became an actual list instead of a JSON string. Each library has
  ``debugName``, ``breakpadId``, ``path``, ``name`` and ``arch`` fields, and
  the list is sorted by start address.
- Every thread has a ``processType`` field.

Both changes also apply to the subprocess profiles embedded in ``threads``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from rawprofile.domain.enums import ProcessType
from rawprofile.domain.models import ThreadRecord
from rawprofile.logging.context import get_profile_context
from rawprofile.versioning.embedded import walk_thread_slots
from rawprofile.versioning.exceptions import MalformedProfileError
from rawprofile.versioning.libraries import normalize_libraries

logger = logging.getLogger(__name__)


def _load_legacy_libs(profile: dict[str, Any]) -> list[Any]:
    path = get_profile_context()[1]
    libs = profile.get("libs")
    if isinstance(libs, str):
        try:
            libs = json.loads(libs)
        except json.JSONDecodeError as e:
            raise MalformedProfileError(
                f"libs is not valid JSON at position {e.pos}: {e.msg}", path=path
            ) from e
    if not isinstance(libs, list):
        raise MalformedProfileError("libs is not a list of libraries", path=path)
    return libs


def backfill_process_type(thread: ThreadRecord) -> None:
    """Add the ``processType`` field to a pre-version-4 thread.

    At the beginning of format version 3, the thread name for any thread in
    a "tab" process was "Content" and the processType field did not exist.
    That change was made without a version bump, so both layouts appear in
    version 3 profiles. A thread that already has a processType is left as
    is.
    """
    if thread.has_process_type:
        return

    if thread.name == "Content":
        thread.data["processType"] = ProcessType.TAB.value
        thread.data["name"] = "GeckoMain"
    elif thread.name == "Plugin":
        thread.data["processType"] = ProcessType.PLUGIN.value
    else:
        thread.data["processType"] = ProcessType.DEFAULT.value


def convert_to_v4(profile: dict[str, Any]) -> None:
    """Apply the version 4 changes to one profile and its embedded profiles.

    The profile's own ``meta.version`` is not touched.
    """
    meta = profile.get("meta")
    abi = meta.get("abi") if isinstance(meta, dict) else None

    profile["libs"] = normalize_libraries(
        _load_legacy_libs(profile), abi, path=get_profile_context()[1]
    )

    threads = profile.get("threads", [])
    if not isinstance(threads, list):
        raise MalformedProfileError(
            "threads is not a list", path=get_profile_context()[1]
        )
    walk_thread_slots(threads, convert_to_v4, backfill_process_type)


def migrate_v3_to_v4(profile: dict[str, Any]) -> None:
    """Migrate a raw profile from version 3 to version 4.

    Args:
        profile: The profile, modified in place.

    Raises:
        MalformedProfileError: If libs, threads or an embedded profile
            cannot be read.
        MalformedDescriptorError: If a library descriptor matches neither
            legacy shape.
    """
    convert_to_v4(profile)
    logger.debug("Converted libs and threads to version 4 layout")
