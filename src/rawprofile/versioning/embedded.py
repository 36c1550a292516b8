"""Embedded subprocess profile traversal.

Gecko stores the profiles of child processes inside the parent profile:
such an entry in ``threads`` is not a thread object but a string holding a
complete, serialized raw profile. A profile upgrade step has to be applied to
those nested documents too, at any depth.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from rawprofile.domain.models import EmbeddedProfile, ThreadRecord, ThreadSlot
from rawprofile.logging.context import get_profile_context, nested_profile_context

from .exceptions import MalformedProfileError

logger = logging.getLogger(__name__)

ProfileConverter = Callable[[dict[str, Any]], None]
ThreadConverter = Callable[[ThreadRecord], None]


def _current_path() -> str | None:
    return get_profile_context()[1]


def classify_thread_slot(slot: Any) -> ThreadSlot:
    """Tell apart the two kinds of entries found in a ``threads`` list.

    Raises:
        MalformedProfileError: If the slot is neither a thread object nor
            a serialized profile.
    """
    if isinstance(slot, str):
        return EmbeddedProfile(slot)
    if isinstance(slot, dict):
        return ThreadRecord(slot)
    raise MalformedProfileError(
        f"Thread entry of type {type(slot).__name__} is neither a thread "
        "nor an embedded profile",
        path=_current_path(),
    )


def decode_embedded_profile(embedded: EmbeddedProfile) -> dict[str, Any]:
    """Parse the profile held by an embedded slot.

    Raises:
        MalformedProfileError: If the text is not a JSON object.
    """
    try:
        profile = json.loads(embedded.raw)
    except json.JSONDecodeError as e:
        raise MalformedProfileError(
            f"Embedded profile is not valid JSON at position {e.pos}: {e.msg}",
            path=_current_path(),
        ) from e
    if not isinstance(profile, dict):
        raise MalformedProfileError(
            "Embedded profile is not a JSON object", path=_current_path()
        )
    return profile


def encode_embedded_profile(profile: dict[str, Any]) -> str:
    """Serialize a profile for storage in a parent's ``threads`` list.

    Uses the compact form the profiler itself writes.
    """
    return json.dumps(profile, separators=(",", ":"), ensure_ascii=False)


def walk_thread_slots(
    threads: list[Any],
    convert_profile: ProfileConverter,
    convert_thread: ThreadConverter,
) -> None:
    """Apply a conversion to every entry of a ``threads`` list, in place.

    Embedded profiles are decoded, handed to ``convert_profile`` and written
    back serialized into the same slot. ``convert_profile`` is expected to
    call back into this function for the nested profile's own threads, which
    is how arbitrarily deep nesting is handled. Thread objects are handed to
    ``convert_thread``. Slot order and count are preserved.

    Args:
        threads: The ``threads`` list of one profile.
        convert_profile: Conversion applied to each embedded profile.
        convert_thread: Conversion applied to each thread object.
    """
    for index, slot in enumerate(threads):
        with nested_profile_context(f"threads[{index}]") as path:
            entry = classify_thread_slot(slot)
            if isinstance(entry, EmbeddedProfile):
                logger.debug("Converting embedded subprocess profile at %s", path)
                subprocess_profile = decode_embedded_profile(entry)
                convert_profile(subprocess_profile)
                threads[index] = encode_embedded_profile(subprocess_profile)
            else:
                convert_thread(entry)
