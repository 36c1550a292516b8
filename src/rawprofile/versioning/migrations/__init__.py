"""Raw profile format migrations.

Each migration converts a profile from version N-1 to version N, in place.
Migrations are keyed by the version they produce.

Modules:
- v00_to_v03: Versions 0-3 (unsupported, always raise)
- v03_to_v04: libs normalization and thread processType backfill (v3→v4)
"""

from collections.abc import Callable
from typing import Any

from .v00_to_v03 import (
    migrate_v0_to_v1,
    migrate_v1_to_v2,
    migrate_v2_to_v3,
)
from .v03_to_v04 import migrate_v3_to_v4

Upgrader = Callable[[dict[str, Any]], None]

# UPGRADERS[n] converts from version n - 1 to version n. A version bump that
# needed no data changes has no entry.
UPGRADERS: dict[int, Upgrader] = {
    1: migrate_v0_to_v1,
    2: migrate_v1_to_v2,
    3: migrate_v2_to_v3,
    4: migrate_v3_to_v4,
}


def get_upgrader(target_version: int) -> Upgrader | None:
    """Return the migration producing ``target_version``, if one is needed."""
    return UPGRADERS.get(target_version)


__all__ = [
    "UPGRADERS",
    "Upgrader",
    "get_upgrader",
    # v0 to v3
    "migrate_v0_to_v1",
    "migrate_v1_to_v2",
    "migrate_v2_to_v3",
    # v3 to v4
    "migrate_v3_to_v4",
]
