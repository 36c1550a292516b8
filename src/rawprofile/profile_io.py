"""Reading and writing raw profile files.

The Gecko profiler saves profiles as JSON, usually gzip-compressed
(``profile.json.gz``). Compression is detected from the file contents
when reading and from the ``.gz`` suffix when writing.
"""

from __future__ import annotations

import gzip
import json
import logging
import zlib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"


class ProfileReadError(Exception):
    """Raised when a profile file cannot be read or is not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read profile {path}: {reason}")


def load_profile(path: Path) -> dict[str, Any]:
    """Load a raw profile from a ``.json`` or gzip-compressed file.

    Args:
        path: Path to the profile file.

    Returns:
        The decoded profile document.

    Raises:
        FileNotFoundError: If the file does not exist.
        ProfileReadError: If the file is not a valid JSON object.
    """
    data = path.read_bytes()
    if data.startswith(_GZIP_MAGIC):
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as e:
            raise ProfileReadError(path, f"corrupt gzip data: {e}") from e
        logger.debug("Decompressed %s (%d bytes)", path, len(data))

    try:
        profile = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProfileReadError(path, f"invalid JSON: {e}") from e

    if not isinstance(profile, dict):
        raise ProfileReadError(path, "top-level value is not a JSON object")
    return profile


def dump_profile(
    profile: dict[str, Any], *, indent: int | None = None, sort_keys: bool = False
) -> str:
    """Serialize a profile to JSON text.

    Without ``indent`` the compact form the profiler writes is used.
    """
    separators = (",", ":") if indent is None else None
    return json.dumps(
        profile,
        indent=indent,
        sort_keys=sort_keys,
        separators=separators,
        ensure_ascii=False,
    )


def save_profile(
    profile: dict[str, Any],
    path: Path,
    *,
    indent: int | None = None,
    sort_keys: bool = False,
) -> None:
    """Write a profile to ``path``, gzip-compressed if it ends in ``.gz``."""
    text = dump_profile(profile, indent=indent, sort_keys=sort_keys)
    data = text.encode("utf-8")
    if path.suffix == ".gz":
        data = gzip.compress(data)
    path.write_bytes(data)
    logger.debug("Wrote profile to %s (%d bytes)", path, len(data))
