"""Shared test fixtures for rawprofile."""

import copy
import json
import logging
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from rawprofile.logging import ProfileContextFilter

# Library descriptors as written by a version 3 Linux profile, in load order
LINUX_LIBS: list[dict[str, Any]] = [
    {
        "start": 0x7F5A10000000,
        "end": 0x7F5A14000000,
        "offset": 0,
        "name": "/usr/lib/firefox/libxul.so",
        "breakpadId": "9A2F0E5C7B3D41A08C6E5F4D3B2A19080",
    },
    {
        "start": 0x55D8A0000000,
        "end": 0x55D8A0040000,
        "offset": 0,
        "name": "/usr/lib/firefox/firefox",
        "breakpadId": "1B2C3D4E5F60718293A4B5C6D7E8F9010",
    },
    {
        "start": 0x7F5A20000000,
        "end": 0x7F5A20200000,
        "offset": 0,
        "name": "/lib/x86_64-linux-gnu/libc.so.6",
        "breakpadId": "C0FFEE00C0FFEE00C0FFEE00C0FFEE000",
    },
]

# A Windows descriptor carrying raw PDB information
WINDOWS_LIB: dict[str, Any] = {
    "start": 0x10000000,
    "end": 0x12000000,
    "offset": 0,
    "name": "C:\\Program Files\\Mozilla Firefox\\xul.dll",
    "pdbName": "xul.pdb",
    "pdbSignature": "{ABCDEF12-3456-7890-ABCD-EF1234567890}",
    "pdbAge": "1",
}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the user's config file and RAWPROFILE_* variables out of tests."""
    for var in (
        "RAWPROFILE_LOG_LEVEL",
        "RAWPROFILE_LOG_FILE",
        "RAWPROFILE_LOG_FORMAT",
        "RAWPROFILE_LOG_INCLUDE_STDERR",
        "RAWPROFILE_OUTPUT_INDENT",
        "RAWPROFILE_OUTPUT_SORT_KEYS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("RAWPROFILE_CONFIG_PATH", str(tmp_path / "no-config.toml"))


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo configure_logging() changes to the root logger after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if any(isinstance(f, ProfileContextFilter) for f in handler.filters):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def linux_libs() -> list[dict[str, Any]]:
    """Return fresh copies of the Linux library descriptors."""
    return copy.deepcopy(LINUX_LIBS)


@pytest.fixture
def windows_lib() -> dict[str, Any]:
    """Return a fresh copy of the Windows PDB library descriptor."""
    return copy.deepcopy(WINDOWS_LIB)


def build_legacy_profile(
    libs: list[Any] | None = None,
    threads: list[Any] | None = None,
    *,
    version: int | None = 3,
    abi: str | None = "x86_64-gcc3",
) -> dict[str, Any]:
    """Build a raw profile in the pre-version-4 layout.

    Args:
        libs: Library descriptors, stored JSON-encoded as ``libs``.
        threads: Entries of ``threads``; defaults to one main thread.
        version: Value of ``meta.version``; None omits the field.
        abi: Value of ``meta.abi``; None omits the field.
    """
    meta: dict[str, Any] = {"interval": 1, "product": "Firefox"}
    if version is not None:
        meta["version"] = version
    if abi is not None:
        meta["abi"] = abi
    return {
        "meta": meta,
        "libs": json.dumps(copy.deepcopy(LINUX_LIBS) if libs is None else libs),
        "threads": (
            [{"name": "GeckoMain", "processType": "default", "samples": []}]
            if threads is None
            else threads
        ),
    }


@pytest.fixture
def make_legacy_profile() -> Callable[..., dict[str, Any]]:
    """Return the legacy profile builder."""
    return build_legacy_profile


@pytest.fixture
def write_profile(temp_dir: Path) -> Callable[[dict[str, Any], str], Path]:
    """Return a helper writing a profile as JSON into the temp directory."""

    def _write(profile: dict[str, Any], name: str = "profile.json") -> Path:
        path = temp_dir / name
        path.write_text(json.dumps(profile), encoding="utf-8")
        return path

    return _write
