"""Shared library descriptor normalization.

Before version 4 the ``libs`` field held library descriptors in one of two
shapes. Descriptors from Linux and macOS carried a ready-made ``breakpadId``.
Windows descriptors carried the raw PDB name, signature (a GUID) and age, and
the breakpad id has to be derived from them. Version 4 stores one uniform
record per library.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from rawprofile.domain.models import (
    BreakpadLibraryDescriptor,
    LegacyLibraryDescriptor,
    LibraryRecord,
    PdbLibraryDescriptor,
)

from .exceptions import MalformedDescriptorError

logger = logging.getLogger(__name__)

_Descriptor = TypeVar("_Descriptor", bound=BaseModel)

# abi tokens whose architecture name differs from the abi prefix
_ARCH_BY_ABI: dict[str, str] = {
    "x86_64-gcc3": "x86_64",
}

_PDB_SUFFIX = ".pdb"

# Raw PDB fields; version 4 records carry the derived breakpadId instead
_PDB_FIELDS = frozenset({"pdbName", "pdbSignature", "pdbAge"})


def arch_from_abi(abi: str | None) -> str | None:
    """Derive the architecture tag for libraries from ``meta.abi``.

    Args:
        abi: The profile's ``meta.abi`` value, e.g. ``x86_64-gcc3``.

    Returns:
        The normalized architecture tag. Unknown tokens pass through.
    """
    if abi is None:
        return None
    return _ARCH_BY_ABI.get(abi, abi)


def pdb_breakpad_id(signature: str, age: str | int) -> str:
    """Build a breakpad id from a PDB GUID signature and age.

    The GUID is stripped of braces and hyphens and uppercased; the age is
    appended as text, not added.

    Example:
        >>> pdb_breakpad_id("{ABCDEF12-3456-7890-ABCD-EF1234567890}", "1")
        'ABCDEF1234567890ABCDEF12345678901'
    """
    stripped = signature.replace("{", "").replace("}", "").replace("-", "")
    return stripped.upper() + str(age)


def _validate(
    model: type[_Descriptor],
    descriptor: dict[str, Any],
    index: int,
    path: str | None,
) -> _Descriptor:
    try:
        return model.model_validate(descriptor)
    except ValidationError as e:
        missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise MalformedDescriptorError(index, missing, path=path) from e


def normalize_library(
    descriptor: Any,
    abi: str | None,
    *,
    index: int = 0,
    path: str | None = None,
) -> LibraryRecord:
    """Convert one legacy library descriptor into a LibraryRecord.

    The descriptor is not modified. Sorting the resulting records is the
    caller's job.

    Args:
        descriptor: A decoded legacy descriptor (a dict).
        abi: The owning profile's ``meta.abi``.
        index: Position of the descriptor, used in error messages.
        path: Location of the owning profile, used in error messages.

    Returns:
        The normalized library record.

    Raises:
        MalformedDescriptorError: If the descriptor is not an object or lacks
            the fields its variant requires.
    """
    if not isinstance(descriptor, dict):
        raise MalformedDescriptorError(index, ["<object>"], path=path)

    lib: LegacyLibraryDescriptor
    if "breakpadId" in descriptor:
        lib = _validate(BreakpadLibraryDescriptor, descriptor, index, path)
        debug_name = lib.name[lib.name.rfind("/") + 1 :]
        breakpad_id = lib.breakpad_id
    else:
        lib = _validate(PdbLibraryDescriptor, descriptor, index, path)
        debug_name = lib.pdb_name
        breakpad_id = pdb_breakpad_id(lib.pdb_signature, lib.pdb_age)

    if debug_name.endswith(_PDB_SUFFIX):
        name = debug_name[: -len(_PDB_SUFFIX)]
    else:
        name = debug_name

    return LibraryRecord(
        debug_name=debug_name,
        breakpad_id=breakpad_id,
        path=lib.name,
        name=name,
        arch=arch_from_abi(abi),
        start=lib.start,
        extra={
            key: value
            for key, value in (lib.model_extra or {}).items()
            if key not in _PDB_FIELDS
        },
    )


def normalize_libraries(
    descriptors: list[Any], abi: str | None, *, path: str | None = None
) -> list[dict[str, Any]]:
    """Normalize a legacy descriptor list into the version 4 ``libs`` list.

    Args:
        descriptors: Decoded legacy descriptors.
        abi: The owning profile's ``meta.abi``.
        path: Location of the owning profile, used in error messages.

    Returns:
        Library dicts sorted by ascending start address. The sort is stable,
        so libraries sharing a start address keep their relative order.
    """
    records = [
        normalize_library(descriptor, abi, index=index, path=path)
        for index, descriptor in enumerate(descriptors)
    ]
    records.sort(key=lambda record: record.start)
    logger.debug(
        "Normalized %d libraries (arch=%s)", len(records), arch_from_abi(abi)
    )
    return [record.to_dict() for record in records]
