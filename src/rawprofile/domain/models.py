"""Domain models for raw profiles.

Raw profiles are JSON documents and are upgraded in place as plain dicts.
The models here give names and validation to the parts of the document the
upgrade has to understand: legacy library descriptors, normalized library
records and the two kinds of entries found in a ``threads`` list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class BreakpadLibraryDescriptor(BaseModel):
    """Legacy library descriptor that already carries a breakpad id.

    Produced by platforms where the module name is a filesystem path and
    the debug identifier was computed by the profiler itself.
    """

    model_config = ConfigDict(extra="allow", strict=True)

    name: str
    breakpad_id: str = Field(alias="breakpadId")
    start: int | float


class PdbLibraryDescriptor(BaseModel):
    """Legacy Windows library descriptor carrying raw PDB information."""

    model_config = ConfigDict(extra="allow", strict=True)

    name: str
    pdb_name: str = Field(alias="pdbName")
    pdb_signature: str = Field(alias="pdbSignature")
    # Gecko emitted the age both as a number and as a string
    pdb_age: str | int = Field(alias="pdbAge")
    start: int | float


LegacyLibraryDescriptor = Union[BreakpadLibraryDescriptor, PdbLibraryDescriptor]


@dataclass
class LibraryRecord:
    """A shared library entry in the version 4 ``libs`` list.

    Attributes:
        debug_name: Name of the debug file (``xul.pdb``, ``libxul.so``).
        breakpad_id: Normalized debug identifier used for symbolication.
        path: Full module path as reported by the profiler.
        name: Display name, ``debug_name`` without a ``.pdb`` suffix.
        arch: Normalized architecture tag, or None if the profile has no abi.
            A None arch is left out of the JSON shape.
        start: Load address of the library.
        extra: Any other descriptor fields (``end``, ``offset``, ...),
            carried through unchanged.
    """

    debug_name: str
    breakpad_id: str
    path: str
    name: str
    arch: str | None
    start: int | float
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the record in its JSON (camelCase) shape."""
        data = dict(self.extra)
        data.update(
            {
                "start": self.start,
                "debugName": self.debug_name,
                "breakpadId": self.breakpad_id,
                "path": self.path,
                "name": self.name,
            }
        )
        if self.arch is not None:
            data["arch"] = self.arch
        else:
            data.pop("arch", None)
        return data


@dataclass(frozen=True)
class ThreadRecord:
    """A structured entry in a profile's ``threads`` list.

    Wraps the thread dict without copying it, so changes made through
    ``data`` land in the owning profile.
    """

    data: dict[str, Any]

    @property
    def name(self) -> str | None:
        return self.data.get("name")

    @property
    def has_process_type(self) -> bool:
        return "processType" in self.data


@dataclass(frozen=True)
class EmbeddedProfile:
    """A ``threads`` entry holding a whole subprocess profile as JSON text."""

    raw: str


ThreadSlot = Union[ThreadRecord, EmbeddedProfile]
