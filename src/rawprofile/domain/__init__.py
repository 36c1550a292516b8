"""Domain models and enums for raw profiles.

Usage:
    from rawprofile.domain import LibraryRecord, ProcessType
    from rawprofile.domain import EmbeddedProfile, ThreadRecord, ThreadSlot
"""

from .enums import ProcessType
from .models import (
    BreakpadLibraryDescriptor,
    EmbeddedProfile,
    LegacyLibraryDescriptor,
    LibraryRecord,
    PdbLibraryDescriptor,
    ThreadRecord,
    ThreadSlot,
)

__all__ = [
    # Enums
    "ProcessType",
    # Models
    "BreakpadLibraryDescriptor",
    "EmbeddedProfile",
    "LegacyLibraryDescriptor",
    "LibraryRecord",
    "PdbLibraryDescriptor",
    "ThreadRecord",
    "ThreadSlot",
]
