# ConfigHelper Document Module
# XML document access, skeleton validation, and structured collections

from confighelper.document.accessor import DocumentAccessor, DocumentError, read_document, write_document
from confighelper.document.directories import DirectoryManager
from confighelper.document.drives import DriveMappingManager
from confighelper.document.models import DirectoryEntry, DriveMapping
from confighelper.document.normalizer import (
    DriveLetterMatcher,
    PathMatcher,
    is_canonical_drive_letter,
    normalize_drive_letter,
)
from confighelper.document.sections import (
    DIRECTORIES_TAG,
    DRIVE_MAPPINGS_TAG,
    PLACEHOLDER_TYPE,
    SectionRepair,
    SectionValidator,
    repair_sections,
)

__all__ = [
    # Models
    "DirectoryEntry",
    "DriveMapping",
    # Accessor
    "DocumentAccessor",
    "DocumentError",
    "read_document",
    "write_document",
    # Normalizer
    "normalize_drive_letter",
    "is_canonical_drive_letter",
    "DriveLetterMatcher",
    "PathMatcher",
    # Sections
    "SectionValidator",
    "SectionRepair",
    "repair_sections",
    "DIRECTORIES_TAG",
    "DRIVE_MAPPINGS_TAG",
    "PLACEHOLDER_TYPE",
    # Managers
    "DirectoryManager",
    "DriveMappingManager",
]
