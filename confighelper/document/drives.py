# ConfigHelper Drive Mapping Manager
# CRUD for <mapping> entries in the driveMappings section

from typing import Optional
from xml.etree import ElementTree as ET

from confighelper.document.accessor import DocumentAccessor, DocumentError, child_elements, is_xml_safe
from confighelper.document.models import DriveMapping
from confighelper.document.normalizer import (
    DriveLetterMatcher,
    is_canonical_drive_letter,
    normalize_drive_letter,
)
from confighelper.document.sections import DRIVE_MAPPINGS_TAG, ensure_section
from confighelper.logger import Logger

MAPPING_TAG = "mapping"
DRIVE_LETTER_ATTRIBUTE = "driveLetter"
UNC_PATH_ATTRIBUTE = "uncPath"
UNC_PREFIX = "\\\\"


class DriveMappingManager:
    """
    Reads and mutates the driveMappings section.

    Drive letters are compared through the normalizer, so "v", "V", "v:"
    and "V:" address the same mapping. In strict mode letters and UNC
    paths are format-checked before any I/O and letters read back are
    returned in canonical form.
    """

    def __init__(
        self,
        accessor: DocumentAccessor,
        logger: Logger,
        *,
        strict: bool = True,
        matcher: Optional[DriveLetterMatcher] = None,
    ):
        self.accessor = accessor
        self.logger = logger
        self.strict = strict
        self.matcher = matcher or DriveLetterMatcher()

    def get_drive_mappings(self) -> list[DriveMapping]:
        """
        List drive mappings, skipping entries with a missing or blank letter or UNC path.

        Returns:
            Mappings in document order; empty on any failure.
        """
        try:
            self.logger.debug(f"Loading drive mappings from config file: {self.accessor.path}")
            tree = self.accessor.load()
        except DocumentError as e:
            self.logger.error("Error retrieving drive mappings from configuration", e)
            return []

        section = tree.getroot().find(DRIVE_MAPPINGS_TAG)
        if section is None:
            self.logger.warning(f"'{DRIVE_MAPPINGS_TAG}' section not found in config file")
            return []

        mappings: list[DriveMapping] = []
        skipped = 0
        for index, element in enumerate(child_elements(section, MAPPING_TAG), start=1):
            drive_letter = element.get(DRIVE_LETTER_ATTRIBUTE)
            unc_path = element.get(UNC_PATH_ATTRIBUTE)

            problem = None
            if drive_letter is None:
                problem = f"Missing required '{DRIVE_LETTER_ATTRIBUTE}' attribute"
            elif unc_path is None:
                problem = f"Missing required '{UNC_PATH_ATTRIBUTE}' attribute"
            elif not drive_letter.strip():
                problem = f"Empty '{DRIVE_LETTER_ATTRIBUTE}' attribute"
            elif not unc_path.strip():
                problem = f"Empty '{UNC_PATH_ATTRIBUTE}' attribute"
            if problem:
                self.logger.warning(f"Drive mapping at index {index} skipped: {problem}")
                skipped += 1
                continue

            if self.strict:
                drive_letter = normalize_drive_letter(drive_letter, include_colon=True)
            if not is_canonical_drive_letter(drive_letter):
                self.logger.warning(
                    f"Drive mapping at index {index} has potentially invalid drive letter format: '{drive_letter}'"
                )
            if not unc_path.startswith(UNC_PREFIX):
                self.logger.warning(
                    f"Drive mapping at index {index} has potentially invalid UNC path format: '{unc_path}'"
                )

            mappings.append(DriveMapping(drive_letter=drive_letter, unc_path=unc_path))

        self.logger.info(f"Loaded {len(mappings)} drive mappings from config (skipped {skipped} invalid mappings)")
        return mappings

    def validate_mapping(self, mapping: Optional[DriveMapping]) -> Optional[str]:
        """
        Check a mapping before it is written.

        Returns:
            The canonical drive letter, or None if the mapping is rejected.
        """
        if mapping is None or not (mapping.drive_letter or "").strip() or not (mapping.unc_path or "").strip():
            self.logger.error("Cannot add drive mapping with null or empty values")
            return None

        if not is_xml_safe(mapping.drive_letter) or not is_xml_safe(mapping.unc_path):
            self.logger.error(
                "Cannot add drive mapping with characters not allowed in XML: "
                f"{mapping.drive_letter!r} -> {mapping.unc_path!r}"
            )
            return None

        canonical = normalize_drive_letter(mapping.drive_letter, include_colon=True)
        if self.strict:
            if not is_canonical_drive_letter(canonical):
                self.logger.error(
                    f"Invalid drive letter format: '{mapping.drive_letter}'. "
                    "Format must be a single letter followed by a colon (e.g., 'X:')"
                )
                return None
            if not mapping.unc_path.startswith(UNC_PREFIX):
                self.logger.error(
                    f"Invalid UNC path format: '{mapping.unc_path}'. "
                    "UNC path must start with double backslash (e.g., '\\\\server\\share')"
                )
                return None

        return canonical

    def add_drive_mapping(self, mapping: Optional[DriveMapping]) -> bool:
        """
        Add a drive mapping, or update the UNC path of the mapping for the same letter.

        Returns:
            True if saved, False otherwise.
        """
        canonical = self.validate_mapping(mapping)
        if canonical is None:
            return False

        try:
            tree = self.accessor.load()
            section, created = ensure_section(tree.getroot(), DRIVE_MAPPINGS_TAG)
            if created:
                self.logger.debug(f"Created missing '{DRIVE_MAPPINGS_TAG}' element")

            existing = self.matcher.find(child_elements(section, MAPPING_TAG), canonical)
            if existing is not None:
                existing.set(DRIVE_LETTER_ATTRIBUTE, canonical)
                existing.set(UNC_PATH_ATTRIBUTE, mapping.unc_path)
                self.logger.debug(f"Updated drive mapping: {canonical} -> {mapping.unc_path}")
            else:
                ET.SubElement(
                    section,
                    MAPPING_TAG,
                    {DRIVE_LETTER_ATTRIBUTE: canonical, UNC_PATH_ATTRIBUTE: mapping.unc_path},
                )
                self.logger.debug(f"Added new drive mapping: {canonical} -> {mapping.unc_path}")

            self.accessor.save(tree)
            return True
        except DocumentError as e:
            self.logger.error(f"Error adding drive mapping: {canonical} -> {mapping.unc_path}", e)
            return False

    def remove_drive_mapping(self, drive_letter: Optional[str]) -> bool:
        """
        Remove the mapping for a drive letter given in any accepted spelling.

        Returns:
            True if a mapping was removed and saved, False otherwise.
        """
        if not drive_letter or not drive_letter.strip():
            self.logger.error("Cannot remove drive mapping with null or empty drive letter")
            return False

        canonical = normalize_drive_letter(drive_letter, include_colon=True)

        try:
            tree = self.accessor.load()
            section = tree.getroot().find(DRIVE_MAPPINGS_TAG)
            if section is None:
                self.logger.warning(f"'{DRIVE_MAPPINGS_TAG}' section not found in config file")
                return False

            element = self.matcher.find(child_elements(section, MAPPING_TAG), canonical)
            if element is None:
                self.logger.warning(f"Drive mapping not found: {drive_letter}")
                return False

            section.remove(element)
            self.accessor.save(tree)
            self.logger.debug(f"Removed drive mapping: {canonical}")
            return True
        except DocumentError as e:
            self.logger.error(f"Error removing drive mapping: {drive_letter}", e)
            return False

    def find_drive_mapping(self, drive_letter: str) -> Optional[DriveMapping]:
        """Look up a single mapping by drive letter in any accepted spelling."""
        if not drive_letter or not drive_letter.strip():
            return None
        for mapping in self.get_drive_mappings():
            if self.matcher.same(mapping.drive_letter, drive_letter):
                return mapping
        return None
