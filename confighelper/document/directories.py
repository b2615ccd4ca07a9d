# ConfigHelper Directory Manager
# CRUD for <directory> entries in the directories section

from typing import Optional
from xml.etree import ElementTree as ET

from confighelper.document.accessor import DocumentAccessor, DocumentError, child_elements, is_xml_safe
from confighelper.document.models import DirectoryEntry
from confighelper.document.normalizer import PathMatcher
from confighelper.document.sections import DIRECTORIES_TAG, ensure_section
from confighelper.logger import Logger

DIRECTORY_TAG = "directory"
EXCLUSION_TAG = "exclusion"
PATH_ATTRIBUTE = "path"
LEGACY_EXCLUSIONS_ATTRIBUTE = "exclusions"


def read_exclusions(element: ET.Element) -> list[str]:
    """
    Collect exclusions from a directory element.

    Child <exclusion path="..."/> nodes are the primary form (element text is
    accepted too); a comma-delimited ``exclusions`` attribute is read as a
    legacy fallback. Blank values are skipped.
    """
    exclusions: list[str] = []
    for child in child_elements(element, EXCLUSION_TAG):
        value = child.get(PATH_ATTRIBUTE)
        if value is None:
            value = child.text or ""
        value = value.strip()
        if value:
            exclusions.append(value)

    legacy = element.get(LEGACY_EXCLUSIONS_ATTRIBUTE)
    if legacy:
        for value in legacy.split(","):
            value = value.strip()
            if value and value not in exclusions:
                exclusions.append(value)

    return exclusions


def write_exclusions(element: ET.Element, exclusions: list[str]) -> None:
    """Replace every exclusion on a directory element with the given set."""
    for child in child_elements(element, EXCLUSION_TAG):
        element.remove(child)
    element.attrib.pop(LEGACY_EXCLUSIONS_ATTRIBUTE, None)

    for value in exclusions:
        if value and value.strip():
            ET.SubElement(element, EXCLUSION_TAG, {PATH_ATTRIBUTE: value.strip()})


class DirectoryManager:
    """Reads and mutates the directories section."""

    def __init__(self, accessor: DocumentAccessor, logger: Logger, matcher: Optional[PathMatcher] = None):
        """
        Initialize manager.

        Args:
            accessor: Document accessor for the backing file.
            logger: Sink for progress and failures.
            matcher: Path comparison policy (exact, case-sensitive by default).
        """
        self.accessor = accessor
        self.logger = logger
        self.matcher = matcher or PathMatcher()

    def get_directories(self) -> list[DirectoryEntry]:
        """
        List directory entries.

        Entries with a missing or blank path are skipped.

        Returns:
            Directory entries in document order; empty on any failure.
        """
        try:
            self.logger.debug(f"Loading directories from config file: {self.accessor.path}")
            tree = self.accessor.load()
        except DocumentError as e:
            self.logger.error("Error retrieving directories from configuration", e)
            return []

        section = tree.getroot().find(DIRECTORIES_TAG)
        if section is None:
            self.logger.warning(f"'{DIRECTORIES_TAG}' section not found in config file")
            return []

        directories: list[DirectoryEntry] = []
        skipped = 0
        for index, element in enumerate(child_elements(section, DIRECTORY_TAG), start=1):
            path = element.get(PATH_ATTRIBUTE)
            if path is None:
                self.logger.warning(f"Directory entry at index {index} skipped: Missing required 'path' attribute")
                skipped += 1
                continue
            if not path.strip():
                self.logger.warning(f"Directory entry at index {index} skipped: Empty 'path' attribute")
                skipped += 1
                continue

            directories.append(DirectoryEntry(path=path, exclusions=read_exclusions(element)))

        self.logger.info(f"Loaded {len(directories)} directories from config (skipped {skipped} invalid entries)")
        return directories

    def add_directory(self, entry: Optional[DirectoryEntry]) -> bool:
        """
        Add a directory entry, or replace the exclusions of an existing one.

        Args:
            entry: Directory to add; an existing entry with the same path has
                its whole exclusion set replaced.

        Returns:
            True if saved, False otherwise.
        """
        if entry is None or not entry.path or not entry.path.strip():
            self.logger.error("Cannot add directory with null or empty path")
            return False

        if not all(is_xml_safe(value) for value in [entry.path, *entry.exclusions]):
            self.logger.error(f"Cannot add directory with characters not allowed in XML: {entry.path!r}")
            return False

        try:
            tree = self.accessor.load()
            section, created = ensure_section(tree.getroot(), DIRECTORIES_TAG)
            if created:
                self.logger.debug(f"Created missing '{DIRECTORIES_TAG}' element")

            existing = self.matcher.find(child_elements(section, DIRECTORY_TAG), entry.path)
            if existing is not None:
                write_exclusions(existing, entry.exclusions)
                self.logger.debug(f"Updated directory entry: {entry.path}")
            else:
                element = ET.SubElement(section, DIRECTORY_TAG, {PATH_ATTRIBUTE: entry.path})
                write_exclusions(element, entry.exclusions)
                self.logger.debug(f"Added new directory entry: {entry.path}")

            self.accessor.save(tree)
            return True
        except DocumentError as e:
            self.logger.error(f"Error adding directory entry: {entry.path}", e)
            return False

    def remove_directory(self, path: Optional[str]) -> bool:
        """
        Remove the directory entry with a matching path.

        Returns:
            True if an entry was removed and saved, False otherwise.
        """
        if not path or not path.strip():
            self.logger.error("Cannot remove directory with null or empty path")
            return False

        try:
            tree = self.accessor.load()
            section = tree.getroot().find(DIRECTORIES_TAG)
            if section is None:
                self.logger.warning(f"'{DIRECTORIES_TAG}' section not found in config file")
                return False

            element = self.matcher.find(child_elements(section, DIRECTORY_TAG), path)
            if element is None:
                self.logger.warning(f"Directory entry not found: {path}")
                return False

            section.remove(element)
            self.accessor.save(tree)
            self.logger.debug(f"Removed directory entry: {path}")
            return True
        except DocumentError as e:
            self.logger.error(f"Error removing directory entry: {path}", e)
            return False
