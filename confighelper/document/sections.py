# ConfigHelper Section Validator
# Once-only repair of the configSections declarations and content sections

import threading
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from confighelper.document.accessor import DocumentAccessor, DocumentError, child_elements
from confighelper.logger import Logger

CONFIG_SECTIONS_TAG = "configSections"
SECTION_TAG = "section"
DIRECTORIES_TAG = "directories"
DRIVE_MAPPINGS_TAG = "driveMappings"
REQUIRED_SECTIONS = (DIRECTORIES_TAG, DRIVE_MAPPINGS_TAG)

# Never dereferenced; the host loader only needs named sections to be declared
PLACEHOLDER_TYPE = "DummyType, DummyAssembly"


@dataclass
class SectionRepair:
    """Changes applied to a document by one validation pass."""

    created_declarations_block: bool = False
    declarations_added: list[str] = field(default_factory=list)
    declarations_fixed: list[str] = field(default_factory=list)
    sections_added: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Check if anything in the document was modified."""
        return bool(
            self.created_declarations_block
            or self.declarations_added
            or self.declarations_fixed
            or self.sections_added
        )


def ensure_section(root: ET.Element, tag: str) -> tuple[ET.Element, bool]:
    """
    Get a top-level section, appending an empty one if absent.

    Returns:
        Tuple of (section element, was_created).
    """
    section = root.find(tag)
    if section is not None:
        return section, False
    section = ET.SubElement(root, tag)
    return section, True


def repair_sections(root: ET.Element) -> SectionRepair:
    """
    Bring a configuration root up to the required skeleton in place.

    Args:
        root: The <configuration> element.

    Returns:
        SectionRepair describing what was changed.
    """
    repair = SectionRepair()

    declarations = root.find(CONFIG_SECTIONS_TAG)
    if declarations is None:
        # Must be the first child of the root for the host loader
        declarations = ET.Element(CONFIG_SECTIONS_TAG)
        root.insert(0, declarations)
        repair.created_declarations_block = True

    for name in REQUIRED_SECTIONS:
        declaration = next(
            (s for s in child_elements(declarations, SECTION_TAG) if s.get("name") == name),
            None,
        )
        if declaration is None:
            ET.SubElement(declarations, SECTION_TAG, {"name": name, "type": PLACEHOLDER_TYPE})
            repair.declarations_added.append(name)
        elif declaration.get("type") != PLACEHOLDER_TYPE:
            declaration.set("type", PLACEHOLDER_TYPE)
            repair.declarations_fixed.append(name)

    for name in REQUIRED_SECTIONS:
        _, created = ensure_section(root, name)
        if created:
            repair.sections_added.append(name)

    return repair


class SectionValidator:
    """
    Guarantees the document skeleton exists, at most once per instance.

    The fast path reads the validated flag without locking; first callers
    serialize on a lock and re-check the flag before doing any I/O.
    A failed pass leaves the flag unset so a later call retries.
    """

    def __init__(self, accessor: DocumentAccessor, logger: Logger):
        """
        Initialize validator.

        Args:
            accessor: Document accessor for the backing file.
            logger: Sink for progress and failures.
        """
        self.accessor = accessor
        self.logger = logger
        self._validated = False
        self._lock = threading.Lock()

    @property
    def validated(self) -> bool:
        """Whether a validation pass has completed successfully."""
        return self._validated

    def reset(self) -> None:
        """Forget a previous successful pass so the next call validates again."""
        with self._lock:
            self._validated = False

    def ensure_sections_exist(self) -> bool:
        """
        Ensure declarations and content sections exist.

        Returns:
            True if the file was modified, False otherwise (including when
            already validated or when the pass failed).
        """
        if self._validated:
            return False

        with self._lock:
            if self._validated:
                return False

            try:
                changed = self._validate()
            except DocumentError as e:
                self.logger.error(f"Error ensuring config sections exist in {e.path or 'configuration file'}", e)
                return False

            self._validated = True
            return changed

    def _validate(self) -> bool:
        tree = self.accessor.load(create_missing=True)
        repair = repair_sections(tree.getroot())

        if repair.created_declarations_block:
            self.logger.debug(f"Created missing '{CONFIG_SECTIONS_TAG}' element")
        for name in repair.declarations_added:
            self.logger.debug(f"Added missing '{name}' section declaration")
        for name in repair.declarations_fixed:
            self.logger.debug(f"Fixed '{name}' section type attribute")
        for name in repair.sections_added:
            self.logger.debug(f"Added missing '{name}' element")

        if not repair.changed:
            return False

        path = self.accessor.save(tree)
        self.logger.info(f"Configuration file updated with required sections: {path}")

        # Later reads must observe the new structure without a restart
        self.accessor.store.refresh()
        return True
