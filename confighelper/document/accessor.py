# ConfigHelper Document Accessor
# Load and save the XML configuration document

import re
from pathlib import Path
from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from confighelper.utils.paths import atomic_write

if TYPE_CHECKING:
    from confighelper.settings.store import SettingsStore

ROOT_TAG = "configuration"
XML_DECLARATION = "<?xml version='1.0' encoding='utf-8'?>\n"

# Characters XML 1.0 cannot carry, plus lone surrogates that cannot be encoded
_ILLEGAL_XML_CHARS_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class DocumentError(Exception):
    """Exception raised when the configuration document cannot be read or written."""

    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        super().__init__(message)


def read_document(path: Path, *, create_missing: bool = False) -> ET.ElementTree:
    """
    Parse a configuration document, keeping comments.

    Args:
        path: Path to the XML file.
        create_missing: Return an empty <configuration/> tree if the file is absent.

    Returns:
        Parsed element tree.

    Raises:
        DocumentError: If the file is missing, unreadable, or not well-formed.
    """
    if not path.exists():
        if create_missing:
            return ET.ElementTree(ET.Element(ROOT_TAG))
        raise DocumentError(f"Configuration file not found: {path}", path)

    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        return ET.parse(path, parser=parser)
    except ET.ParseError as e:
        raise DocumentError(f"Malformed XML in {path}: {e}", path) from e
    except OSError as e:
        raise DocumentError(f"Cannot read {path}: {e}", path) from e


def write_document(path: Path, tree: ET.ElementTree) -> None:
    """
    Serialize a configuration document atomically.

    Raises:
        DocumentError: If the file cannot be written.
    """
    ET.indent(tree, space="  ")
    body = ET.tostring(tree.getroot(), encoding="unicode")
    try:
        atomic_write(path, XML_DECLARATION + body + "\n")
    except OSError as e:
        raise DocumentError(f"Cannot write {path}: {e}", path) from e
    except ValueError as e:
        raise DocumentError(f"Cannot encode {path}: {e}", path) from e


def child_elements(parent: ET.Element, tag: str) -> list[ET.Element]:
    """Direct children with the given tag, in document order."""
    return [child for child in parent if child.tag == tag]


def is_xml_safe(value: str) -> bool:
    """Check that a value can be stored in an XML 1.0 document."""
    return _ILLEGAL_XML_CHARS_RE.search(value) is None


class DocumentAccessor:
    """
    Opens and persists the document behind a settings store.

    The document is loaded fresh for every operation; nothing is cached
    between calls.
    """

    def __init__(self, store: "SettingsStore"):
        """
        Initialize accessor.

        Args:
            store: Settings store whose location identifies the document.
        """
        self.store = store

    @property
    def path(self) -> Path:
        """Resolve the document path from the active settings store."""
        try:
            return Path(self.store.load())
        except OSError as e:
            raise DocumentError(f"Cannot resolve configuration file location: {e}") from e

    def load(self, *, create_missing: bool = False) -> ET.ElementTree:
        """Load the document as an element tree."""
        return read_document(self.path, create_missing=create_missing)

    def save(self, tree: ET.ElementTree) -> Path:
        """Persist the element tree and return the path written."""
        path = self.path
        write_document(path, tree)
        return path
