# ConfigHelper Settings Store
# Flat key/value settings kept in the appSettings block of the document

from pathlib import Path
from typing import Optional, Protocol
from xml.etree import ElementTree as ET

from confighelper.document.accessor import DocumentError, child_elements, is_xml_safe, read_document, write_document
from confighelper.document.sections import CONFIG_SECTIONS_TAG
from confighelper.utils.paths import expand_path

APP_SETTINGS_TAG = "appSettings"
ADD_TAG = "add"


class SettingsStore(Protocol):
    """Persistent flat mapping of string keys to string values."""

    def load(self) -> Path:
        """Return the location of the backing document."""
        ...

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def save(self) -> None: ...

    def refresh(self) -> None:
        """Drop any cached view so the next read observes the file."""
        ...


class XmlSettingsStore:
    """
    Settings store backed by ``<appSettings><add key="" value=""/></appSettings>``.

    Reads go through a cached view that is filled on first access and
    dropped by :meth:`refresh`. Writes are staged by :meth:`set` and
    merged into a freshly loaded document by :meth:`save`, leaving every
    other section untouched.
    """

    def __init__(self, path: str | Path):
        """
        Initialize store.

        Args:
            path: Path to the XML configuration file (supports ~ and $VARS).
        """
        self.path = expand_path(path)
        self._values: Optional[dict[str, str]] = None
        self._pending: dict[str, str] = {}

    def load(self) -> Path:
        return self.path

    def get(self, key: str) -> Optional[str]:
        """
        Get a value by key.

        Raises:
            DocumentError: If the document cannot be read.
        """
        pending = self._pending
        if key in pending:
            return pending[key]
        return self._view().get(key)

    def set(self, key: str, value: str) -> None:
        """Stage an insert or overwrite; persisted by save()."""
        self._pending[key] = value

    def save(self) -> None:
        """
        Write staged values into the document.

        Raises:
            DocumentError: If the document cannot be read or written.
        """
        if not self._pending:
            return

        # A failed save discards the staged values
        pending, self._pending = self._pending, {}

        for key, value in pending.items():
            if not is_xml_safe(key) or not is_xml_safe(value):
                raise DocumentError(f"Setting {key!r} contains characters not allowed in XML", self.path)

        tree = read_document(self.path, create_missing=True)
        section = self._ensure_app_settings(tree.getroot())
        existing = {element.get("key"): element for element in child_elements(section, ADD_TAG)}

        for key, value in pending.items():
            element = existing.get(key)
            if element is not None:
                element.set("value", value)
            else:
                ET.SubElement(section, ADD_TAG, {"key": key, "value": value})

        write_document(self.path, tree)

        values = self._values
        if values is not None:
            values.update(pending)

    def refresh(self) -> None:
        self._values = None

    def as_dict(self) -> dict[str, str]:
        """Snapshot of all settings, including staged ones."""
        return {**self._view(), **self._pending}

    def _view(self) -> dict[str, str]:
        # Local copy so a concurrent refresh() cannot hand back None
        values = self._values
        if values is None:
            values = self._values = self._read_values()
        return values

    def _read_values(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        section = read_document(self.path).getroot().find(APP_SETTINGS_TAG)
        if section is None:
            return {}

        values: dict[str, str] = {}
        for element in child_elements(section, ADD_TAG):
            key = element.get("key")
            if key is not None:
                values[key] = element.get("value", "")
        return values

    @staticmethod
    def _ensure_app_settings(root: ET.Element) -> ET.Element:
        section = root.find(APP_SETTINGS_TAG)
        if section is not None:
            return section

        section = ET.Element(APP_SETTINGS_TAG)
        # Keep configSections first when it is present
        declarations = root.find(CONFIG_SECTIONS_TAG)
        index = list(root).index(declarations) + 1 if declarations is not None else 0
        root.insert(index, section)
        return section
