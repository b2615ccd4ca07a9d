# Tests for confighelper.document.directories
# Directory entry CRUD and exclusion handling

from xml.etree import ElementTree as ET

import pytest

from confighelper.document.accessor import DocumentAccessor
from confighelper.document.directories import DirectoryManager, read_exclusions, write_exclusions
from confighelper.document.models import DirectoryEntry
from confighelper.document.normalizer import PathMatcher
from confighelper.settings.store import XmlSettingsStore


def _manager(path, logger, **kwargs) -> DirectoryManager:
    return DirectoryManager(DocumentAccessor(XmlSettingsStore(path)), logger, **kwargs)


def _write_directories(path, body: str) -> None:
    path.write_text(f"<configuration><directories>{body}</directories></configuration>", encoding="utf-8")


@pytest.fixture
def manager(document, logger) -> DirectoryManager:
    return _manager(document, logger)


class TestDirectoryEntry:
    """Tests for the DirectoryEntry model."""

    def test_comma_string_exclusions(self):
        entry = DirectoryEntry(path="C:\\Data", exclusions="tmp, cache,,")
        assert entry.exclusions == ["tmp", "cache"]

    def test_blank_exclusions_dropped(self):
        assert DirectoryEntry(path="C:\\Data", exclusions=["a", " ", "", " b "]).exclusions == ["a", "b"]

    def test_str(self):
        assert str(DirectoryEntry(path="C:\\Data")) == "C:\\Data"
        assert str(DirectoryEntry(path="C:\\Data", exclusions=["a", "b"])) == "C:\\Data (Exclusions: a, b)"


class TestExclusionElements:
    """Tests for read_exclusions() and write_exclusions()."""

    def test_read_child_nodes(self):
        element = ET.fromstring('<directory path="C:\\Data"><exclusion path="a"/><exclusion>b</exclusion></directory>')
        assert read_exclusions(element) == ["a", "b"]

    def test_read_legacy_attribute(self):
        element = ET.fromstring('<directory path="D:\\Old" exclusions="x, y,,z"/>')
        assert read_exclusions(element) == ["x", "y", "z"]

    def test_legacy_attribute_does_not_duplicate(self):
        element = ET.fromstring('<directory path="D:\\Old" exclusions="a,b"><exclusion path="a"/></directory>')
        assert read_exclusions(element) == ["a", "b"]

    def test_write_replaces_everything(self):
        element = ET.fromstring('<directory path="D:\\Old" exclusions="x"><exclusion path="a"/></directory>')
        write_exclusions(element, ["b", " "])

        assert element.get("exclusions") is None
        assert [child.get("path") for child in element] == ["b"]


class TestGetDirectories:
    """Tests for DirectoryManager.get_directories()."""

    def test_empty(self, manager, logger):
        assert manager.get_directories() == []
        assert logger.has("info", "Loaded 0 directories")

    def test_skips_invalid_entries(self, tmp_path, logger):
        path = tmp_path / "app.config"
        _write_directories(path, '<directory/><directory path="  "/><directory path="C:\\Ok"/>')

        entries = _manager(path, logger).get_directories()

        assert entries == [DirectoryEntry(path="C:\\Ok")]
        assert logger.has("warning", "index 1 skipped: Missing required 'path' attribute")
        assert logger.has("warning", "index 2 skipped: Empty 'path' attribute")
        assert logger.has("info", "skipped 2 invalid entries")

    def test_ignores_comments_and_other_elements(self, tmp_path, logger):
        path = tmp_path / "app.config"
        _write_directories(path, '<!-- note --><other/><directory path="C:\\Ok"/>')
        assert [entry.path for entry in _manager(path, logger).get_directories()] == ["C:\\Ok"]

    def test_missing_section(self, tmp_path, logger):
        path = tmp_path / "app.config"
        path.write_text("<configuration/>", encoding="utf-8")

        assert _manager(path, logger).get_directories() == []
        assert logger.has("warning", "'directories' section not found")

    def test_malformed_document(self, tmp_path, logger):
        path = tmp_path / "app.config"
        path.write_text("<configuration>", encoding="utf-8")

        assert _manager(path, logger).get_directories() == []
        assert logger.has("error", "Error retrieving directories")

    def test_missing_file(self, tmp_path, logger):
        assert _manager(tmp_path / "absent.config", logger).get_directories() == []
        assert logger.messages("error")


class TestAddDirectory:
    """Tests for DirectoryManager.add_directory()."""

    def test_add_new(self, manager, document):
        assert manager.add_directory(DirectoryEntry(path="C:\\Data", exclusions=["tmp", "cache"]))

        element = ET.parse(document).getroot().find("directories/directory")
        assert element.get("path") == "C:\\Data"
        assert [child.get("path") for child in element.findall("exclusion")] == ["tmp", "cache"]
        assert manager.get_directories() == [DirectoryEntry(path="C:\\Data", exclusions=["tmp", "cache"])]

    def test_update_replaces_exclusions(self, manager):
        manager.add_directory(DirectoryEntry(path="C:\\Data", exclusions=["a"]))
        manager.add_directory(DirectoryEntry(path="C:\\Data", exclusions=["b"]))

        assert manager.get_directories() == [DirectoryEntry(path="C:\\Data", exclusions=["b"])]

    def test_update_to_no_exclusions(self, manager):
        manager.add_directory(DirectoryEntry(path="C:\\Data", exclusions=["a"]))
        manager.add_directory(DirectoryEntry(path="C:\\Data"))

        assert manager.get_directories()[0].exclusions == []

    def test_preserves_order(self, manager):
        for path in ["C:\\One", "C:\\Two", "C:\\Three"]:
            manager.add_directory(DirectoryEntry(path=path))
        manager.add_directory(DirectoryEntry(path="C:\\Two", exclusions=["x"]))

        assert [entry.path for entry in manager.get_directories()] == ["C:\\One", "C:\\Two", "C:\\Three"]

    def test_update_legacy_entry(self, tmp_path, logger):
        path = tmp_path / "app.config"
        _write_directories(path, '<directory path="D:\\Old" exclusions="x,y"/>')
        manager = _manager(path, logger)

        assert manager.add_directory(DirectoryEntry(path="D:\\Old", exclusions=["z"]))

        element = ET.parse(path).getroot().find("directories/directory")
        assert element.get("exclusions") is None
        assert manager.get_directories() == [DirectoryEntry(path="D:\\Old", exclusions=["z"])]

    @pytest.mark.parametrize("path", ["", "   "])
    def test_blank_path_rejected(self, manager, document, logger, path):
        before = document.read_bytes()

        assert manager.add_directory(DirectoryEntry(path=path, exclusions=["a"])) is False
        assert document.read_bytes() == before
        assert logger.has("error", "Cannot add directory with null or empty path")

    def test_none_rejected(self, manager, logger):
        assert manager.add_directory(None) is False
        assert logger.messages("error")

    def test_creates_missing_section(self, tmp_path, logger):
        path = tmp_path / "app.config"
        path.write_text("<configuration/>", encoding="utf-8")

        assert _manager(path, logger).add_directory(DirectoryEntry(path="C:\\Data"))
        assert ET.parse(path).getroot().find("directories/directory").get("path") == "C:\\Data"
        assert logger.has("debug", "Created missing 'directories' element")

    def test_malformed_document(self, tmp_path, logger):
        path = tmp_path / "app.config"
        path.write_text("<configuration>", encoding="utf-8")

        assert _manager(path, logger).add_directory(DirectoryEntry(path="C:\\Data")) is False
        assert logger.has("error", "Error adding directory entry: C:\\Data")


class TestRemoveDirectory:
    """Tests for DirectoryManager.remove_directory()."""

    def test_remove_existing(self, manager):
        manager.add_directory(DirectoryEntry(path="C:\\Data"))
        manager.add_directory(DirectoryEntry(path="C:\\Keep"))

        assert manager.remove_directory("C:\\Data")
        assert [entry.path for entry in manager.get_directories()] == ["C:\\Keep"]

    def test_remove_missing(self, manager, document, logger):
        before = document.read_bytes()

        assert manager.remove_directory("C:\\Nope") is False
        assert document.read_bytes() == before
        assert logger.has("warning", "Directory entry not found: C:\\Nope")

    @pytest.mark.parametrize("path", [None, "", "  "])
    def test_remove_blank(self, manager, logger, path):
        assert manager.remove_directory(path) is False
        assert logger.has("error", "Cannot remove directory with null or empty path")

    def test_remove_without_section(self, tmp_path, logger):
        path = tmp_path / "app.config"
        path.write_text("<configuration/>", encoding="utf-8")
        assert _manager(path, logger).remove_directory("C:\\Data") is False

    def test_case_sensitive_by_default(self, manager):
        manager.add_directory(DirectoryEntry(path="C:\\Data"))
        assert manager.remove_directory("c:\\data") is False

    def test_case_insensitive_matcher(self, document, logger):
        manager = _manager(document, logger, matcher=PathMatcher(case_sensitive=False))
        manager.add_directory(DirectoryEntry(path="C:\\Data"))
        manager.add_directory(DirectoryEntry(path="c:\\DATA", exclusions=["x"]))

        assert len(manager.get_directories()) == 1
        assert manager.remove_directory("c:\\data")
        assert manager.get_directories() == []


class TestUnsafeDirectoryValues:
    """Paths and exclusions XML 1.0 cannot carry are rejected before any I/O."""

    @pytest.mark.parametrize("path", ["C:\\data\udcff", "C:\\a\x0bb", "C:\\nul\x00"])
    def test_unsafe_path(self, manager, document, logger, path):
        before = document.read_bytes()

        assert manager.add_directory(DirectoryEntry(path=path)) is False
        assert document.read_bytes() == before
        assert logger.has("error", "characters not allowed in XML")

    def test_unsafe_exclusion(self, manager, document):
        before = document.read_bytes()
        assert manager.add_directory(DirectoryEntry(path="C:\\Data", exclusions=["ok", "bad\x0c"])) is False
        assert document.read_bytes() == before

    def test_existing_entries_still_readable(self, manager):
        manager.add_directory(DirectoryEntry(path="C:\\Keep"))
        manager.add_directory(DirectoryEntry(path="C:\\a\x0bb"))
        assert [entry.path for entry in manager.get_directories()] == ["C:\\Keep"]
