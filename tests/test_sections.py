# Tests for confighelper.document.sections
# Skeleton repair and the once-only section validator

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch
from xml.etree import ElementTree as ET

import pytest

from confighelper.document.accessor import DocumentAccessor
from confighelper.document.sections import (
    PLACEHOLDER_TYPE,
    SectionValidator,
    ensure_section,
    repair_sections,
)
from confighelper.settings.store import XmlSettingsStore


def _validator(path, logger) -> SectionValidator:
    return SectionValidator(DocumentAccessor(XmlSettingsStore(path)), logger)


def _declarations(root: ET.Element) -> dict[str, str]:
    return {s.get("name"): s.get("type") for s in root.find("configSections").findall("section")}


class TestRepairSections:
    """Tests for repair_sections() on in-memory trees."""

    def test_empty_root(self):
        root = ET.Element("configuration")
        repair = repair_sections(root)

        assert repair.changed
        assert repair.created_declarations_block
        assert repair.declarations_added == ["directories", "driveMappings"]
        assert repair.sections_added == ["directories", "driveMappings"]
        assert root[0].tag == "configSections"

    def test_declarations_inserted_first(self):
        root = ET.fromstring("<configuration><appSettings/></configuration>")
        repair_sections(root)
        assert [child.tag for child in root] == ["configSections", "appSettings", "directories", "driveMappings"]

    def test_complete_root_unchanged(self):
        root = ET.fromstring(
            "<configuration><configSections>"
            f'<section name="directories" type="{PLACEHOLDER_TYPE}"/>'
            f'<section name="driveMappings" type="{PLACEHOLDER_TYPE}"/>'
            "</configSections><directories/><driveMappings/></configuration>"
        )
        assert not repair_sections(root).changed

    def test_wrong_type_fixed(self):
        root = ET.fromstring(
            "<configuration><configSections>"
            '<section name="directories" type="Other, Assembly"/>'
            '<section name="driveMappings"/>'
            "</configSections><directories/><driveMappings/></configuration>"
        )
        repair = repair_sections(root)

        assert repair.declarations_fixed == ["directories", "driveMappings"]
        assert repair.declarations_added == []
        assert _declarations(root) == {"directories": PLACEHOLDER_TYPE, "driveMappings": PLACEHOLDER_TYPE}

    def test_unrelated_declarations_kept(self):
        root = ET.fromstring(
            '<configuration><configSections><section name="other" type="X, Y"/></configSections></configuration>'
        )
        repair_sections(root)
        assert _declarations(root)["other"] == "X, Y"


class TestEnsureSection:
    """Tests for ensure_section()."""

    def test_existing(self):
        root = ET.fromstring("<configuration><directories/></configuration>")
        section, created = ensure_section(root, "directories")
        assert not created
        assert section is root.find("directories")

    def test_created(self):
        root = ET.Element("configuration")
        section, created = ensure_section(root, "driveMappings")
        assert created
        assert section.tag == "driveMappings"


class TestSectionValidator:
    """Tests for SectionValidator against files on disk."""

    def test_repairs_bare_document(self, bare_document, logger):
        validator = _validator(bare_document, logger)

        assert validator.ensure_sections_exist() is True
        assert validator.validated

        root = ET.parse(bare_document).getroot()
        assert root[0].tag == "configSections"
        assert _declarations(root) == {"directories": PLACEHOLDER_TYPE, "driveMappings": PLACEHOLDER_TYPE}
        assert root.find("directories") is not None
        assert root.find("driveMappings") is not None
        assert root.find("appSettings/add").get("key") == "Existing"
        assert logger.has("info", "Configuration file updated with required sections")

    def test_comments_preserved(self, bare_document, logger):
        _validator(bare_document, logger).ensure_sections_exist()
        assert "<!-- hand edited -->" in bare_document.read_text(encoding="utf-8")

    def test_second_call_is_noop(self, bare_document, logger):
        validator = _validator(bare_document, logger)
        validator.ensure_sections_exist()
        before = bare_document.read_bytes()

        assert validator.ensure_sections_exist() is False
        assert bare_document.read_bytes() == before

    def test_complete_document_not_rewritten(self, document, logger):
        before = document.read_bytes()
        validator = _validator(document, logger)

        assert validator.ensure_sections_exist() is False
        assert validator.validated
        assert document.read_bytes() == before

    def test_idempotent_across_instances(self, bare_document, logger):
        _validator(bare_document, logger).ensure_sections_exist()
        before = bare_document.read_bytes()

        assert _validator(bare_document, logger).ensure_sections_exist() is False
        assert bare_document.read_bytes() == before

    def test_missing_file_created(self, tmp_path, logger):
        path = tmp_path / "new.config"
        assert _validator(path, logger).ensure_sections_exist() is True

        root = ET.parse(path).getroot()
        assert root.tag == "configuration"
        assert path.read_text(encoding="utf-8").startswith("<?xml")
        assert root.find("directories") is not None

    def test_logs_each_change(self, bare_document, logger):
        _validator(bare_document, logger).ensure_sections_exist()

        assert logger.has("debug", "Created missing 'configSections' element")
        assert logger.has("debug", "Added missing 'directories' section declaration")
        assert logger.has("debug", "Added missing 'driveMappings' element")

    def test_fixed_type_logged(self, tmp_path, logger):
        path = tmp_path / "app.config"
        path.write_text(
            "<configuration><configSections>"
            '<section name="directories" type="Wrong"/>'
            f'<section name="driveMappings" type="{PLACEHOLDER_TYPE}"/>'
            "</configSections><directories/><driveMappings/></configuration>",
            encoding="utf-8",
        )

        assert _validator(path, logger).ensure_sections_exist() is True
        assert logger.has("debug", "Fixed 'directories' section type attribute")
        assert _declarations(ET.parse(path).getroot())["directories"] == PLACEHOLDER_TYPE

    def test_malformed_document_fails_and_retries(self, tmp_path, logger):
        path = tmp_path / "app.config"
        path.write_text("<configuration><appSettings>", encoding="utf-8")
        validator = _validator(path, logger)

        assert validator.ensure_sections_exist() is False
        assert not validator.validated
        assert logger.has("error", "Error ensuring config sections exist")

        path.write_text("<configuration/>", encoding="utf-8")
        assert validator.ensure_sections_exist() is True
        assert validator.validated

    def test_refreshes_store_after_write(self, bare_document, logger):
        store = XmlSettingsStore(bare_document)
        validator = SectionValidator(DocumentAccessor(store), logger)

        with patch.object(store, "refresh") as mock_refresh:
            validator.ensure_sections_exist()

        mock_refresh.assert_called_once()

    def test_no_refresh_when_unchanged(self, document, logger):
        store = XmlSettingsStore(document)
        validator = SectionValidator(DocumentAccessor(store), logger)

        with patch.object(store, "refresh") as mock_refresh:
            validator.ensure_sections_exist()

        mock_refresh.assert_not_called()

    def test_reset_allows_revalidation(self, document, logger):
        validator = _validator(document, logger)
        validator.ensure_sections_exist()

        document.write_text("<configuration/>", encoding="utf-8")
        assert validator.ensure_sections_exist() is False

        validator.reset()
        assert validator.ensure_sections_exist() is True


class TestConcurrentValidation:
    """First access from many threads performs a single pass."""

    @pytest.mark.parametrize("workers", [2, 8])
    def test_single_pass(self, bare_document, logger, workers):
        validator = _validator(bare_document, logger)
        barrier = threading.Barrier(workers)

        def first_access() -> bool:
            barrier.wait()
            return validator.ensure_sections_exist()

        with patch.object(validator, "_validate", wraps=validator._validate) as spy:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(lambda _: first_access(), range(workers)))

        assert spy.call_count == 1
        assert results.count(True) == 1
        assert validator.validated

        root = ET.parse(bare_document).getroot()
        assert len(root.find("configSections").findall("section")) == 2
        assert len(root.findall("directories")) == 1
