"""Configuration helper façade.

``ConfigHelper`` owns one settings store, one section validator and the
collection managers built on them. Every public operation first passes
through the validator's once-guard, so the document skeleton is repaired
transparently on first use and never again for the lifetime of the
instance. All operations report failure through their return value and
the configured logger; only :meth:`ConfigHelper.set_logger` raises.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from confighelper.document.accessor import DocumentAccessor
from confighelper.document.directories import DirectoryManager
from confighelper.document.drives import DriveMappingManager
from confighelper.document.models import DirectoryEntry, DriveMapping
from confighelper.document.normalizer import PathMatcher
from confighelper.document.sections import SectionValidator
from confighelper.logger import ConsoleLogger, Logger, validate_logger
from confighelper.settings.store import SettingsStore, XmlSettingsStore
from confighelper.settings.values import TypedSettings, ValueKind

if TYPE_CHECKING:
    from confighelper.config.schema import HelperConfig


class ConfigHelper:
    """Typed settings and structured collections over one configuration document."""

    def __init__(
        self,
        store: Optional[SettingsStore] = None,
        *,
        path: Optional[str | Path] = None,
        logger: Optional[Logger] = None,
        strict: bool = True,
        case_sensitive_paths: bool = True,
    ):
        """
        Initialize helper.

        Args:
            store: Settings store backing the document. Built from path if omitted.
            path: Path to the XML document, used when no store is given.
            logger: Log sink (rich console on stderr by default).
            strict: Validate drive letter and UNC formats, return canonical letters.
            case_sensitive_paths: Compare directory paths case-sensitively.

        Raises:
            ValueError: If neither store nor path is given.
        """
        if store is None:
            if path is None:
                raise ValueError("Either a settings store or a document path is required")
            store = XmlSettingsStore(path)

        self.store = store
        self._logger: Logger = validate_logger(logger) if logger is not None else ConsoleLogger()

        self.accessor = DocumentAccessor(store)
        self.validator = SectionValidator(self.accessor, self._logger)
        self.settings = TypedSettings(store, self._logger)
        self.directories = DirectoryManager(
            self.accessor, self._logger, PathMatcher(case_sensitive=case_sensitive_paths)
        )
        self.drives = DriveMappingManager(self.accessor, self._logger, strict=strict)

    @classmethod
    def from_config(cls, config: HelperConfig, logger: Optional[Logger] = None) -> ConfigHelper:
        """Build a helper from host options."""
        return cls(
            path=config.document,
            logger=logger,
            strict=config.strict,
            case_sensitive_paths=config.case_sensitive_paths,
        )

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def path(self) -> Path:
        """Location of the backing document."""
        return Path(self.store.load())

    def set_logger(self, logger: Logger) -> None:
        """
        Replace the log sink for this helper and all of its components.

        Raises:
            ValueError: If logger is None.
            TypeError: If logger lacks a level method.
        """
        self._logger = validate_logger(logger)
        for component in (self.validator, self.settings, self.directories, self.drives):
            component.logger = self._logger
        self._logger.info("ConfigHelper logger has been configured.")

    def ensure_sections_exist(self) -> bool:
        """
        Ensure required section declarations and sections exist.

        Returns:
            True if the file was modified by this call.
        """
        return self.validator.ensure_sections_exist()

    # Typed settings

    def get_value(
        self,
        key: str,
        default: Any = None,
        kind: Optional[ValueKind] = None,
        enum_type: Optional[type[Enum]] = None,
    ) -> Any:
        """Get a setting converted to the kind of default (or the explicit kind)."""
        self.validator.ensure_sections_exist()
        return self.settings.get_value(key, default, kind=kind, enum_type=enum_type)

    def set_value(self, key: str, value: Any, kind: Optional[ValueKind] = None) -> bool:
        """Store a setting; returns False on failure."""
        self.validator.ensure_sections_exist()
        return self.settings.set_value(key, value, kind=kind)

    # Directories

    def get_directories(self) -> list[DirectoryEntry]:
        self.validator.ensure_sections_exist()
        return self.directories.get_directories()

    def add_directory(self, entry: Optional[DirectoryEntry]) -> bool:
        self.validator.ensure_sections_exist()
        return self.directories.add_directory(entry)

    def remove_directory(self, path: Optional[str]) -> bool:
        self.validator.ensure_sections_exist()
        return self.directories.remove_directory(path)

    # Drive mappings

    def get_drive_mappings(self) -> list[DriveMapping]:
        self.validator.ensure_sections_exist()
        return self.drives.get_drive_mappings()

    def get_drive_mapping(self, drive_letter: str) -> Optional[DriveMapping]:
        """Look up one mapping by drive letter in any accepted spelling."""
        self.validator.ensure_sections_exist()
        return self.drives.find_drive_mapping(drive_letter)

    def add_drive_mapping(self, mapping: Optional[DriveMapping]) -> bool:
        self.validator.ensure_sections_exist()
        return self.drives.add_drive_mapping(mapping)

    def remove_drive_mapping(self, drive_letter: Optional[str]) -> bool:
        self.validator.ensure_sections_exist()
        return self.drives.remove_drive_mapping(drive_letter)
