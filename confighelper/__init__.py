"""confighelper - typed access to an XML application configuration file.

Reads and writes flat key/value settings, directory entries with exclusion
lists, and drive-letter-to-UNC-path mappings, repairing the document's
required sections on first use.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ConfigHelper",
    "DirectoryEntry",
    "DriveMapping",
    "DocumentError",
    "SectionValidator",
    "XmlSettingsStore",
    "SettingsStore",
    "ValueKind",
    "ConsoleLogger",
    "LoggingAdapter",
    "normalize_drive_letter",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "ConfigHelper":
        from confighelper.helper import ConfigHelper

        return ConfigHelper
    if name in ("DirectoryEntry", "DriveMapping"):
        from confighelper.document import models

        return getattr(models, name)
    if name in ("DocumentError", "SectionValidator", "normalize_drive_letter"):
        from confighelper import document

        return getattr(document, name)
    if name in ("XmlSettingsStore", "SettingsStore", "ValueKind"):
        from confighelper import settings

        return getattr(settings, name)
    if name in ("ConsoleLogger", "LoggingAdapter"):
        from confighelper import logger

        return getattr(logger, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
