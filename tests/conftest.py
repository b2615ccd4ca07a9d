# ConfigHelper Test Fixtures
# Pytest fixtures for confighelper tests

from pathlib import Path
from typing import Optional

import pytest

from confighelper.helper import ConfigHelper
from confighelper.settings.store import XmlSettingsStore

FULL_DOCUMENT = """<?xml version='1.0' encoding='utf-8'?>
<configuration>
  <configSections>
    <section name="directories" type="DummyType, DummyAssembly" />
    <section name="driveMappings" type="DummyType, DummyAssembly" />
  </configSections>
  <appSettings>
    <add key="Existing" value="yes" />
  </appSettings>
  <directories />
  <driveMappings />
</configuration>
"""

BARE_DOCUMENT = """<?xml version='1.0' encoding='utf-8'?>
<configuration>
  <!-- hand edited -->
  <appSettings>
    <add key="Existing" value="yes" />
  </appSettings>
</configuration>
"""


class RecordingLogger:
    """Logger that keeps every call for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, Optional[BaseException]]] = []

    def debug(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.records.append(("debug", message, exc))

    def info(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.records.append(("info", message, exc))

    def warning(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.records.append(("warning", message, exc))

    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        self.records.append(("error", message, exc))

    def messages(self, level: Optional[str] = None) -> list[str]:
        """Logged messages, optionally only those at one level."""
        return [message for lvl, message, _ in self.records if level is None or lvl == level]

    def has(self, level: str, fragment: str) -> bool:
        """Check whether any message at level contains fragment."""
        return any(fragment in message for message in self.messages(level))


@pytest.fixture
def logger() -> RecordingLogger:
    """Recording logger."""
    return RecordingLogger()


@pytest.fixture
def logger_factory():
    """Factory for additional recording loggers."""
    return RecordingLogger


@pytest.fixture
def document(tmp_path: Path) -> Path:
    """A configuration document that already has every required section."""
    path = tmp_path / "app.config"
    path.write_text(FULL_DOCUMENT, encoding="utf-8")
    return path


@pytest.fixture
def bare_document(tmp_path: Path) -> Path:
    """A configuration document with settings only, no declared sections."""
    path = tmp_path / "bare.config"
    path.write_text(BARE_DOCUMENT, encoding="utf-8")
    return path


@pytest.fixture
def store(document: Path) -> XmlSettingsStore:
    """Settings store over the full document."""
    return XmlSettingsStore(document)


@pytest.fixture
def helper(document: Path, logger: RecordingLogger) -> ConfigHelper:
    """Helper over the full document."""
    return ConfigHelper(path=document, logger=logger)


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory with no options override."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("CONFIGHELPER_CONFIG", raising=False)
    return home
