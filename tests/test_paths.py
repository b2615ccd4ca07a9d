# Tests for confighelper.utils.paths
# Path expansion and atomic writes

from pathlib import Path

from confighelper.utils.paths import atomic_write, ensure_dir, expand_path


class TestExpandPath:
    """Tests for expand_path()."""

    def test_home(self, temp_home: Path):
        assert expand_path("~/app.config") == temp_home.resolve() / "app.config"

    def test_env_var(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CONFIGHELPER_TEST_DIR", str(tmp_path))
        assert expand_path("$CONFIGHELPER_TEST_DIR/app.config") == tmp_path.resolve() / "app.config"


class TestAtomicWrite:
    """Tests for atomic_write() and ensure_dir()."""

    def test_creates_parents(self, tmp_path: Path):
        path = tmp_path / "a" / "b" / "app.config"
        atomic_write(path, "<configuration/>")
        assert path.read_text(encoding="utf-8") == "<configuration/>"

    def test_replaces_content(self, tmp_path: Path):
        path = tmp_path / "app.config"
        path.write_text("old", encoding="utf-8")
        atomic_write(path, b"new")
        assert path.read_bytes() == b"new"

    def test_no_temp_files_left(self, tmp_path: Path):
        atomic_write(tmp_path / "app.config", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["app.config"]

    def test_ensure_dir(self, tmp_path: Path):
        target = tmp_path / "x" / "y"
        assert ensure_dir(target) == target
        assert target.is_dir()
