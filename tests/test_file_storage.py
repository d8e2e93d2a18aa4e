"""Unit tests for file storage helpers."""

from pathlib import Path

import pytest

from imagepicker.storage import FileStorage


def test_read_missing_file_returns_none(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path)
    assert storage.read_bytes(storage.resolve("missing.plist")) is None


def test_write_atomic_replaces_contents(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path)
    path = storage.resolve("images.plist")

    storage.write_atomic(path, b"first")
    storage.write_atomic(path, b"second")

    assert storage.read_bytes(path) == b"second"
    assert not path.with_suffix(".plist.tmp").exists()


def test_failed_rename_keeps_original_and_removes_temp(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test a failing rename leaves the target intact and cleans up."""
    storage = FileStorage(tmp_path)
    path = storage.resolve("images.plist")
    storage.write_atomic(path, b"original")

    def fail_replace(self: Path, target: Path) -> Path:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "replace", fail_replace)

    with pytest.raises(PermissionError):
        storage.write_atomic(path, b"updated")

    monkeypatch.undo()
    assert path.read_bytes() == b"original"
    assert not path.with_suffix(".plist.tmp").exists()


def test_ensure_directories(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path / "a" / "b")
    storage.ensure_directories()
    assert (tmp_path / "a" / "b").is_dir()
