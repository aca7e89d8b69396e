import os
import time
from pathlib import Path

import pytest

from mdeditor.services.file_service import FileService


def test_file_service_read_write_atomic_success(tmp_path):
    fs = FileService()
    p = tmp_path / "a.md"
    fs.write_text_atomic(p, "hello")
    assert p.read_text(encoding="utf-8") == "hello"
    assert fs.read_text(p) == "hello"


def test_file_service_write_creates_parent_dirs(tmp_path):
    fs = FileService()
    p = tmp_path / "nested" / "dir" / "a.md"
    fs.write_text_atomic(p, "deep")
    assert p.read_text(encoding="utf-8") == "deep"


def test_file_service_read_text_missing(tmp_path):
    fs = FileService()
    with pytest.raises(FileNotFoundError):
        fs.read_text(tmp_path / "missing.md")


def test_file_service_read_text_empty_path():
    with pytest.raises(ValueError):
        FileService().read_text(Path(""))


def test_file_service_write_atomic_open_fail(monkeypatch, tmp_path):
    class FakeQSaveFile:
        def __init__(self, *_):
            pass

        def open(self, *_):
            return False

    monkeypatch.setattr("mdeditor.services.file_service.QSaveFile", FakeQSaveFile, raising=True)
    with pytest.raises(OSError):
        FileService().write_text_atomic(tmp_path / "x.md", "data")


def test_file_service_write_atomic_commit_fail(monkeypatch, tmp_path):
    class FakeQSaveFile:
        def __init__(self, *_):
            self._data = b""

        def open(self, *_):
            return True

        def write(self, b):
            self._data += b

        def commit(self):
            return False

    p = tmp_path / "x.md"
    monkeypatch.setattr("mdeditor.services.file_service.QSaveFile", FakeQSaveFile, raising=True)
    with pytest.raises(OSError):
        FileService().write_text_atomic(p, "data")
    assert not p.exists()


@pytest.mark.parametrize(
    ("given", "expected"),
    [
        (Path("notes"), Path("notes.md")),
        (Path("notes.md"), Path("notes.md")),
        (Path("notes.MD"), Path("notes.MD")),
        (Path("notes.markdown"), Path("notes.markdown")),
        (Path("notes.txt"), Path("notes.txt.md")),
        (Path("dir/v1.2"), Path("dir/v1.2.md")),
        (None, Path("untitled.md")),
        (Path(""), Path("untitled.md")),
    ],
)
def test_ensure_extension(given, expected):
    assert FileService.ensure_extension(given) == expected


def test_create_backup(tmp_path):
    fs = FileService()
    p = tmp_path / "doc.md"
    p.write_text("original", encoding="utf-8")
    backup = fs.create_backup(p)
    assert backup == tmp_path / ".doc.md.bak"
    assert backup.read_text(encoding="utf-8") == "original"


def test_is_modified_externally(tmp_path):
    p = tmp_path / "doc.md"
    p.write_text("x", encoding="utf-8")
    mtime = p.stat().st_mtime
    assert FileService.is_modified_externally(p, mtime) is False

    later = time.time() + 10
    os.utime(p, (later, later))
    assert FileService.is_modified_externally(p, mtime) is True
