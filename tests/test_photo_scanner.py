import os
import sys

import pytest

from photo_sorter.errors import InvalidPathError, ReadError
from photo_sorter.ops import photo_scanner
from photo_sorter.ops.photo_scanner import (
    PhotoInfo,
    format_file_size,
    is_photo_file,
    load_photos_from_directory,
)


def test_scan_returns_only_allowed_extensions_case_insensitive(photo_dir):
    photos = load_photos_from_directory(str(photo_dir))
    assert {p.name for p in photos} == {"a.jpg", "C.PNG"}


def test_scan_photo_info_fields(photo_dir):
    photos = {p.name: p for p in load_photos_from_directory(str(photo_dir))}
    a = photos["a.jpg"]
    assert a.path == os.path.join(str(photo_dir), "a.jpg")
    assert a.size == 13
    assert photos["C.PNG"].size == 24


def test_scan_accepts_every_allowed_extension(tmp_path):
    names = ["1.jpg", "2.jpeg", "3.png", "4.gif", "5.bmp", "6.tiff", "7.tif", "8.webp", "9.WebP"]
    for n in names:
        (tmp_path / n).write_bytes(b"x")
    (tmp_path / "10.heic").write_bytes(b"x")
    (tmp_path / "noext").write_bytes(b"x")

    photos = load_photos_from_directory(str(tmp_path))
    assert sorted(p.name for p in photos) == sorted(names)


def test_scan_does_not_recurse(tmp_path):
    (tmp_path / "top.jpg").write_bytes(b"x")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "nested.jpg").write_bytes(b"x")
    # A directory that merely looks like an image is not a file
    (tmp_path / "album.png").mkdir()

    photos = load_photos_from_directory(str(tmp_path))
    assert [p.name for p in photos] == ["top.jpg"]


def test_scan_empty_directory_returns_empty_list(tmp_path):
    assert load_photos_from_directory(str(tmp_path)) == []


def test_scan_missing_path_raises(tmp_path):
    with pytest.raises(InvalidPathError) as exc_info:
        load_photos_from_directory(str(tmp_path / "nope"))
    assert "Invalid directory path" in str(exc_info.value)


def test_scan_file_path_raises(photo_dir):
    with pytest.raises(InvalidPathError):
        load_photos_from_directory(str(photo_dir / "a.jpg"))


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_scan_unreadable_directory_raises_read_error(tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "a.jpg").write_bytes(b"x")
    locked.chmod(0)
    try:
        with pytest.raises(ReadError) as exc_info:
            load_photos_from_directory(str(locked))
        assert str(exc_info.value).startswith("Failed to read directory:")
    finally:
        locked.chmod(0o755)


class _FakeEntry:
    def __init__(self, name, size=1, fail=False):
        self.name = name
        self.path = f"/fake/{name}"
        self._size = size
        self._fail = fail

    def is_file(self):
        return True

    def stat(self):
        if self._fail:
            raise PermissionError("denied")
        return os.stat_result((0, 0, 0, 0, 0, 0, self._size, 0, 0, 0))


class _FakeScandir:
    def __init__(self, entries, fail_after=None):
        self._entries = list(entries)
        self._fail_after = fail_after
        self._pos = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def __iter__(self):
        return self

    def __next__(self):
        if self._fail_after is not None and self._pos == self._fail_after:
            raise OSError("I/O error")
        if self._pos >= len(self._entries):
            raise StopIteration
        e = self._entries[self._pos]
        self._pos += 1
        return e


def test_scan_skips_entries_with_unreadable_metadata(tmp_path, monkeypatch):
    entries = [_FakeEntry("ok.jpg", size=5), _FakeEntry("bad.jpg", fail=True), _FakeEntry("ok2.png", size=7)]
    monkeypatch.setattr(photo_scanner.os, "scandir", lambda p: _FakeScandir(entries))

    photos = load_photos_from_directory(str(tmp_path))
    assert photos == [
        PhotoInfo(name="ok.jpg", path="/fake/ok.jpg", size=5),
        PhotoInfo(name="ok2.png", path="/fake/ok2.png", size=7),
    ]


def test_scan_keeps_results_when_iteration_fails_midway(tmp_path, monkeypatch):
    entries = [_FakeEntry("first.jpg"), _FakeEntry("second.jpg")]
    monkeypatch.setattr(photo_scanner.os, "scandir", lambda p: _FakeScandir(entries, fail_after=1))

    photos = load_photos_from_directory(str(tmp_path))
    assert [p.name for p in photos] == ["first.jpg"]


def test_is_photo_file():
    assert is_photo_file("x.JPEG")
    assert is_photo_file("archive.tar.png")
    assert not is_photo_file("x.txt")
    assert not is_photo_file(".jpg")
    assert not is_photo_file("jpg")


def test_format_file_size():
    assert format_file_size(0) == "0.0 B"
    assert format_file_size(1023) == "1023.0 B"
    assert format_file_size(1536) == "1.5 KB"
    assert format_file_size(5 * 1024 * 1024) == "5.0 MB"
    assert format_file_size(3 * 1024**4) == "3072.0 GB"


def test_photo_info_to_dict():
    info = PhotoInfo(name="a.jpg", path="/x/a.jpg", size=2048)
    assert info.to_dict() == {"name": "a.jpg", "path": "/x/a.jpg", "size": 2048, "sizeText": "2.0 KB"}
