import io
import tarfile
from unittest.mock import patch

import pytest
import requests

from tuidict.api import FreeDictEntry, FreeDictRelease
from tuidict.installer import (
    InstallError,
    download_and_install,
    download_file,
    extract_tar_xz,
    find_dict_files,
)


class _FakeResponse:
    def __init__(self, payload):
        self.payload = payload
        self.closed = False

    def iter_content(self, chunk_size=1):
        data = self.payload
        while data:
            yield data[:chunk_size]
            data = data[chunk_size:]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False


def _archive_bytes(files):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:xz") as archive:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def test_find_dict_files_top_level(tmp_path):
    (tmp_path / "eng-deu.index").write_text("x")
    (tmp_path / "eng-deu.dict.dz").write_bytes(b"x")
    (tmp_path / "README").write_text("x")
    assert find_dict_files(tmp_path) == (
        tmp_path / "eng-deu.index",
        tmp_path / "eng-deu.dict.dz",
    )


def test_find_dict_files_in_subdirectory(tmp_path):
    sub = tmp_path / "eng-deu"
    sub.mkdir()
    (sub / "eng-deu.index").write_text("x")
    (sub / "eng-deu.dict.dz").write_bytes(b"x")
    assert find_dict_files(tmp_path) == (sub / "eng-deu.index", sub / "eng-deu.dict.dz")


def test_find_dict_files_prefers_top_level(tmp_path):
    (tmp_path / "top.index").write_text("x")
    sub = tmp_path / "nested"
    sub.mkdir()
    (sub / "nested.index").write_text("x")
    (sub / "nested.dict.dz").write_bytes(b"x")
    index_path, dict_path = find_dict_files(tmp_path)
    assert index_path == tmp_path / "top.index"
    assert dict_path == sub / "nested.dict.dz"


def test_find_dict_files_missing(tmp_path):
    (tmp_path / "only.index").write_text("x")
    with pytest.raises(InstallError):
        find_dict_files(tmp_path)


def test_find_dict_files_missing_directory(tmp_path):
    with pytest.raises(InstallError):
        find_dict_files(tmp_path / "absent")


def test_extract_tar_xz_round_trip(tmp_path):
    archive = tmp_path / "a.tar.xz"
    archive.write_bytes(_archive_bytes({"d/d.index": b"idx", "d/d.dict.dz": b"data"}))
    out = tmp_path / "out"
    out.mkdir()
    extract_tar_xz(archive, out)
    assert (out / "d" / "d.index").read_bytes() == b"idx"
    assert (out / "d" / "d.dict.dz").read_bytes() == b"data"


def test_extract_tar_xz_rejects_garbage(tmp_path):
    archive = tmp_path / "bad.tar.xz"
    archive.write_bytes(b"not an archive")
    with pytest.raises(InstallError):
        extract_tar_xz(archive, tmp_path)


def test_extract_tar_xz_missing_file(tmp_path):
    with pytest.raises(InstallError, match="Failed to open tar file"):
        extract_tar_xz(tmp_path / "missing.tar.xz", tmp_path)


def test_download_file_writes_and_reports_progress(tmp_path):
    payload = bytes(range(256)) * 80
    calls = []
    with patch("requests.get", return_value=_FakeResponse(payload)):
        download_file(
            "http://example.com/f", tmp_path / "f", len(payload), lambda d, t: calls.append((d, t))
        )
    assert (tmp_path / "f").read_bytes() == payload
    assert calls[-1] == (len(payload), len(payload))
    downloaded = [d for d, _ in calls]
    assert downloaded == sorted(downloaded)
    assert len(calls) > 1


def test_download_file_network_error(tmp_path):
    with patch("requests.get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(InstallError, match="Failed to download file"):
            download_file("http://example.com/f", tmp_path / "f", 1, lambda d, t: None)


def test_download_and_install(tmp_path):
    payload = _archive_bytes({"eng-deu/eng-deu.index": b"i", "eng-deu/eng-deu.dict.dz": b"d"})
    entry = FreeDictEntry(
        name="eng-deu",
        releases=[FreeDictRelease("http://example.com/eng-deu.dictd.tar.xz", "c", "d", len(payload))],
    )
    progress = []
    with patch("requests.get", return_value=_FakeResponse(payload)):
        dict_dir = download_and_install(entry, tmp_path, lambda d, t: progress.append((d, t)))
    assert dict_dir == tmp_path / "eng-deu"
    assert find_dict_files(dict_dir) == (
        dict_dir / "eng-deu" / "eng-deu.index",
        dict_dir / "eng-deu" / "eng-deu.dict.dz",
    )
    assert not (tmp_path / ".tmp").exists()
    assert progress[-1] == (len(payload), len(payload))


def test_download_and_install_without_dictd_release(tmp_path):
    entry = FreeDictEntry(
        name="eng-deu",
        releases=[FreeDictRelease("http://example.com/eng-deu.src.tar.xz", "c", "d", 1)],
    )
    with pytest.raises(InstallError, match="No dictd release available"):
        download_and_install(entry, tmp_path, lambda d, t: None)