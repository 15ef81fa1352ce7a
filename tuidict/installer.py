"""Downloading, unpacking and locating dictd dictionary files."""

from __future__ import annotations

import lzma
import tarfile
from collections.abc import Callable
from pathlib import Path

import requests

from .api import FreeDictEntry

ProgressCallback = Callable[[int, int], None]

REQUEST_TIMEOUT = 30
_CHUNK_SIZE = 8192


class InstallError(Exception):
    """Raised when a dictionary cannot be downloaded, unpacked or found."""


def download_file(
    url: str,
    output_path: str | Path,
    total_size: int,
    progress_callback: ProgressCallback,
) -> None:
    """Stream ``url`` to ``output_path``, reporting ``(downloaded, total_size)``."""
    try:
        response = requests.get(url, stream=True, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise InstallError(f"Failed to download file: {exc}") from exc
    with response:
        try:
            out = open(output_path, "wb")
        except OSError as exc:
            raise InstallError(f"Failed to create output file: {exc}") from exc
        with out:
            downloaded = 0
            try:
                for chunk in response.iter_content(_CHUNK_SIZE):
                    if not chunk:
                        continue
                    out.write(chunk)
                    downloaded += len(chunk)
                    progress_callback(downloaded, total_size)
            except requests.RequestException as exc:
                raise InstallError(f"Failed to read from response: {exc}") from exc
            except OSError as exc:
                raise InstallError(f"Failed to write to file: {exc}") from exc


def extract_tar_xz(tar_path: str | Path, output_dir: str | Path) -> None:
    """Unpack an xz-compressed tar archive into ``output_dir``."""
    try:
        source = open(tar_path, "rb")
    except OSError as exc:
        raise InstallError(f"Failed to open tar file: {exc}") from exc
    with source:
        try:
            with tarfile.open(fileobj=source, mode="r:xz") as archive:
                if hasattr(tarfile, "data_filter"):
                    archive.extractall(output_dir, filter="data")
                else:
                    archive.extractall(output_dir)
        except (tarfile.TarError, lzma.LZMAError, EOFError, OSError) as exc:
            raise InstallError(f"Failed to extract tar archive: {exc}") from exc


def _children(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as exc:
        raise InstallError(f"Failed to read dictionary directory: {exc}") from exc


def find_dict_files(dict_dir: str | Path) -> tuple[Path, Path]:
    """Locate the ``.index`` and ``.dict.dz`` files in ``dict_dir`` or one level below."""
    children = _children(Path(dict_dir))
    index_path: Path | None = None
    dict_path: Path | None = None

    for child in children:
        if child.is_file():
            if child.name.endswith(".index"):
                index_path = child
            elif child.name.endswith(".dict.dz"):
                dict_path = child

    if index_path is None or dict_path is None:
        for child in children:
            if not child.is_dir():
                continue
            for sub in _children(child):
                if not sub.is_file():
                    continue
                if sub.name.endswith(".index") and index_path is None:
                    index_path = sub
                elif sub.name.endswith(".dict.dz") and dict_path is None:
                    dict_path = sub

    if index_path is None or dict_path is None:
        raise InstallError("Could not find .index or .dict.dz files")
    return index_path, dict_path


def download_and_install(
    entry: FreeDictEntry,
    target_dir: str | Path,
    progress_callback: ProgressCallback,
) -> Path:
    """Download the dictd release of ``entry`` and unpack it under ``target_dir``."""
    release = entry.dictd_release()
    if release is None:
        raise InstallError("No dictd release available")

    target = Path(target_dir)
    temp_dir = target / ".tmp"
    try:
        temp_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InstallError(f"Failed to create temp directory: {exc}") from exc

    tar_path = temp_dir / f"{entry.name}.tar.xz"
    download_file(release.url, tar_path, release.size, progress_callback)

    dict_dir = target / entry.name
    try:
        dict_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InstallError(f"Failed to create dictionary directory: {exc}") from exc

    extract_tar_xz(tar_path, dict_dir)

    try:
        tar_path.unlink()
    except OSError:
        pass
    try:
        temp_dir.rmdir()
    except OSError:
        pass
    return dict_dir