"""Building and caching of dictionary indexes and decompressed data."""

from __future__ import annotations

import gzip
import json
from pathlib import Path

from .trie import PrefixTrie

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_DIGITS = {ch: value for value, ch in enumerate(_ALPHABET)}
_U64_MAX = (1 << 64) - 1


def cache_path(source_path: str | Path) -> Path:
    """Path of the cache file kept next to ``source_path``."""
    path = Path(source_path)
    return path.with_name(f"{path.stem}.{path.suffix[1:]}.cache")


def _is_cache_valid(cached: Path, source: Path) -> bool:
    try:
        return cached.stat().st_mtime_ns >= source.stat().st_mtime_ns
    except OSError:
        return False


def decode_dict_number(text: str) -> int:
    """Decode a dictd base64 number as used in ``.index`` files."""
    result = 0
    for ch in text:
        try:
            digit = _DIGITS[ch]
        except KeyError:
            raise ValueError(f"Invalid base64 character {ch!r} in {text!r}") from None
        result = result * 64 + digit
        if result > _U64_MAX:
            raise ValueError(f"Number overflow decoding {text!r}")
    return result


def build_trie_from_index(index_path: str | Path) -> PrefixTrie:
    """Read a dictd ``.index`` file into a :class:`PrefixTrie`."""
    trie = PrefixTrie()
    with open(index_path, encoding="utf-8") as index_file:
        for line in index_file:
            parts = line.strip().split("\t")
            if len(parts) >= 3:
                trie.insert(parts[0], decode_dict_number(parts[1]), decode_dict_number(parts[2]))
    return trie


def _save_trie(trie: PrefixTrie, path: Path) -> None:
    path.write_text(json.dumps(trie.entries(), ensure_ascii=False), encoding="utf-8")


def _load_trie(path: Path) -> PrefixTrie:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("Malformed trie cache")
    entries = []
    for item in data:
        if not (
            isinstance(item, list)
            and len(item) == 3
            and isinstance(item[0], str)
            and all(isinstance(n, int) and not isinstance(n, bool) for n in item[1:])
        ):
            raise ValueError("Malformed trie cache entry")
        entries.append((item[0], item[1], item[2]))
    return PrefixTrie.from_entries(entries)


def load_or_build_trie(index_path: str | Path) -> PrefixTrie:
    """Load the index from its cache if fresh, otherwise build and cache it."""
    source = Path(index_path)
    cached = cache_path(source)
    if _is_cache_valid(cached, source):
        try:
            return _load_trie(cached)
        except (OSError, ValueError):
            pass
    trie = build_trie_from_index(source)
    try:
        _save_trie(trie, cached)
    except OSError:
        pass
    return trie


def _decompress_dict(dict_path: Path) -> str:
    with gzip.open(dict_path, "rb") as stream:
        return stream.read().decode("utf-8")


def load_or_decompress_dict(dict_path: str | Path) -> str:
    """Return the text of a ``.dict.dz`` file, using a fresh cache if present."""
    source = Path(dict_path)
    cached = cache_path(source)
    if _is_cache_valid(cached, source):
        try:
            return cached.read_text(encoding="utf-8")
        except (OSError, ValueError):
            pass
    content = _decompress_dict(source)
    try:
        cached.write_text(content, encoding="utf-8")
    except OSError:
        pass
    return content