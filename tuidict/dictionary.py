"""Loaded dictionaries and headword lookup."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .cache import load_or_build_trie, load_or_decompress_dict
from .trie import PrefixTrie

MAX_RESULTS = 50


@dataclass(frozen=True)
class DictEntry:
    """A headword with its definition text."""

    headword: str
    definition: str


class Dictionary:
    """A dictd dictionary: a headword index over decompressed definition data."""

    def __init__(self, index: PrefixTrie, data_content: str) -> None:
        self._index = index
        self._data_content = data_content
        self._data = data_content.encode("utf-8")

    @classmethod
    def open(cls, index_path: str | Path, dict_path: str | Path) -> Dictionary:
        """Load a dictionary from its ``.index`` and ``.dict.dz`` files."""
        return cls(load_or_build_trie(index_path), load_or_decompress_dict(dict_path))

    def lookup(self, query: str) -> list[DictEntry]:
        """Entries whose headword starts with ``query``, best matches first."""
        if not query:
            return []
        entries = []
        for headword, offset, length in self._index.search_prefix(query, MAX_RESULTS):
            definition = self._extract_definition(offset, length)
            if definition is not None:
                entries.append(DictEntry(headword, definition))
        return entries

    def _extract_definition(self, offset: int, length: int) -> str | None:
        end = offset + length
        if end > len(self._data):
            return None
        try:
            return self._data[offset:end].decode("utf-8").strip()
        except UnicodeDecodeError:
            return None

    def entry_count(self) -> int:
        """Number of headwords in the index."""
        return len(self._index)

    def data_size(self) -> int:
        """Size of the definition data in bytes."""
        return len(self._data)