"""Case-insensitive prefix index of dictionary headwords."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable

Match = tuple[str, int, int]


class PrefixTrie:
    """Maps lower-cased headwords to ``(offset, length)`` locations in the data file."""

    def __init__(self) -> None:
        self._words: dict[str, tuple[int, int]] = {}
        self._sorted: list[str] | None = []

    def insert(self, word: str, offset: int, length: int) -> None:
        """Add ``word`` (case-folded) pointing at ``length`` bytes from ``offset``."""
        self._store(word.lower(), offset, length)

    def _store(self, key: str, offset: int, length: int) -> None:
        if key not in self._words:
            self._sorted = None
        self._words[key] = (offset, length)

    def _keys(self) -> list[str]:
        if self._sorted is None:
            self._sorted = sorted(self._words)
        return self._sorted

    def search_prefix(self, prefix: str, limit: int) -> list[Match]:
        """Return up to ``limit`` headwords starting with ``prefix``.

        An exact match comes first, then shorter words before longer ones,
        with ties broken alphabetically.
        """
        if not prefix:
            return []
        wanted = prefix.lower()
        keys = self._keys()
        matches: list[Match] = []
        for key in keys[bisect_left(keys, wanted):]:
            if not key.startswith(wanted):
                break
            offset, length = self._words[key]
            matches.append((key, offset, length))
        matches.sort(key=lambda m: (m[0] != wanted, len(m[0].encode("utf-8")), m[0]))
        return matches[:limit]

    def entries(self) -> list[Match]:
        """All stored ``(word, offset, length)`` triples in key order."""
        return [(key, *self._words[key]) for key in self._keys()]

    @classmethod
    def from_entries(cls, entries: Iterable[Match]) -> PrefixTrie:
        """Rebuild a trie from triples produced by :meth:`entries`."""
        trie = cls()
        for word, offset, length in entries:
            trie._store(word, offset, length)
        return trie

    def __len__(self) -> int:
        return len(self._words)