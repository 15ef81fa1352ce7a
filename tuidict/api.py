"""Catalogue of dictionaries available for download."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import requests

FREEDICT_API_URL = "https://freedict.org/freedict-database.json"
REQUEST_TIMEOUT = 30

_SIZE_PATTERN = re.compile(r"\+?[0-9]+")
_U64_MAX = (1 << 64) - 1


def _require_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object")
    return data


def _string_field(data: dict[str, Any], key: str, default: str | None = None) -> str:
    if key not in data:
        if default is None:
            raise ValueError(f"missing field {key!r}")
        return default
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _parse_size(value: Any) -> int:
    if not isinstance(value, str) or not _SIZE_PATTERN.fullmatch(value):
        raise ValueError(f"invalid release size: {value!r}")
    size = int(value)
    if size > _U64_MAX:
        raise ValueError(f"release size out of range: {value!r}")
    return size


@dataclass(frozen=True)
class FreeDictRelease:
    """One downloadable release of a dictionary."""

    url: str
    checksum: str
    date: str
    size: int

    @classmethod
    def from_json(cls, data: Any) -> FreeDictRelease:
        """Build a release from its JSON object; the size is given as a string."""
        obj = _require_object(data, "release")
        if "size" not in obj:
            raise ValueError("missing field 'size'")
        return cls(
            url=_string_field(obj, "URL"),
            checksum=_string_field(obj, "checksum"),
            date=_string_field(obj, "date"),
            size=_parse_size(obj["size"]),
        )


@dataclass(frozen=True)
class FreeDictEntry:
    """A dictionary listed in the database, with its releases."""

    name: str = ""
    releases: list[FreeDictRelease] = field(default_factory=list)
    headwords: str = ""
    status: str = ""

    @classmethod
    def from_json(cls, data: Any) -> FreeDictEntry:
        """Build an entry from its JSON object; absent fields take empty defaults."""
        obj = _require_object(data, "dictionary entry")
        raw_releases = obj.get("releases", [])
        if not isinstance(raw_releases, list):
            raise ValueError("field 'releases' must be a list")
        return cls(
            name=_string_field(obj, "name", ""),
            releases=[FreeDictRelease.from_json(item) for item in raw_releases],
            headwords=_string_field(obj, "headwords", ""),
            status=_string_field(obj, "status", ""),
        )

    def is_valid(self) -> bool:
        """True if the entry has a name and at least one release."""
        return bool(self.name) and bool(self.releases)

    def dictd_release(self) -> FreeDictRelease | None:
        """The first release packaged in dictd format, if any."""
        return next((r for r in self.releases if ".dictd.tar.xz" in r.url), None)


def parse_database(data: Any) -> list[FreeDictEntry]:
    """Turn the decoded database JSON into its valid entries, in order."""
    if not isinstance(data, list):
        raise ValueError("dictionary database must be a JSON array")
    entries = [FreeDictEntry.from_json(item) for item in data]
    return [entry for entry in entries if entry.is_valid()]


def fetch_available_dictionaries() -> list[FreeDictEntry]:
    """Download the dictionary database and return its valid entries."""
    try:
        response = requests.get(FREEDICT_API_URL, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise ConnectionError(f"Failed to fetch dictionary database: {exc}") from exc
    try:
        return parse_database(response.json())
    except ValueError as exc:
        raise ValueError(f"Failed to parse dictionary database: {exc}") from exc