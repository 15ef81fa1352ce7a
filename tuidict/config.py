"""Persistent list of installed dictionaries."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs

APP_NAME = "tuidict"


@dataclass
class DictConfig:
    """An installed dictionary and whether it is active."""

    id: str
    name: str
    from_lang: str
    to_lang: str
    path: Path
    active: bool


def _dict_to_json(dict_config: DictConfig) -> dict[str, Any]:
    return {
        "id": dict_config.id,
        "name": dict_config.name,
        "from_lang": dict_config.from_lang,
        "to_lang": dict_config.to_lang,
        "path": str(dict_config.path),
        "active": dict_config.active,
    }


def _dict_from_json(data: Any) -> DictConfig:
    if not isinstance(data, dict):
        raise TypeError("dictionary entry must be an object")
    strings = {}
    for key in ("id", "name", "from_lang", "to_lang", "path"):
        value = data[key]
        if not isinstance(value, str):
            raise TypeError(f"field {key!r} must be a string")
        strings[key] = value
    active = data["active"]
    if not isinstance(active, bool):
        raise TypeError("field 'active' must be a boolean")
    return DictConfig(
        id=strings["id"],
        name=strings["name"],
        from_lang=strings["from_lang"],
        to_lang=strings["to_lang"],
        path=Path(strings["path"]),
        active=active,
    )


@dataclass
class Config:
    """The configuration file: installed dictionaries in install order."""

    dictionaries: list[DictConfig] = field(default_factory=list)
    path: Path | None = None

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """Read the configuration, creating an empty one if none exists."""
        config_path = Path(path) if path is not None else cls.config_path()
        if not config_path.exists():
            config = cls([], config_path)
            config.save()
            return config
        content = config_path.read_text(encoding="utf-8")
        try:
            data = json.loads(content)
            dictionaries = [_dict_from_json(item) for item in data["dictionaries"]]
        except (ValueError, KeyError, TypeError) as exc:
            raise ValueError(f"Failed to parse config file: {exc}") from exc
        return cls(dictionaries, config_path)

    def save(self) -> None:
        """Write the configuration to its file."""
        target = self.path if self.path is not None else self.config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = {"dictionaries": [_dict_to_json(d) for d in self.dictionaries]}
        target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    @staticmethod
    def config_path() -> Path:
        """Default location of the configuration file."""
        return Path(platformdirs.user_config_path()) / APP_NAME / "config.json"

    @staticmethod
    def data_dir() -> Path:
        """Directory holding installed dictionaries, created if missing."""
        directory = Path(platformdirs.user_data_path()) / APP_NAME / "dictionaries"
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def add_dictionary(self, dict_config: DictConfig) -> None:
        """Add a dictionary at the end, replacing any with the same id."""
        self.dictionaries = [d for d in self.dictionaries if d.id != dict_config.id]
        self.dictionaries.append(dict_config)

    def toggle_dictionary(self, dict_id: str) -> bool:
        """Flip the active flag of a dictionary; False if it is unknown."""
        for dict_config in self.dictionaries:
            if dict_config.id == dict_id:
                dict_config.active = not dict_config.active
                return True
        return False

    def active_dictionaries(self) -> list[DictConfig]:
        """Active dictionaries in install order."""
        return [d for d in self.dictionaries if d.active]

    def remove_dictionary(self, dict_id: str) -> DictConfig | None:
        """Remove and return a dictionary, or None if it is unknown."""
        for position, dict_config in enumerate(self.dictionaries):
            if dict_config.id == dict_id:
                return self.dictionaries.pop(position)
        return None