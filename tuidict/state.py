"""Application state: pages, search results and download bookkeeping."""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from .api import FreeDictEntry
from .config import Config, DictConfig
from .dictionary import DictEntry, Dictionary


class Page(Enum):
    """The screens of the application."""

    TRANSLATION = auto()
    MANAGEMENT = auto()
    DOWNLOAD = auto()


class InputMode(Enum):
    """Whether keystrokes navigate or edit the text field."""

    NORMAL = auto()
    EDITING = auto()


@dataclass
class DownloadState:
    """Progress and outcome of a background download; guard access with ``lock``."""

    progress: tuple[int, int] = (0, 1)
    result: tuple[str, Path] | None = None
    error: str | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


def load_dictionary(dict_config: DictConfig) -> Dictionary:
    """Open the dictionary files named after ``dict_config.id`` in its directory."""
    base = Path(dict_config.path)
    return Dictionary.open(base / f"{dict_config.id}.index", base / f"{dict_config.id}.dict.dz")


@dataclass
class AppState:
    """Everything the pages display and the key handlers change."""

    config: Config
    loaded_dictionaries: dict[str, Dictionary] = field(default_factory=dict)
    page: Page = Page.TRANSLATION
    exit: bool = False

    input: str = ""
    input_mode: InputMode = InputMode.EDITING
    results: list[DictEntry] = field(default_factory=list)
    selected_index: int = 0
    active_dict_index: int = 0

    management_selected: int = 0

    available_dicts: list[FreeDictEntry] | None = None
    download_selected: int = 0
    download_filter: str = ""
    download_input_mode: InputMode = InputMode.EDITING
    download_status: str | None = None
    loading_dicts: bool = False
    download_progress: tuple[int, int] | None = None
    download_state: DownloadState | None = None

    @classmethod
    def create(cls, config: Config | None = None) -> AppState:
        """Load the active dictionaries, deactivating any that fail to load."""
        if config is None:
            config = Config.load()
        loaded: dict[str, Dictionary] = {}
        for dict_config in config.active_dictionaries():
            try:
                loaded[dict_config.id] = load_dictionary(dict_config)
            except (OSError, ValueError, EOFError) as exc:
                print(
                    f"Warning: Failed to load dictionary {dict_config.name}: {exc}",
                    file=sys.stderr,
                )
                dict_config.active = False
        try:
            config.save()
        except OSError:
            pass
        return cls(config=config, loaded_dictionaries=loaded)

    def perform_search(self) -> None:
        """Look up the current input in the active dictionary."""
        if not self.loaded_dictionaries:
            self.results = []
            return
        active = self.config.active_dictionaries()
        if not active:
            self.results = []
            return
        if self.active_dict_index >= len(active):
            self.active_dict_index = 0
        dictionary = self.loaded_dictionaries.get(active[self.active_dict_index].id)
        if dictionary is not None:
            self.results = dictionary.lookup(self.input)
            self.selected_index = 0

    def cycle_dictionary(self) -> None:
        """Switch to the next active dictionary and search again."""
        active_count = len(self.config.active_dictionaries())
        if active_count > 0:
            self.active_dict_index = (self.active_dict_index + 1) % active_count
            self.perform_search()

    def next_result(self) -> None:
        """Move the selection down, stopping at the last result."""
        if self.results and self.selected_index < len(self.results) - 1:
            self.selected_index += 1

    def previous_result(self) -> None:
        """Move the selection up, stopping at the first result."""
        if self.selected_index > 0:
            self.selected_index -= 1

    def active_dict_name(self) -> str:
        """Language pair of the active dictionary, for display."""
        active = self.config.active_dictionaries()
        if self.active_dict_index < len(active):
            dict_config = active[self.active_dict_index]
            return f"{dict_config.from_lang} -> {dict_config.to_lang}"
        return "No active dictionary"

    def filtered_dicts(self, dicts: Iterable[FreeDictEntry]) -> list[FreeDictEntry]:
        """Entries whose name contains the download filter, ignoring case."""
        if not self.download_filter:
            return list(dicts)
        wanted = self.download_filter.lower()
        return [entry for entry in dicts if wanted in entry.name.lower()]