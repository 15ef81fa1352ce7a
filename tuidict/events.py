"""Keyboard handling and the actions it triggers."""

from __future__ import annotations

import shutil
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from . import api, installer
from .config import Config, DictConfig
from .state import AppState, DownloadState, InputMode, Page, load_dictionary

_LOAD_ERRORS = (OSError, ValueError, EOFError)


@dataclass(frozen=True)
class Key:
    """A key press: a single character or one of the named keys below."""

    code: str
    ctrl: bool = False

    ENTER: ClassVar[str] = "Enter"
    ESC: ClassVar[str] = "Esc"
    TAB: ClassVar[str] = "Tab"
    UP: ClassVar[str] = "Up"
    DOWN: ClassVar[str] = "Down"
    BACKSPACE: ClassVar[str] = "Backspace"

    @property
    def char(self) -> str | None:
        """The typed character, or None for a named key."""
        return self.code if len(self.code) == 1 else None

    def is_ctrl(self, ch: str) -> bool:
        """True if this is ``ch`` pressed together with Control."""
        return self.ctrl and self.code == ch


def _is_text_char(ch: str | None) -> bool:
    # Digits other than 0 are reserved for switching pages.
    return ch is not None and (not ch.isnumeric() or ch == "0")


def _start_download(entry: api.FreeDictEntry, data_dir: Path) -> DownloadState:
    state = DownloadState()

    def report(downloaded: int, total: int) -> None:
        with state.lock:
            state.progress = (downloaded, total)

    def work() -> None:
        try:
            dict_dir = installer.download_and_install(entry, data_dir, report)
        except Exception as exc:  # any failure is shown to the user
            with state.lock:
                state.error = str(exc)
        else:
            with state.lock:
                state.result = (entry.name, dict_dir)

    threading.Thread(target=work, daemon=True).start()
    return state


class App:
    """Dispatches key presses to the handlers of the current page."""

    def __init__(self, state: AppState) -> None:
        self.state = state

    def should_exit(self) -> bool:
        """True once the user has asked to quit."""
        return self.state.exit

    def handle_key(self, key: Key) -> None:
        """Handle global keys, then pass the key to the current page."""
        self.check_download_progress()
        state = self.state

        if key.is_ctrl("c"):
            state.exit = True
            return
        if key.code == "1":
            state.page = Page.TRANSLATION
            return
        if key.code == "2":
            state.page = Page.MANAGEMENT
            return
        if key.code == "3":
            state.page = Page.DOWNLOAD
            if state.available_dicts is None and not state.loading_dicts:
                self.fetch_available_dictionaries()
            return

        if state.page is Page.TRANSLATION:
            self.handle_translation_key(key)
        elif state.page is Page.MANAGEMENT:
            self.handle_management_key(key)
        else:
            self.handle_download_key(key)

    def handle_translation_key(self, key: Key) -> None:
        """Keys of the translation page."""
        state = self.state
        code = key.code
        if state.input_mode is InputMode.NORMAL:
            if code == "q":
                state.exit = True
            elif code in ("j", Key.DOWN):
                state.next_result()
            elif code in ("k", Key.UP):
                state.previous_result()
            elif code == "/":
                state.input = ""
                state.perform_search()
                state.input_mode = InputMode.EDITING
            elif code == Key.ESC:
                state.input_mode = InputMode.EDITING
            elif code == Key.TAB:
                state.cycle_dictionary()
            return

        if code == Key.ENTER:
            state.input_mode = InputMode.NORMAL
        elif key.is_ctrl("n"):
            state.next_result()
        elif key.is_ctrl("p"):
            state.previous_result()
        elif _is_text_char(key.char):
            state.input += code
            state.perform_search()
        elif code == Key.BACKSPACE:
            state.input = state.input[:-1]
            state.perform_search()
        elif code == Key.ESC:
            state.input_mode = InputMode.NORMAL
        elif code == Key.TAB:
            state.cycle_dictionary()
        elif code == Key.DOWN:
            state.next_result()
        elif code == Key.UP:
            state.previous_result()

    def handle_management_key(self, key: Key) -> None:
        """Keys of the dictionary management page."""
        state = self.state
        code = key.code
        if code == "q":
            state.exit = True
        elif code == Key.ESC:
            state.page = Page.TRANSLATION
        elif code in (Key.DOWN, "j"):
            if state.management_selected < max(len(state.config.dictionaries) - 1, 0):
                state.management_selected += 1
        elif code in (Key.UP, "k"):
            if state.management_selected > 0:
                state.management_selected -= 1
        elif code in (Key.ENTER, " "):
            self.toggle_selected_dictionary()
        elif code == "d":
            self.delete_selected_dictionary()

    def _download_down(self) -> None:
        state = self.state
        if state.available_dicts is not None:
            filtered = state.filtered_dicts(state.available_dicts)
            if state.download_selected < max(len(filtered) - 1, 0):
                state.download_selected += 1

    def _download_up(self) -> None:
        if self.state.download_selected > 0:
            self.state.download_selected -= 1

    def handle_download_key(self, key: Key) -> None:
        """Keys of the download page."""
        state = self.state
        code = key.code
        if state.download_input_mode is InputMode.NORMAL:
            if code == "q":
                state.exit = True
            elif code == Key.ESC:
                state.page = Page.TRANSLATION
            elif code in ("j", Key.DOWN):
                self._download_down()
            elif code in ("k", Key.UP):
                self._download_up()
            elif code == "/":
                state.download_filter = ""
                state.download_selected = 0
                state.download_input_mode = InputMode.EDITING
            elif code == Key.ENTER:
                self.download_selected_dictionary()
            return

        if key.is_ctrl("q"):
            state.exit = True
        elif code in (Key.ENTER, Key.ESC):
            state.download_input_mode = InputMode.NORMAL
        elif key.is_ctrl("n") or code == Key.DOWN:
            self._download_down()
        elif key.is_ctrl("p") or code == Key.UP:
            self._download_up()
        elif _is_text_char(key.char):
            state.download_filter += code
            state.download_selected = 0
        elif code == Key.BACKSPACE:
            state.download_filter = state.download_filter[:-1]
            state.download_selected = 0

    def _save_config(self) -> None:
        try:
            self.state.config.save()
        except OSError:
            pass

    def _clamp_active_index(self) -> None:
        active_count = len(self.state.loaded_dictionaries)
        if active_count > 0 and self.state.active_dict_index >= active_count:
            self.state.active_dict_index = active_count - 1

    def toggle_selected_dictionary(self) -> None:
        """Activate or deactivate the selected dictionary, loading it as needed."""
        state = self.state
        dictionaries = state.config.dictionaries
        if not 0 <= state.management_selected < len(dictionaries):
            return
        selected = dictionaries[state.management_selected]
        dict_id = selected.id
        was_active = selected.active

        state.config.toggle_dictionary(dict_id)
        self._save_config()

        if was_active:
            state.loaded_dictionaries.pop(dict_id, None)
        else:
            try:
                state.loaded_dictionaries[dict_id] = load_dictionary(selected)
            except _LOAD_ERRORS as exc:
                state.download_status = f"Failed to load dictionary: {exc}"
                state.config.toggle_dictionary(dict_id)
                self._save_config()

        self._clamp_active_index()
        state.perform_search()

    def delete_selected_dictionary(self) -> None:
        """Remove the selected dictionary from the config and from disk."""
        state = self.state
        dictionaries = state.config.dictionaries
        if not 0 <= state.management_selected < len(dictionaries):
            return
        selected = dictionaries[state.management_selected]

        state.config.remove_dictionary(selected.id)
        self._save_config()
        state.loaded_dictionaries.pop(selected.id, None)
        shutil.rmtree(selected.path, ignore_errors=True)

        if (
            state.management_selected >= len(state.config.dictionaries)
            and state.management_selected > 0
        ):
            state.management_selected -= 1

        self._clamp_active_index()
        state.perform_search()

    def fetch_available_dictionaries(self) -> None:
        """Load the catalogue of downloadable dictionaries."""
        state = self.state
        state.loading_dicts = True
        state.download_status = "Loading dictionaries..."
        try:
            state.available_dicts = api.fetch_available_dictionaries()
            state.download_status = None
        except (OSError, ValueError) as exc:
            state.download_status = f"Failed to load dictionaries: {exc}"
        state.loading_dicts = False

    def download_selected_dictionary(self) -> None:
        """Start downloading the selected catalogue entry in the background."""
        state = self.state
        if state.download_state is not None or state.available_dicts is None:
            return
        filtered = state.filtered_dicts(state.available_dicts)
        if not 0 <= state.download_selected < len(filtered):
            return
        entry = filtered[state.download_selected]

        state.download_status = f"Downloading {entry.name}..."
        state.download_progress = (0, 1)
        try:
            data_dir = Config.data_dir()
        except OSError as exc:
            state.download_status = f"Failed to get data directory: {exc}"
            return
        state.download_state = _start_download(entry, data_dir)

    def check_download_progress(self) -> None:
        """Copy progress from a running download and finish it when done."""
        state = self.state
        download = state.download_state
        if download is None:
            return
        with download.lock:
            progress = download.progress
            result = download.result
            error = download.error

        state.download_progress = progress
        if result is None and error is None:
            return

        state.download_state = None
        state.download_progress = None
        if result is not None:
            self._install_downloaded(*result)
        else:
            state.download_status = f"Download failed: {error}"

    def _install_downloaded(self, dict_name: str, dict_dir: Path) -> None:
        state = self.state
        try:
            index_path, _ = installer.find_dict_files(dict_dir)
        except (installer.InstallError, OSError) as exc:
            state.download_status = f"Failed to find dictionary files: {exc}"
            return

        parts = dict_name.split("-")
        if len(parts) >= 2:
            from_lang, to_lang = parts[0].upper(), parts[1].upper()
        else:
            from_lang, to_lang = "UNK", "UNK"

        dict_config = DictConfig(
            id=dict_name,
            name=dict_name,
            from_lang=from_lang,
            to_lang=to_lang,
            path=index_path.parent,
            active=True,
        )
        state.config.add_dictionary(dict_config)
        try:
            state.config.save()
        except OSError as exc:
            state.download_status = f"Failed to save config: {exc}"
            return

        try:
            state.loaded_dictionaries[dict_name] = load_dictionary(dict_config)
        except _LOAD_ERRORS as exc:
            state.download_status = f"Downloaded but failed to load: {exc}"
        else:
            state.download_status = f"Successfully installed {dict_name}"