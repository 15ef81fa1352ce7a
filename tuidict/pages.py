"""The translation, management and download screens."""

from __future__ import annotations

from .api import FreeDictEntry
from .components import (
    Rect,
    SearchInput,
    StatusBar,
    StatusType,
    _attr,
    _Color,
    _draw_block,
    _draw_gauge,
    _draw_list,
    _draw_paragraph,
    _inner,
)
from .config import DictConfig
from .state import AppState, InputMode, Page

TRANSLATION_HELP = "1: [Translation] | 2: Manage | 3: Download | Tab: Switch Dict | q: Quit"
MANAGEMENT_HELP = (
    "1: Translation | 2: [Manage] | 3: Download | Space/Enter: Toggle | d: Delete | q: Quit"
)
DOWNLOAD_HELP = (
    "1: Translation | 2: Manage | 3: [Download] | Enter: Install | Ctrl+n/p: Navigate | q: Quit"
)


def _screen(window) -> Rect:
    height, width = window.getmaxyx()
    return Rect(0, 0, width, height)


def _split_rows(area: Rect, heights: list[int | None]) -> list[Rect]:
    """Split ``area`` into stacked rows; a ``None`` height takes the remaining space."""
    fixed = sum(h for h in heights if h is not None)
    fill = max(area.height - fixed, 0)
    rects = []
    y = area.y
    remaining = area.height
    for height in heights:
        size = min(fill if height is None else height, remaining)
        rects.append(Rect(area.x, y, area.width, size))
        y += size
        remaining -= size
    return rects


def _split_columns(area: Rect, left_percent: int) -> tuple[Rect, Rect]:
    left = area.width * left_percent // 100
    return (
        Rect(area.x, area.y, left, area.height),
        Rect(area.x + left, area.y, area.width - left, area.height),
    )


def _percentage(downloaded: int, total: int) -> int:
    if total <= 0:
        raise ValueError("total size must be positive")
    return int(min(downloaded / total * 100.0, 100.0))


def status_type_for(message: str) -> StatusType:
    """Choose how to colour a download status message."""
    if "Failed" in message or "failed" in message:
        return StatusType.ERROR
    if "Success" in message:
        return StatusType.SUCCESS
    if "Loading" in message or "Downloading" in message:
        return StatusType.LOADING
    return StatusType.INFO


def progress_label(downloaded: int, total: int) -> str:
    """Text shown on the download progress bar."""
    percentage = _percentage(downloaded, total)
    return (
        f"{downloaded / 1024 / 1024:.1f} MB / {total / 1024 / 1024:.1f} MB ({percentage}%)"
    )


def progress_ratio(downloaded: int, total: int) -> float:
    """Filled fraction of the progress bar, in whole percent steps."""
    return _percentage(downloaded, total) / 100.0


def download_item_text(entry: FreeDictEntry, installed: bool) -> str:
    """One line of the downloadable dictionary list."""
    release = entry.dictd_release()
    size_mb = release.size // 1024 // 1024 if release is not None else 0
    status = "[Installed]" if installed else ""
    return f"{entry.name} ({size_mb} MB) {status}"


def management_item_text(dict_config: DictConfig) -> str:
    """One line of the installed dictionary list."""
    status = "[✓]" if dict_config.active else "[ ]"
    return f"{status} {dict_config.name} ({dict_config.from_lang} -> {dict_config.to_lang})"


def definition_text(state: AppState) -> str:
    """What the definition pane shows for the current state."""
    if not state.loaded_dictionaries:
        return "No active dictionaries. Press '3' to download or '2' to manage."
    if 0 <= state.selected_index < len(state.results):
        return state.results[state.selected_index].definition
    if not state.input:
        return "Start typing to search..."
    return "No results found."


def _render_footer(window, area: Rect, help_text: str) -> None:
    StatusBar(help_text, StatusType.HELP, show_border=False).render(window, area)


def _render_list_block(window, area: Rect, title: str, bottom_title: str | None = None) -> Rect:
    _draw_block(window, area, title, _attr(_Color.GREEN), bottom_title)
    return _inner(area)


def render_translation(window, state: AppState) -> None:
    """Draw the search page: query, results and the selected definition."""
    search_area, main_area, footer_area = _split_rows(_screen(window), [3, None, 2])

    editing = state.input_mode is InputMode.EDITING
    SearchInput(
        state.input,
        title=f"Search ({state.active_dict_name()})",
        show_cursor=editing,
        active=editing,
    ).render(window, search_area)

    results_area, definition_area = _split_columns(main_area, 30)
    inner = _render_list_block(window, results_area, f" Results ({len(state.results)}) ")
    items = [(entry.headword, 0) for entry in state.results]
    _draw_list(window, inner, items, state.selected_index, _attr(_Color.HIGHLIGHT))

    _draw_block(window, definition_area, " Definition ")
    _draw_paragraph(window, _inner(definition_area), definition_text(state), wrap=True)

    _render_footer(window, footer_area, TRANSLATION_HELP)


def render_management(window, state: AppState) -> None:
    """Draw the list of installed dictionaries."""
    list_area, footer_area = _split_rows(_screen(window), [None, 3])
    inner = _render_list_block(
        window,
        list_area,
        " Dictionary Management ",
        " Active dictionaries will be loaded on startup ",
    )
    items = [(management_item_text(d), 0) for d in state.config.dictionaries]
    _draw_list(window, inner, items, state.management_selected, _attr(_Color.HIGHLIGHT))
    _render_footer(window, footer_area, MANAGEMENT_HELP)


def _render_download_list(window, state: AppState, area: Rect) -> None:
    if state.loading_dicts:
        yellow = _attr(_Color.YELLOW)
        _draw_block(window, area, " Download ", yellow)
        _draw_paragraph(window, _inner(area), "Loading available dictionaries...", yellow)
        return

    if state.available_dicts is None:
        items = [("Failed to load dictionaries. Press '3' to retry.", 0)]
    else:
        filtered = state.filtered_dicts(state.available_dicts)
        if not filtered:
            items = [("No dictionaries match filter", 0)]
        else:
            installed_ids = {d.id for d in state.config.dictionaries}
            gray = _attr(_Color.DARK_GRAY)
            items = []
            for entry in filtered:
                installed = entry.name in installed_ids
                items.append((download_item_text(entry, installed), gray if installed else 0))

    inner = _render_list_block(
        window, area, " Available Dictionaries ", " Press Enter to download "
    )
    _draw_list(window, inner, items, state.download_selected, _attr(_Color.HIGHLIGHT))


def _render_download_status(window, state: AppState, area: Rect) -> None:
    progress = state.download_progress
    if progress is not None and progress[1] > 0:
        downloaded, total = progress
        _draw_block(window, area, " Download Progress ", _attr(_Color.CYAN))
        _draw_gauge(
            window,
            _inner(area),
            progress_ratio(downloaded, total),
            progress_label(downloaded, total),
            _attr(_Color.GAUGE_FILLED),
            _attr(_Color.GAUGE_EMPTY),
        )
        return

    if state.download_status is not None:
        message = state.download_status
        status_type = status_type_for(message)
    else:
        message, status_type = "Ready to download", StatusType.INFO
    StatusBar(message, status_type).render(window, area)


def render_download(window, state: AppState) -> None:
    """Draw the catalogue of downloadable dictionaries and download progress."""
    filter_area, list_area, status_area, footer_area = _split_rows(
        _screen(window), [3, None, 3, 2]
    )
    editing = state.download_input_mode is InputMode.EDITING
    SearchInput(
        state.download_filter,
        title="Filter Dictionaries",
        show_cursor=editing,
        active=editing,
    ).render(window, filter_area)
    _render_download_list(window, state, list_area)
    _render_download_status(window, state, status_area)
    _render_footer(window, footer_area, DOWNLOAD_HELP)


_RENDERERS = {
    Page.TRANSLATION: render_translation,
    Page.MANAGEMENT: render_management,
    Page.DOWNLOAD: render_download,
}


def draw(window, state: AppState) -> None:
    """Clear the window and draw the current page."""
    window.erase()
    _RENDERERS[state.page](window, state)