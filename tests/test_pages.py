import curses

import pytest

from tuidict.api import FreeDictEntry, FreeDictRelease
from tuidict.components import StatusType
from tuidict.config import Config, DictConfig
from tuidict.dictionary import Dictionary
from tuidict.pages import (
    DOWNLOAD_HELP,
    MANAGEMENT_HELP,
    TRANSLATION_HELP,
    definition_text,
    download_item_text,
    draw,
    management_item_text,
    progress_label,
    progress_ratio,
    render_download,
    render_management,
    render_translation,
)
from tuidict.state import AppState, Page
from tuidict.trie import PrefixTrie

MB = 1024 * 1024


class FakeWindow:
    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height
        self.erase()

    def erase(self):
        self.rows = [[" "] * self.width for _ in range(self.height)]

    def getmaxyx(self):
        return (self.height, self.width)

    def addnstr(self, y, x, text, n, attr=0):
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise curses.error("out of range")
        for offset, ch in enumerate(text[:n]):
            if x + offset >= self.width:
                raise curses.error("past edge")
            self.rows[y][x + offset] = ch

    def text(self):
        return "\n".join("".join(row) for row in self.rows)


def make_entry(name="eng-deu", size=5 * MB, url_suffix=".dictd.tar.xz"):
    release = FreeDictRelease(
        url=f"https://download.example.com/{name}{url_suffix}",
        checksum="abc",
        date="2024-01-01",
        size=size,
    )
    return FreeDictEntry(name=name, releases=[release])


def make_dict_config(dict_id="eng-deu", active=True):
    return DictConfig(
        id=dict_id, name=dict_id, from_lang="EN", to_lang="DE", path="unused", active=active
    )


@pytest.fixture
def state(tmp_path):
    return AppState(config=Config([], tmp_path / "config.json"))


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Download failed: boom", StatusType.ERROR),
        ("Failed to load dictionaries: boom", StatusType.ERROR),
        ("Successfully installed eng-deu", StatusType.SUCCESS),
        ("Loading dictionaries...", StatusType.LOADING),
        ("Downloading eng-deu...", StatusType.LOADING),
        ("Ready to download", StatusType.INFO),
    ],
)
def test_status_type_for(message, expected):
    from tuidict.pages import status_type_for

    assert status_type_for(message) is expected


def test_progress_label_start():
    assert progress_label(0, MB) == "0.0 MB / 1.0 MB (0%)"


def test_progress_label_is_capped():
    assert progress_label(3 * MB, MB).endswith("(100%)")


def test_progress_ratio_bounds():
    assert progress_ratio(0, 10) == 0.0
    assert progress_ratio(10, 10) == 1.0
    assert progress_ratio(50, 10) == 1.0


def test_progress_ratio_rejects_zero_total():
    with pytest.raises(ValueError):
        progress_ratio(1, 0)


def test_download_item_text():
    entry = make_entry()
    assert download_item_text(entry, False) == "eng-deu (5 MB) "
    assert download_item_text(entry, True) == "eng-deu (5 MB) [Installed]"


def test_download_item_without_dictd_release():
    entry = make_entry(url_suffix=".slob")
    assert download_item_text(entry, False) == "eng-deu (0 MB) "


def test_management_item_text():
    assert management_item_text(make_dict_config(active=True)) == "[✓] eng-deu (EN -> DE)"
    assert management_item_text(make_dict_config(active=False)).startswith("[ ] ")


def test_definition_text_without_dictionaries(state):
    assert definition_text(state) == (
        "No active dictionaries. Press '3' to download or '2' to manage."
    )


def test_definition_text_prompts_and_misses(state):
    state.loaded_dictionaries = {"eng-deu": Dictionary(PrefixTrie(), "")}
    assert definition_text(state) == "Start typing to search..."
    state.input = "zzz"
    assert definition_text(state) == "No results found."


def test_translation_page_shows_result_and_definition(state):
    trie = PrefixTrie()
    trie.insert("hello", 0, 11)
    state.config.dictionaries.append(make_dict_config())
    state.loaded_dictionaries = {"eng-deu": Dictionary(trie, "hello world")}
    state.input = "hel"
    state.perform_search()
    window = FakeWindow()
    render_translation(window, state)
    text = window.text()
    assert definition_text(state) in text
    assert f" Results ({len(state.results)}) " in text
    assert f"Search ({state.active_dict_name()})" in text
    assert TRANSLATION_HELP in text


def test_management_page_scrolls_to_selection(state):
    state.config.dictionaries.extend(make_dict_config(f"d{n:02d}") for n in range(30))
    state.management_selected = 29
    window = FakeWindow()
    render_management(window, state)
    text = window.text()
    assert management_item_text(state.config.dictionaries[29]) in text
    assert " Dictionary Management " in text
    assert MANAGEMENT_HELP in text


def test_download_page_loading(state):
    state.loading_dicts = True
    window = FakeWindow(width=120)
    render_download(window, state)
    assert "Loading available dictionaries..." in window.text()


def test_download_page_without_catalogue(state):
    window = FakeWindow(width=120)
    render_download(window, state)
    text = window.text()
    assert "Failed to load dictionaries. Press '3' to retry." in text
    assert "Ready to download" in text
    assert DOWNLOAD_HELP in text


def test_download_page_filter_without_match(state):
    state.available_dicts = [make_entry()]
    state.download_filter = "xyz"
    window = FakeWindow(width=120)
    render_download(window, state)
    assert "No dictionaries match filter" in window.text()


def test_download_page_marks_installed(state):
    state.available_dicts = [make_entry()]
    state.config.dictionaries.append(make_dict_config())
    window = FakeWindow(width=120)
    render_download(window, state)
    assert download_item_text(state.available_dicts[0], True) in window.text()


def test_download_page_shows_progress(state):
    state.download_progress = (MB, 2 * MB)
    window = FakeWindow(width=120)
    render_download(window, state)
    text = window.text()
    assert " Download Progress " in text
    assert progress_label(MB, 2 * MB) in text


def test_download_status_message(state):
    state.download_status = "Download failed: boom"
    window = FakeWindow(width=120)
    render_download(window, state)
    assert "Download failed: boom" in window.text()


def test_draw_dispatches_on_page(state):
    window = FakeWindow(width=120)
    state.page = Page.MANAGEMENT
    draw(window, state)
    assert MANAGEMENT_HELP in window.text()
    state.page = Page.TRANSLATION
    draw(window, state)
    text = window.text()
    assert TRANSLATION_HELP in text
    assert MANAGEMENT_HELP not in text