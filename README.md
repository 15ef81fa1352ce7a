# tuidict

A dictionary browser that runs in the terminal. It reads dictionaries in the
dictd format (an `.index` file plus a gzip-compressed `.dict.dz` file),
searches them by prefix as you type, and can download and install more
dictionaries from the FreeDict catalogue.

## Installation

```
pip install .
```

The screen is drawn with the standard `curses` module, so a Python with
`curses` support (as on Linux and macOS) is needed.

## Running

```
tuidict
```

The program has three pages. Switch between them with the number keys:

| Key | Page |
|-----|------|
| `1` | Translation: type a word and browse matching headwords and definitions |
| `2` | Management: turn installed dictionaries on or off, or delete them |
| `3` | Download: browse the catalogue, filter it and install dictionaries |

Pressing `3` fetches the catalogue the first time. `Ctrl+C` quits from
anywhere. Digits `1` to `9` are never typed into a text field; `0` is.

### Translation page

- Type to search; headwords are matched by prefix, ignoring case, with an
  exact match listed first, then shorter words before longer ones and ties in
  alphabetical order. At most 50 results are shown.
- `Up`/`Down` or `Ctrl+N`/`Ctrl+P` move through the results; `Backspace`
  deletes the last character.
- `Tab` switches to the next active dictionary; the search box title shows its
  language pair.
- `Enter` or `Esc` leaves typing mode. Then `j`/`k` or the arrow keys move,
  `/` clears the search and starts typing again, `Esc` returns to typing, and
  `q` quits.

### Management page

- `j`/`k` or the arrow keys move the selection.
- `Space` or `Enter` turns the selected dictionary on or off (turning it on
  loads it; if loading fails it stays off).
- `d` removes the selected dictionary from the list and deletes its directory.
- `Esc` returns to the translation page; `q` quits.

### Download page

- Type to filter the catalogue by name (ignoring case); `Enter` or `Esc` ends
  filtering, and `Ctrl+Q` quits while filtering.
- Outside filter mode: `j`/`k` or the arrow keys move, `/` clears the filter
  and starts a new one, `Enter` downloads and installs the selected
  dictionary, `Esc` returns to the translation page and `q` quits.
- The download runs in the background; its progress is shown at the bottom of
  the page. An installed dictionary is added to the configuration and
  activated, with its languages taken from the first two `-`-separated parts of
  its name.

## Files

The list of installed dictionaries is kept in `tuidict/config.json` in the
user configuration directory; it is created empty on first start. Downloaded
dictionaries are unpacked into `tuidict/dictionaries` in the user data
directory. A dictionary with id `ID` is read from `ID.index` and `ID.dict.dz`
in its directory.

The first time a dictionary is opened, the parsed index and the decompressed
data are cached next to the original files (`ID.index.cache`,
`ID.dict.dz.cache`). A cache is used only when it is at least as new as its
original, and is rebuilt otherwise.

## Using the modules

The dictionary code can be used without the terminal interface:

```python
from tuidict.dictionary import Dictionary

dictionary = Dictionary.open("eng-deu.index", "eng-deu.dict.dz")
for entry in dictionary.lookup("house"):
    print(entry.headword, "-", entry.definition)
```

- `tuidict.trie.PrefixTrie` – the case-insensitive headword index with
  `insert`, `search_prefix`, `entries` and `from_entries`.
- `tuidict.cache` – `decode_dict_number`, `build_trie_from_index`,
  `load_or_build_trie` and `load_or_decompress_dict`.
- `tuidict.config.Config` – loading, saving and editing the list of installed
  dictionaries.
- `tuidict.api` – `fetch_available_dictionaries` and `parse_database` for the
  download catalogue.
- `tuidict.installer` – `download_and_install`, `extract_tar_xz` and
  `find_dict_files`; failures raise `InstallError`.

## Limitations

- Only dictd-format dictionaries are read; other dictionary formats are not
  supported.
- Dictionaries are installed only from the catalogue's `.dictd.tar.xz`
  releases; there is no command for adding local dictionary files, though an
  entry can be added to `config.json` by hand.
- Downloads are not checked against the catalogue's checksums.