"""Terminal dictionary browser for dictd-format dictionaries, with a catalogue downloader."""

__version__ = "0.1.0"