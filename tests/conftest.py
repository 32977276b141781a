"""Shared fixtures for photo import tests."""

import os
from datetime import datetime
from pathlib import Path

import pytest
import yaml

from photo_importer.metadata import MetadataReader
from photo_importer.prompts import Prompter


class FakeReader(MetadataReader):
    """Metadata reader answering from a {(file name, tag): "YYYY MM"} table."""

    name = 'fake'

    def __init__(self, dates=None):
        self.dates = dates or {}
        self.calls = []

    def read_date(self, file_path, tag):
        self.calls.append((Path(file_path).name, tag))
        return self.dates.get((Path(file_path).name, tag))


class ScriptedPrompter(Prompter):
    """Prompter that replays canned answers and records what was shown."""

    def __init__(self, selections=(), texts=(), confirms=(), messages_ok=True):
        self.selections = list(selections)
        self.texts = list(texts)
        self.confirms = list(confirms)
        self.messages_ok = messages_ok
        self.messages = []
        self.confirm_titles = []
        self.progress_updates = []
        self.progress_closed = False

    def select(self, title, text, choices):
        return self.selections.pop(0) if self.selections else None

    def input_text(self, title, text, default):
        return self.texts.pop(0) if self.texts else None

    def confirm(self, title, text):
        self.confirm_titles.append(title)
        return self.confirms.pop(0) if self.confirms else False

    def message(self, title, text):
        self.messages.append((title, text))
        return self.messages_ok

    def progress(self, percent, text):
        self.progress_updates.append((percent, text))

    def close_progress(self):
        self.progress_closed = True


@pytest.fixture
def fake_reader():
    """Factory fixture: build a FakeReader from a date table."""
    return FakeReader


@pytest.fixture
def scripted_prompter():
    """Factory fixture: build a ScriptedPrompter with canned answers."""
    return ScriptedPrompter


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2026-01-15 for current-date fallbacks."""
    return lambda: datetime(2026, 1, 15, 9, 30)


@pytest.fixture
def card(tmp_path):
    """Source volume with a DCIM directory."""
    card_dir = tmp_path / 'media' / 'CARD'
    (card_dir / 'DCIM' / '100CANON').mkdir(parents=True)
    return card_dir


@pytest.fixture
def destination(tmp_path):
    dest = tmp_path / 'Pictures' / 'Input'
    dest.mkdir(parents=True)
    return dest


@pytest.fixture
def make_photo(card):
    """Factory fixture: create a photo on the card with content and mtime."""

    def _create(name, content=b'photo-content', mtime=None, subdir='DCIM/100CANON'):
        full_path = card / subdir / name
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(content)
        if mtime is not None:
            timestamp = mtime.timestamp()
            os.utime(full_path, (timestamp, timestamp))
        return full_path

    return _create


@pytest.fixture
def sample_config(tmp_path):
    """Create a Config backed by a temp config file."""
    config_data = {
        'import': {
            'default_destination': str(tmp_path / 'Pictures' / 'Input'),
        },
        'volume': {
            'mount_roots': [str(tmp_path / 'media')],
        },
        'metadata': {
            'backend': 'exifread',
        },
        'logging': {
            'level': 'WARNING',
            'log_dir': str(tmp_path / 'logs'),
        },
    }

    config_path = tmp_path / 'config.yml'
    with open(config_path, 'w') as f:
        yaml.dump(config_data, f)

    from photo_importer.config import Config
    return Config(str(config_path))
