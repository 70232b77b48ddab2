import os
import textwrap

import pytest

from leitner.domain.models import Flashcard


@pytest.fixture(autouse=True)
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir and clears LEITNER_* variables."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/logs
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("LEITNER_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def cards():
    """Three distinct cards: Q1, Q2, Q3."""
    return [Flashcard(f"Q{i}", f"A{i}", f"Hint{i}") for i in (1, 2, 3)]


@pytest.fixture
def write_deck(tmp_path):
    """Writes dedented YAML to a deck file and returns its path."""

    def _write(content: str, name: str = "deck.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


SAMPLE_DECK = """\
buckets: [0, 1, 2]
cards:
  - front: "What is annihilation?"
    back: "the conversion of matter into energy."
    hint: "It's the complete opposite of creation"
    tags: [physics]
    bucket: 0
  - front: "state Pythagoras theorem."
    back: "In a right-angled triangle..."
    bucket: 1
  - front: "which animal is phascolarctos cinereus?"
    back: "Koala"
    hint: "    "
    bucket: 2
history:
  - front: "What is annihilation?"
    difficulty: easy
    timestamp: 1
  - front: "state Pythagoras theorem."
    difficulty: hard
    timestamp: 2
"""


@pytest.fixture
def sample_deck(write_deck):
    return write_deck(SAMPLE_DECK)
