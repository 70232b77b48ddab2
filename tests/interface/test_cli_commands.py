"""Tests for CLI commands: help, practice, range, hint, update, stats, config."""

import json
from datetime import date, timedelta
from unittest.mock import patch

import yaml
from typer.testing import CliRunner

from leitner.consts import VERSION
from leitner.interface.cli import app

runner = CliRunner()


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Modified-Leitner" in result.stdout
    for command in ("practice", "range", "hint", "update", "stats", "config"):
        assert command in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == VERSION


# --- Practice ---


def test_practice_day_zero_lists_everything(sample_deck):
    result = runner.invoke(app, ["practice", str(sample_deck), "--day", "0"])
    assert result.exit_code == 0
    assert "Day 0: 3 card(s) due" in result.stdout
    assert "[0] What is annihilation?" in result.stdout
    assert "[2] which animal is phascolarctos cinereus?" in result.stdout


def test_practice_json(sample_deck):
    result = runner.invoke(app, ["practice", str(sample_deck), "--day", "3", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["day"] == 3
    assert data["cards"] == [
        {"bucket": 0, "front": "What is annihilation?"},
        {"bucket": 2, "front": "which animal is phascolarctos cinereus?"},
    ]


def test_practice_nothing_due(write_deck):
    path = write_deck("buckets: [0, 1]\ncards:\n  - {front: Q, back: A, bucket: 1}\n")
    result = runner.invoke(app, ["practice", str(path), "--day", "1"])
    assert result.exit_code == 0
    assert "Nothing to practice on day 1." in result.stdout


def test_practice_negative_day(sample_deck):
    result = runner.invoke(app, ["practice", str(sample_deck), "--day=-1"])
    assert result.exit_code == 1
    assert "non-negative" in result.output


def test_practice_day_from_start_date(sample_deck, monkeypatch):
    start = date.today() - timedelta(days=2)
    monkeypatch.setenv("LEITNER_START_DATE", start.isoformat())

    result = runner.invoke(app, ["practice", str(sample_deck), "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["day"] == 2
    assert [c["bucket"] for c in data["cards"]] == [0, 1]


def test_practice_future_start_date(sample_deck, monkeypatch):
    monkeypatch.setenv("LEITNER_START_DATE", (date.today() + timedelta(days=1)).isoformat())
    result = runner.invoke(app, ["practice", str(sample_deck)])
    assert result.exit_code == 1
    assert "in the future" in result.output


def test_practice_deck_from_config(sample_deck, monkeypatch):
    monkeypatch.setenv("LEITNER_DECK_PATH", str(sample_deck))
    result = runner.invoke(app, ["practice", "--day", "0"])
    assert result.exit_code == 0
    assert "3 card(s) due" in result.stdout


def test_no_deck_configured():
    result = runner.invoke(app, ["practice"])
    assert result.exit_code == 2
    assert "No deck file given" in result.output


def test_bad_deck_file(write_deck):
    path = write_deck("cards: []\ncards: []\n")
    result = runner.invoke(app, ["range", str(path)])
    assert result.exit_code == 1
    assert "Duplicate Key Error" in result.output


# --- Range ---


def test_range(sample_deck):
    result = runner.invoke(app, ["range", str(sample_deck)])
    assert result.exit_code == 0
    assert "Buckets 0..2" in result.stdout


def test_range_json(write_deck):
    path = write_deck("buckets: [0, 1, 2, 3]\ncards:\n  - {front: Q, back: A, bucket: 2}\n")
    result = runner.invoke(app, ["range", str(path), "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"min_bucket": 2, "max_bucket": 2}


def test_range_empty(write_deck):
    path = write_deck("buckets: [0, 1]\n")
    result = runner.invoke(app, ["range", str(path)])
    assert result.exit_code == 0
    assert "No cards in any bucket." in result.stdout

    result = runner.invoke(app, ["range", str(path), "--json"])
    assert json.loads(result.stdout) is None


# --- Hint ---


def test_hint_custom(sample_deck):
    result = runner.invoke(app, ["hint", "What is annihilation?", str(sample_deck)])
    assert result.exit_code == 0
    assert result.stdout.strip() == "It's the complete opposite of creation"


def test_hint_generated_for_whitespace(sample_deck):
    result = runner.invoke(
        app, ["hint", "which animal is phascolarctos cinereus?", str(sample_deck)]
    )
    assert result.exit_code == 0
    assert result.stdout.strip() == (
        "Think about the key concepts related to which animal is phascolarctos cinereus?"
    )


def test_hint_unknown_card(sample_deck):
    result = runner.invoke(app, ["hint", "nope", str(sample_deck)])
    assert result.exit_code == 1
    assert "Card not found" in result.output


# --- Update ---


def test_update_easy_prints_promoted_deck(sample_deck):
    original = sample_deck.read_text()
    result = runner.invoke(
        app,
        ["update", "What is annihilation?", "easy", str(sample_deck), "--timestamp", "99"],
    )

    assert result.exit_code == 0
    data = yaml.safe_load(result.stdout)
    buckets = {c["front"]: c["bucket"] for c in data["cards"]}
    assert buckets["What is annihilation?"] == 1
    assert data["buckets"] == [0, 1, 2]
    assert data["history"][-1] == {
        "front": "What is annihilation?",
        "difficulty": "easy",
        "timestamp": 99.0,
    }
    assert len(data["history"]) == 3
    # The deck file itself is never written
    assert sample_deck.read_text() == original


def test_update_hard_demotes(sample_deck):
    result = runner.invoke(app, ["update", "state Pythagoras theorem.", "HARD", str(sample_deck)])
    assert result.exit_code == 0
    data = yaml.safe_load(result.stdout)
    buckets = {c["front"]: c["bucket"] for c in data["cards"]}
    assert buckets["state Pythagoras theorem."] == 0


def test_update_unknown_card(sample_deck):
    result = runner.invoke(app, ["update", "nope", "easy", str(sample_deck)])
    assert result.exit_code == 1
    assert "Card not found" in result.output


def test_update_bad_difficulty(sample_deck):
    result = runner.invoke(app, ["update", "What is annihilation?", "great", str(sample_deck)])
    assert result.exit_code == 2
    assert "Unknown difficulty" in result.output


# --- Stats ---


def test_stats(sample_deck):
    result = runner.invoke(app, ["stats", str(sample_deck)])
    assert result.exit_code == 0
    assert "Reviews: 2" in result.stdout
    assert "Accuracy: 50%" in result.stdout
    assert "Average difficulty: 0.75" in result.stdout
    assert "bucket 2: 1" in result.stdout


def test_stats_json(sample_deck):
    result = runner.invoke(app, ["stats", str(sample_deck), "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["accuracy_rate"] == 0.5
    assert data["average_difficulty"] == 0.75
    assert data["bucket_distribution"] == {"0": 1, "1": 1, "2": 1}


def test_stats_without_history(write_deck):
    path = write_deck("cards:\n  - {front: Q, back: A}\n")
    result = runner.invoke(app, ["stats", str(path)])
    assert result.exit_code == 0
    assert "Accuracy: 0%" in result.stdout
    assert "Average difficulty: n/a" in result.stdout


def test_stats_bad_file(write_deck):
    path = write_deck("cards:\n\t- x\n")
    result = runner.invoke(app, ["stats", str(path)])
    assert result.exit_code == 1
    assert "Tab Character Error" in result.output


# --- Config ---


def test_config_show(monkeypatch, tmp_path):
    monkeypatch.setenv("LEITNER_START_DATE", "2024-01-01")
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["start_date"] == "2024-01-01"
    assert data["deck_path"] is None


@patch("leitner.interface.cli.resolve_config")
def test_config_show_uses_resolver(mock_resolve_config):
    mock_resolve_config.return_value.verbose = 1
    mock_resolve_config.return_value.model_dump.return_value = {"verbose": 1}
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"verbose": 1}
    mock_resolve_config.assert_called_with()


def test_verbose_flag_enables_debug(sample_deck):
    import logging

    root = logging.getLogger()
    previous = root.level
    try:
        result = runner.invoke(app, ["-vv", "range", str(sample_deck)])
        assert result.exit_code == 0
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)


def test_verbose_from_config_enables_debug(sample_deck, monkeypatch):
    import logging

    monkeypatch.setenv("LEITNER_VERBOSE", "2")
    root = logging.getLogger()
    previous = root.level
    try:
        root.setLevel(logging.INFO)
        result = runner.invoke(app, ["range", str(sample_deck)])
        assert result.exit_code == 0
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
