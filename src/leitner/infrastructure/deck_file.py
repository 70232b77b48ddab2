"""
YAML deck files.

A deck file lists cards with their current bucket, optional empty bucket
numbers, and an optional answer history. Files are only ever read here; an
updated deck is rendered back to text for the caller to keep.

Card fronts are unique within a file and serve as the file-level handle for
a card. In memory, cards are identified by instance.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from leitner.domain.errors import CardNotFoundError
from leitner.domain.models import AnswerDifficulty, BucketMap, Flashcard, ReviewRecord
from leitner.domain.stats.ports import DeckRepository
from leitner.infrastructure.utils.yaml_loader import dump_yaml, load_strict_yaml

logger = logging.getLogger(__name__)


class DeckFileError(ValueError):
    """A deck file is missing, malformed, or fails validation."""


# ---------- File schema ----------


class CardEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    front: str
    back: str
    hint: str = ""
    tags: list[str] = Field(default_factory=list)
    bucket: int = Field(default=0, ge=0)


class HistoryEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    front: str
    difficulty: AnswerDifficulty
    timestamp: int | float

    @field_validator("difficulty", mode="before")
    @classmethod
    def parse_difficulty(cls, v: Any) -> Any:
        if isinstance(v, str):
            return AnswerDifficulty.parse(v)
        return v


class DeckDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    buckets: list[int] = Field(default_factory=list)
    cards: list[CardEntry] = Field(default_factory=list)
    history: list[HistoryEntry] = Field(default_factory=list)

    @field_validator("buckets")
    @classmethod
    def non_negative_buckets(cls, v: list[int]) -> list[int]:
        if any(b < 0 for b in v):
            raise ValueError("bucket numbers must be non-negative")
        return v

    @model_validator(mode="after")
    def check_fronts(self) -> "DeckDocument":
        seen: set[str] = set()
        for card in self.cards:
            if card.front in seen:
                raise ValueError(f"duplicate card front '{card.front}'")
            seen.add(card.front)

        for entry in self.history:
            if entry.front not in seen:
                raise ValueError(f"history refers to unknown card '{entry.front}'")
        return self


# ---------- Loaded deck ----------


@dataclass
class Deck:
    """Cards, their buckets and answer history, as read from one file."""

    buckets: BucketMap
    cards: list[Flashcard] = field(default_factory=list)
    history: list[ReviewRecord] = field(default_factory=list)


def parse_deck(raw: str, name: str = "<deck>") -> Deck:
    """
    Build a Deck from YAML text.

    Raises:
        DeckFileError: On YAML syntax errors or schema violations.
    """
    try:
        data = load_strict_yaml(raw, name=name)
    except yaml.YAMLError as e:
        raise DeckFileError(humanize_error(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DeckFileError(f"{name}: expected a mapping at the top level")

    try:
        doc = DeckDocument.model_validate(data)
    except ValidationError as e:
        raise DeckFileError(f"{name}: {e}") from e

    buckets: BucketMap = {number: set() for number in doc.buckets}
    cards: list[Flashcard] = []
    by_front: dict[str, Flashcard] = {}

    for entry in doc.cards:
        card = Flashcard(
            front=entry.front,
            back=entry.back,
            hint=entry.hint,
            tags=frozenset(entry.tags),
        )
        cards.append(card)
        by_front[card.front] = card
        buckets.setdefault(entry.bucket, set()).add(card)

    history = [
        ReviewRecord(card=by_front[h.front], difficulty=h.difficulty, timestamp=h.timestamp)
        for h in doc.history
    ]

    return Deck(buckets=buckets, cards=cards, history=history)


def load_deck(path: Path) -> Deck:
    """
    Read and parse a deck file.

    Raises:
        DeckFileError: If the file cannot be read or parsed.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DeckFileError(f"Cannot read deck file {path}: {e.strerror or e}") from e

    deck = parse_deck(raw.lstrip("\ufeff"), name=str(path))
    logger.info(f"Loaded {len(deck.cards)} cards in {len(deck.buckets)} buckets from {path}")
    return deck


def find_card(deck: Deck, front: str) -> Flashcard:
    """
    Look up a card by its front text.

    Raises:
        CardNotFoundError: If no card has that front.
    """
    for card in deck.cards:
        if card.front == front:
            return card
    raise CardNotFoundError(f"Card not found: '{front}'")


def render_deck(buckets: BucketMap, history: list[ReviewRecord] | None = None) -> str:
    """
    Render bucket state (and optional history) as deck-file YAML.

    Every bucket number in the map is listed, so empty buckets survive a
    round trip. Cards are ordered by bucket, then front.
    """
    cards: list[dict[str, Any]] = []
    for number in sorted(buckets):
        for card in sorted(buckets[number], key=lambda c: c.front):
            entry: dict[str, Any] = {"front": card.front, "back": card.back}
            if card.hint:
                entry["hint"] = card.hint
            if card.tags:
                entry["tags"] = sorted(card.tags)
            entry["bucket"] = number
            cards.append(entry)

    doc: dict[str, Any] = {"buckets": sorted(buckets), "cards": cards}
    if history:
        doc["history"] = [
            {
                "front": r.card.front,
                "difficulty": r.difficulty.name.lower(),
                "timestamp": r.timestamp,
            }
            for r in history
        ]
    return dump_yaml(doc)


def humanize_error(e: yaml.YAMLError) -> str:
    """Turn a PyYAML exception into a one-line, readable message."""
    problem = getattr(e, "problem", None) or str(e)
    mark = getattr(e, "problem_mark", None)

    if "duplicate key" in problem:
        title = "Duplicate Key Error"
    elif "'\\t'" in problem:
        title = "Tab Character Error"
    elif "mapping values are not allowed" in problem:
        title = "Indentation Error"
    else:
        title = "YAML Syntax Error"

    if mark is not None:
        return f"{title}: {problem} (line {mark.line + 1}, column {mark.column + 1})"
    return f"{title}: {problem}"


class YamlDeckRepository(DeckRepository):
    """
    Reads bucket state and history from a YAML deck file.

    The file is parsed once, on first access.
    """

    def __init__(self, path: Path):
        self.path = path
        self._deck: Deck | None = None

    @property
    def deck(self) -> Deck:
        if self._deck is None:
            self._deck = load_deck(self.path)
        return self._deck

    def load_buckets(self) -> BucketMap:
        return {number: set(cards) for number, cards in self.deck.buckets.items()}

    def load_history(self) -> list[ReviewRecord]:
        return list(self.deck.history)
