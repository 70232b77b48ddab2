"""
Domain models for Leitner scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True, eq=False)
class Flashcard:
    """
    A single flashcard.

    Equality and hashing are by identity: two cards with the same text are
    still different cards, so a card can be located inside bucket sets.

    Attributes:
        front: Question text.
        back: Answer text.
        hint: Custom hint, possibly empty or whitespace-only.
        tags: Category labels.
    """

    front: str
    back: str
    hint: str = ""
    tags: frozenset[str] = field(default_factory=frozenset)


class AnswerDifficulty(Enum):
    """How well the learner did on a single practice trial."""

    WRONG = 0
    HARD = 1
    EASY = 2

    @classmethod
    def parse(cls, value: str) -> "AnswerDifficulty":
        """Look up a member by name, case-insensitively."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            choices = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown difficulty '{value}' (expected one of: {choices})") from None


@dataclass(frozen=True)
class ReviewRecord:
    """
    One past answer, as kept by the caller's history.

    Attributes:
        card: The card that was practiced.
        difficulty: Outcome reported by the learner.
        timestamp: Time of practice (caller-defined units).
    """

    card: Flashcard
    difficulty: AnswerDifficulty
    timestamp: float


@dataclass(frozen=True)
class BucketRange:
    """Lowest and highest occupied bucket."""

    min_bucket: int
    max_bucket: int


# Sparse bucket number -> cards at that level.
BucketMap = dict[int, set[Flashcard]]

# Dense list where index i holds the cards of bucket i.
BucketSets = list[set[Flashcard]]
