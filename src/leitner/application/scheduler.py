"""
Modified-Leitner bucket scheduler.

Cards live in numbered buckets. Bucket i is practiced every (i + 1)th day,
so better-known cards come up less often. Answering EASY moves a card up one
bucket, HARD moves it down one, WRONG leaves it in place.

Every function here is pure: bucket state is passed in by the caller and a
new value is returned. Nothing is mutated in place.
"""

import logging

from leitner.domain.constants import HINT_PREFIX
from leitner.domain.errors import CardNotFoundError, InvalidDayError
from leitner.domain.models import (
    AnswerDifficulty,
    BucketMap,
    BucketRange,
    BucketSets,
    Flashcard,
)

logger = logging.getLogger(__name__)


def to_bucket_sets(buckets: BucketMap) -> BucketSets:
    """
    Convert a sparse bucket map into a dense list of sets.

    Args:
        buckets: Bucket number -> cards. Keys may be unordered and have gaps.

    Returns:
        List where element i holds a copy of the cards in bucket i, and an
        empty set for every bucket number missing from the map. Empty map
        gives an empty list.
    """
    if not buckets:
        return []

    max_bucket = max(buckets)
    return [set(buckets.get(i, ())) for i in range(max_bucket + 1)]


def get_bucket_range(buckets: BucketSets) -> BucketRange | None:
    """
    Find the lowest and highest buckets holding cards, a rough measure of progress.

    Returns None if no bucket contains a card.
    """
    occupied = [i for i, cards in enumerate(buckets) if cards]
    if not occupied:
        return None
    return BucketRange(min_bucket=occupied[0], max_bucket=occupied[-1])


def practice(buckets: BucketSets, day: int) -> set[Flashcard]:
    """
    Select the cards to practice on a given day.

    Bucket i is due when day % (i + 1) == 0, so bucket 0 is due every day,
    bucket 1 every second day, and so on.

    Args:
        buckets: Dense bucket list, as returned by to_bucket_sets.
        day: Days since the learner started (day 0 is the first day).

    Raises:
        InvalidDayError: If day is negative.
    """
    if day < 0:
        raise InvalidDayError("Day number must be non-negative")

    selected: set[Flashcard] = set()
    for i, cards in enumerate(buckets):
        if day % (i + 1) == 0:
            selected.update(cards)
    return selected


def update(
    buckets: BucketMap,
    card: Flashcard,
    difficulty: AnswerDifficulty,
) -> BucketMap:
    """
    Move a card after a practice trial.

    The new bucket is clamped to [0, len(buckets) - 1]. The ceiling is the
    number of bucket keys in the map, not the highest bucket number, so a
    sparse map can pull a card down even on WRONG.

    Args:
        buckets: Current bucket map. Left unmodified.
        card: The card that was practiced.
        difficulty: How the learner did.

    Returns:
        A new bucket map with fresh sets.

    Raises:
        CardNotFoundError: If the card is in no bucket.
    """
    current = _find_bucket(buckets, card)
    if current is None:
        raise CardNotFoundError("Card not found")

    target = current + _adjustment(difficulty)
    target = max(0, min(target, len(buckets) - 1))

    updated: BucketMap = {number: set(cards) for number, cards in buckets.items()}
    updated[current].discard(card)
    updated.setdefault(target, set()).add(card)

    logger.debug(f"Moved {card.front!r} from bucket {current} to {target} ({difficulty})")
    return updated


def get_hint(card: Flashcard) -> str:
    """
    Hint for the front of a card.

    Uses the card's own hint (stripped) when it has any non-whitespace text,
    otherwise a generic prompt built from the front.
    """
    hint = card.hint.strip()
    if hint:
        return hint
    return f"{HINT_PREFIX}{card.front}"


def _find_bucket(buckets: BucketMap, card: Flashcard) -> int | None:
    for number, cards in buckets.items():
        if card in cards:
            return number
    return None


def _adjustment(difficulty: AnswerDifficulty) -> int:
    if difficulty is AnswerDifficulty.EASY:
        return 1
    if difficulty is AnswerDifficulty.HARD:
        return -1
    return 0
