from leitner.application.scheduler import get_bucket_range, get_hint, practice, to_bucket_sets, update
from leitner.consts import VERSION
from leitner.domain import (
    AnswerDifficulty,
    BucketMap,
    BucketRange,
    BucketSets,
    CardNotFoundError,
    Flashcard,
    InvalidDayError,
    ReviewRecord,
)

__version__ = VERSION

__all__ = [
    "to_bucket_sets",
    "get_bucket_range",
    "practice",
    "update",
    "get_hint",
    "Flashcard",
    "AnswerDifficulty",
    "ReviewRecord",
    "BucketRange",
    "BucketMap",
    "BucketSets",
    "InvalidDayError",
    "CardNotFoundError",
]
