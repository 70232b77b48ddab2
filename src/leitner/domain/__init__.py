# Domain Package
from .errors import CardNotFoundError, InvalidDayError
from .models import AnswerDifficulty, BucketMap, BucketRange, BucketSets, Flashcard, ReviewRecord

__all__ = [
    "Flashcard",
    "AnswerDifficulty",
    "ReviewRecord",
    "BucketRange",
    "BucketMap",
    "BucketSets",
    "InvalidDayError",
    "CardNotFoundError",
]
