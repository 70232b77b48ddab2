"""
Progress calculator for summarizing bucket state and review history.

This is a pure computation module with no I/O. It only reads state and
never feeds back into scheduling.
"""

from numbers import Real

from leitner.domain.constants import DIFFICULTY_SCORES
from leitner.domain.models import AnswerDifficulty, BucketMap, ReviewRecord
from leitner.domain.stats.models import ProgressReport


class ProgressCalculator:
    """
    Computes a ProgressReport from a bucket map and answer history.

    Stateless and side-effect free.
    """

    def compute(self, buckets: BucketMap, history: list[ReviewRecord]) -> ProgressReport:
        """
        Summarize learning progress.

        Raises:
            ValueError: If a bucket key is not a non-negative integer, or a
                history record is malformed.
        """
        self._validate_buckets(buckets)
        self._validate_history(history)

        return ProgressReport(
            accuracy_rate=self._compute_accuracy_rate(history),
            bucket_distribution={number: len(cards) for number, cards in buckets.items()},
            average_difficulty=self._compute_average_difficulty(history),
            total_reviews=len(history),
        )

    def _validate_buckets(self, buckets: BucketMap) -> None:
        for key in buckets:
            # bool is an int subclass but never a bucket number
            if isinstance(key, bool) or not isinstance(key, int) or key < 0:
                raise ValueError("Invalid bucket keys: must be non-negative integers")

    def _validate_history(self, history: list[ReviewRecord]) -> None:
        if not isinstance(history, list):
            raise ValueError("Invalid history data")
        for record in history:
            if (
                getattr(record, "card", None) is None
                or not isinstance(getattr(record, "difficulty", None), AnswerDifficulty)
                or isinstance(getattr(record, "timestamp", None), bool)
                or not isinstance(getattr(record, "timestamp", None), Real)
            ):
                raise ValueError("Invalid history data")

    def _compute_accuracy_rate(self, history: list[ReviewRecord]) -> float:
        """
        Share of EASY answers over all attempts.
        """
        if not history:
            return 0.0
        correct = sum(1 for r in history if r.difficulty is AnswerDifficulty.EASY)
        return correct / len(history)

    def _compute_average_difficulty(self, history: list[ReviewRecord]) -> float | None:
        if not history:
            return None
        scores = [DIFFICULTY_SCORES[r.difficulty.name] for r in history]
        return sum(scores) / len(scores)
