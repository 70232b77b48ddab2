"""
Domain models for progress reporting.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProgressReport:
    """
    Summary of a learner's progress.

    Attributes:
        accuracy_rate: Share of EASY answers over all answers (0.0 without history).
        bucket_distribution: Bucket number -> number of cards in it.
        average_difficulty: Mean answer score (EASY=1, HARD=0.5, WRONG=0), None without history.
        total_reviews: Number of history records considered.
    """

    accuracy_rate: float
    bucket_distribution: dict[int, int] = field(default_factory=dict)
    average_difficulty: float | None = None
    total_reviews: int = 0
