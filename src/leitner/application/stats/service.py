"""
Progress Service: application layer orchestrator.

Coordinates loading learner state from the repository and summarizing it.
"""

import logging

from leitner.domain.stats.models import ProgressReport
from leitner.domain.stats.ports import DeckRepository

from .progress_calculator import ProgressCalculator

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Application service for progress reports.

    Depends on the DeckRepository abstraction, not on a concrete file format.
    """

    def __init__(
        self,
        deck_repo: DeckRepository,
        calculator: ProgressCalculator | None = None,
    ):
        """
        Args:
            deck_repo: The repository (port) for loading buckets and history.
            calculator: Optional custom calculator; uses default if not provided.
        """
        self._repo = deck_repo
        self._calc = calculator or ProgressCalculator()

    def get_report(self) -> ProgressReport:
        """
        Load the current state and compute a progress report.
        """
        buckets = self._repo.load_buckets()
        history = self._repo.load_history()
        logger.debug(f"Computing progress over {len(buckets)} buckets, {len(history)} reviews")
        return self._calc.compute(buckets, history)
