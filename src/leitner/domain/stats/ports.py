"""
Ports (interfaces) for reading learner state.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from leitner.domain.models import BucketMap, ReviewRecord


class DeckRepository(ABC):
    """
    Port for loading a caller's bucket state and review history.

    Implementations:
        - YamlDeckRepository: Reads a YAML deck file.
    """

    @abstractmethod
    def load_buckets(self) -> BucketMap:
        """
        Load the current bucket map.

        Returns:
            Bucket number -> set of cards. Keys may be sparse.
        """
        pass

    @abstractmethod
    def load_history(self) -> list[ReviewRecord]:
        """
        Load past answers.

        Returns:
            ReviewRecord objects in recorded order.
        """
        pass
