"""Abstract repository interfaces for the storage layer."""

from abc import ABC, abstractmethod

from models import ProgressRecord


class ProgressRepository(ABC):
    """Abstract interface for progress ledger storage."""

    @abstractmethod
    def load_all(self) -> dict[str, ProgressRecord]:
        """Load every progress record.

        Returns:
            Mapping of exercise id to its record.
        """
        pass

    @abstractmethod
    def save_all(self, records: dict[str, ProgressRecord]) -> None:
        """Replace all stored records with the given ones.

        Args:
            records: The complete ledger to persist.
        """
        pass


class WritingAnswerRepository(ABC):
    """Abstract interface for archived free-text answers."""

    @abstractmethod
    def save(self, exercise_id: str, text: str) -> None:
        """Store the latest submitted text for an exercise.

        Args:
            exercise_id: The exercise the text answers.
            text: The submitted text.
        """
        pass

    @abstractmethod
    def get(self, exercise_id: str) -> str | None:
        """Return the archived text for an exercise, or None."""
        pass
