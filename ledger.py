"""Progress ledger: attempts and best score per exercise.

The ledger is loaded once at startup and fully persisted after every
mutation. Loading is best effort and persisting never raises: unreadable
data starts an empty ledger, and a failed write keeps the in-memory state.
"""

import logging
import sqlite3
import threading

from pydantic import ValidationError

from models import ProgressRecord
from storage import ProgressRepository

logger = logging.getLogger(__name__)


class ProgressLedger:
    """Process-wide mapping of exercise id to ProgressRecord."""

    def __init__(
        self,
        repository: ProgressRepository | None = None,
        records: dict[str, ProgressRecord] | None = None,
    ):
        self.repository = repository
        self._records: dict[str, ProgressRecord] = dict(records or {})
        self._lock = threading.Lock()

    @classmethod
    def load(cls, repository: ProgressRepository) -> "ProgressLedger":
        """Load the ledger, falling back to empty on malformed or missing data."""
        try:
            records = repository.load_all()
        except (sqlite3.Error, ValidationError, ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable progress data: %s", e)
            records = {}
        return cls(repository=repository, records=records)

    def get(self, exercise_id: str) -> ProgressRecord | None:
        with self._lock:
            return self._records.get(exercise_id)

    def records(self) -> dict[str, ProgressRecord]:
        """Return a copy of all records."""
        with self._lock:
            return dict(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._records

    def record(self, exercise_id: str, score: float) -> ProgressRecord:
        """Count one attempt and keep the best score seen."""
        with self._lock:
            existing = self._records.get(exercise_id)
            if existing is None:
                updated = ProgressRecord(
                    exercise_id=exercise_id, attempts=1, best_score=score
                )
            else:
                updated = ProgressRecord(
                    exercise_id=exercise_id,
                    attempts=existing.attempts + 1,
                    best_score=max(existing.best_score, score),
                )
            self._records[exercise_id] = updated
            self._persist()
        return updated

    def reset(self) -> None:
        """Clear all records."""
        with self._lock:
            self._records.clear()
            self._persist()

    def _persist(self) -> None:
        """Write the full ledger. Caller holds the lock."""
        if self.repository is None:
            return
        try:
            self.repository.save_all(dict(self._records))
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not save progress: %s", e)
