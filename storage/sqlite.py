"""SQLite implementations of repository interfaces."""

from datetime import datetime, timezone
from pathlib import Path

from .base import ProgressRepository, WritingAnswerRepository
from .connection import get_connection, DEFAULT_DB_PATH
from models import ProgressRecord


class SQLiteProgressRepository(ProgressRepository):
    """SQLite implementation of ProgressRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def load_all(self) -> dict[str, ProgressRecord]:
        """Load all progress records.

        Raises:
            sqlite3.Error: If the database is unreadable.
            pydantic.ValidationError: If a stored row is malformed.
        """
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("SELECT * FROM progress")
            records = [self._row_to_record(row) for row in cursor.fetchall()]
            return {record.exercise_id: record for record in records}
        finally:
            conn.close()

    def save_all(self, records: dict[str, ProgressRecord]) -> None:
        """Replace the stored ledger in one transaction."""
        conn = get_connection(self.db_path)
        try:
            with conn:
                conn.execute("DELETE FROM progress")
                conn.executemany(
                    """INSERT INTO progress (exercise_id, attempts, best_score)
                    VALUES (?, ?, ?)""",
                    [
                        (record.exercise_id, record.attempts, record.best_score)
                        for record in records.values()
                    ],
                )
        finally:
            conn.close()

    def _row_to_record(self, row) -> ProgressRecord:
        """Convert a database row to a ProgressRecord model."""
        return ProgressRecord(
            exercise_id=row["exercise_id"],
            attempts=row["attempts"],
            best_score=row["best_score"],
        )


class SQLiteWritingAnswerRepository(WritingAnswerRepository):
    """SQLite implementation of WritingAnswerRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def save(self, exercise_id: str, text: str) -> None:
        """Save/replace the archived answer for an exercise."""
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                """INSERT OR REPLACE INTO writing_answers
                (exercise_id, answer, submitted_at) VALUES (?, ?, ?)""",
                (exercise_id, text, datetime.now(timezone.utc).isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def get(self, exercise_id: str) -> str | None:
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT answer FROM writing_answers WHERE exercise_id = ?",
                (exercise_id,),
            )
            row = cursor.fetchone()
            return row["answer"] if row else None
        finally:
            conn.close()
