"""Storage layer for PTE Practice.

Provides repository interfaces and SQLite implementations for persisting
the progress ledger and archived writing answers.
"""

from pathlib import Path

from .base import ProgressRepository, WritingAnswerRepository
from .sqlite import SQLiteProgressRepository, SQLiteWritingAnswerRepository
from .connection import get_connection, init_schema, DEFAULT_DB_PATH

__all__ = [
    # Abstract interfaces
    "ProgressRepository",
    "WritingAnswerRepository",
    # SQLite implementations
    "SQLiteProgressRepository",
    "SQLiteWritingAnswerRepository",
    # Connection utilities
    "get_connection",
    "init_schema",
    "DEFAULT_DB_PATH",
    # Factory functions
    "get_progress_repo",
    "get_writing_answer_repo",
]


def get_progress_repo(db_path: Path = DEFAULT_DB_PATH) -> ProgressRepository:
    """Get a ProgressRepository instance."""
    return SQLiteProgressRepository(db_path)


def get_writing_answer_repo(
    db_path: Path = DEFAULT_DB_PATH,
) -> WritingAnswerRepository:
    """Get a WritingAnswerRepository instance."""
    return SQLiteWritingAnswerRepository(db_path)
