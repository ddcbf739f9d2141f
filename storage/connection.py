"""Database connection management and schema initialization."""

import sqlite3
from pathlib import Path

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "practice.db"

SCHEMA_SQL = """
-- Best score and attempt count per exercise
CREATE TABLE IF NOT EXISTS progress (
    exercise_id TEXT PRIMARY KEY,
    attempts INTEGER NOT NULL,
    best_score REAL NOT NULL
);

-- Submitted summaries and essays, kept for later review
CREATE TABLE IF NOT EXISTS writing_answers (
    exercise_id TEXT PRIMARY KEY,
    answer TEXT NOT NULL,
    submitted_at TEXT NOT NULL
);
"""


def get_connection(db_path: Path = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Get a database connection with appropriate settings.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A configured sqlite3 Connection object.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_schema(db_path: Path = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
