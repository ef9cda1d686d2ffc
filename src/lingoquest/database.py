import os
import sqlite3
from typing import Any, Dict, List

from .config import settings

MAX_EVENTS = 50


def get_db_connection():
    """Establishes a connection to the SQLite event database."""
    db_path = os.path.join(settings.DB_DIR, settings.DB_FILE)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def create_event_table():
    """Creates the events table if it doesn't exist."""
    conn = get_db_connection()
    with conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS events (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
                level TEXT,
                logger TEXT,
                message TEXT
            );
        """
        )
    conn.close()


def fetch_events(limit: int = MAX_EVENTS) -> List[Dict[str, Any]]:
    """Returns the most recent events, newest first."""
    limit = max(1, min(limit, MAX_EVENTS))
    conn = get_db_connection()
    try:
        rows = conn.execute(
            "SELECT id, timestamp, level, logger, message FROM events "
            "ORDER BY id DESC LIMIT ?",
            (limit,),
        ).fetchall()
    finally:
        conn.close()
    return [dict(row) for row in rows]


def init_db():
    """Initializes the database and creates necessary tables."""
    if not os.path.exists(settings.DB_DIR):
        os.makedirs(settings.DB_DIR, exist_ok=True)
    create_event_table()
