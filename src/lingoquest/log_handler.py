import logging

from .database import get_db_connection


class SQLiteHandler(logging.Handler):
    """
    A logging handler that stores engine events in the SQLite events table.
    """

    def emit(self, record):
        try:
            conn = get_db_connection()
            with conn:
                conn.execute(
                    "INSERT INTO events (level, logger, message) VALUES (?, ?, ?)",
                    (record.levelname, record.name, self.format(record)),
                )
            conn.close()
        except Exception:
            self.handleError(record)
