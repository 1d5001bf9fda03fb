"""
history.py - Recently generated passwords.

A small first-in-first-out list: new passwords go on the end, and once
there are more than `max_size` the oldest ones fall off the front.

Storage is optional:
- No db_path: history lives in memory and is gone when the app closes
- db_path: history is mirrored into a SQLite table
- db_path + key: each stored password is Fernet-encrypted first, so the
  database file alone reveals nothing

Storage problems never break the generator. If the database can't be
read (corrupt file, wrong key) we log a warning and start with an empty
history; if a write fails we log it and keep going in memory.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from cryptography.fernet import InvalidToken

from core.encryption import decrypt, encrypt


logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 10


class PasswordHistory:
    """
    FIFO history of generated passwords, oldest first.

    Usage:
        history = PasswordHistory(max_size=10, db_path="history.db", key=key)
        history.add("kX9#mP2$vL4@nQ")
        history.get_all()   # ["kX9#mP2$vL4@nQ"]
        history.clear()
        history.close()
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        db_path: Optional[str] = None,
        key: Optional[bytes] = None,
    ):
        if max_size < 1:
            raise ValueError("History size must be at least 1.")

        self._max_size = max_size
        self.db_path = db_path
        self.key = key
        self.conn: Optional[sqlite3.Connection] = None
        self._history: list[str] = []

        if db_path is not None:
            self._connect()
            self._load()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def persistent(self) -> bool:
        """True while the history is backed by an open database."""
        return self.conn is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add(self, password: str):
        """Remember a password. Empty or non-string values are ignored."""
        if not password or not isinstance(password, str):
            return

        self._history.append(password)
        # Drop the oldest once we're over the limit
        del self._history[:-self._max_size]

        self._insert(password)

    def get_all(self) -> list[str]:
        """All remembered passwords, oldest to newest (a copy)."""
        return list(self._history)

    def clear(self):
        """Forget everything, in memory and on disk."""
        self._history = []
        self._write(("DELETE FROM history", ()))

    def close(self):
        """Close the database connection (the in-memory list stays usable)."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __len__(self) -> int:
        return len(self._history)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _connect(self):
        try:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS history (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    password BLOB NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            self.conn.commit()
        except sqlite3.Error as e:
            logger.warning("History storage unavailable (%s), keeping history in memory only", e)
            self.close()

    def _load(self):
        if self.conn is None:
            return

        try:
            cursor = self.conn.cursor()
            cursor.execute("SELECT password FROM history ORDER BY id")
            rows = cursor.fetchall()
            # Only the newest max_size entries are kept
            self._history = [self._decode(row["password"]) for row in rows][-self._max_size:]
        except (sqlite3.Error, InvalidToken, UnicodeDecodeError) as e:
            logger.warning("Failed to load password history, starting empty: %s", e)
            self._history = []

    def _insert(self, password: str):
        """Store one new row, then delete whatever fell off the front."""
        if self.conn is None:
            return

        created_at = datetime.now(timezone.utc).isoformat()
        self._write(
            (
                "INSERT INTO history (password, created_at) VALUES (?, ?)",
                (self._encode(password), created_at),
            ),
            # Evict by id so surviving rows keep their own timestamps
            (
                "DELETE FROM history WHERE id NOT IN "
                "(SELECT id FROM history ORDER BY id DESC LIMIT ?)",
                (self._max_size,),
            ),
        )

    def _write(self, *statements: tuple):
        """Run (sql, params) statements in a single transaction."""
        if self.conn is None:
            return

        cursor = self.conn.cursor()
        try:
            for sql, params in statements:
                cursor.execute(sql, params)
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            logger.warning("Failed to save password history: %s", e)

    def _encode(self, password: str) -> bytes:
        if self.key is None:
            return password.encode("utf-8")
        return encrypt(password, self.key)

    def _decode(self, value: bytes) -> str:
        if self.key is None:
            return bytes(value).decode("utf-8")
        return decrypt(bytes(value), self.key)
