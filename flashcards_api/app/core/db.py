"""
SQLite database integration and simple migration system.

The ``Database`` object owns the path of the SQLite file and hands out
connections (``connect``) or a committing cursor (``cursor``).  One
instance is built at application startup and shared by the services;
there is no module level connection handle.

``init_db`` applies migrations on application start.  Applied
migration versions are stored in the ``migrations`` table and new
migrations are executed in order.  Migrations are additive only.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

# Fixed identity of the user seeded on every startup.
INITIAL_USER_ID = "0"
INITIAL_USERNAME = "initial_user"

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS decks (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT,
            user_id TEXT NOT NULL,
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS cards (
            id TEXT PRIMARY KEY,
            deck_id TEXT NOT NULL,
            front TEXT NOT NULL,
            back TEXT NOT NULL,
            FOREIGN KEY (deck_id) REFERENCES decks(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: indices on the foreign keys used for hydration and cascades
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_decks_user_id ON decks(user_id);
        CREATE INDEX IF NOT EXISTS idx_cards_deck_id ON cards(deck_id);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; anything else is resolved relative
    to the project root.  Every operation opens its own connection, so
    ``:memory:`` databases are not supported.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / database_url).resolve())


class Database:
    """Connection factory bound to a single SQLite file."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def connect(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed by
        name.  Foreign key enforcement is off by default in SQLite and
        must be enabled per connection; cascades depend on it.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and always close the connection."""
        conn = self.connect()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def init_db(self) -> None:
        """Initialise the database and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version, and applies any newer entries of
        ``MIGRATIONS``.  Finally the initial user is inserted unless it is
        already present, so calling this repeatedly is harmless.
        """
        with self.cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    logger.info("Applying migration %s", version)
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version

            cursor.execute(
                "INSERT OR IGNORE INTO users (id, username) VALUES (?, ?)",
                (INITIAL_USER_ID, INITIAL_USERNAME),
            )
        logger.info("Database ready at %s (schema version %s)", self.path, current_version)
