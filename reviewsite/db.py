"""
SQLite connection management and schema.

Connections live on Flask's g object, one per request, and are closed at
app-context teardown. All queries elsewhere use ? placeholders.
"""

import os
import sqlite3
from contextlib import contextmanager

from flask import current_app, g

from reviewsite.errors import DuplicateEntityError, StoreError

SCHEMA = '''
    CREATE TABLE IF NOT EXISTS users (
        id            INTEGER PRIMARY KEY AUTOINCREMENT,
        username      TEXT UNIQUE NOT NULL,
        email         TEXT UNIQUE NOT NULL,
        password_hash TEXT NOT NULL,
        created_at    TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS reviews (
        id         INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id    INTEGER NOT NULL REFERENCES users (id),
        rating     INTEGER NOT NULL CHECK (rating BETWEEN 1 AND 5),
        comment    TEXT NOT NULL CHECK (length(comment) > 0),
        created_at TEXT NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_reviews_created_at
        ON reviews (created_at DESC, id DESC);
'''


def database_path(app) -> str:
    return os.path.join(app.instance_path, app.config['DATABASE_NAME'])


def _connect(path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute('PRAGMA foreign_keys = ON')
    return conn


def get_db() -> sqlite3.Connection:
    """
    Get a database connection for the current request.

    Raises:
        StoreError: if the database file cannot be opened.
    """
    if 'db' not in g:
        try:
            g.db = _connect(database_path(current_app))
            g.db.execute('PRAGMA journal_mode=WAL')
        except sqlite3.Error as exc:
            raise StoreError('could not open database') from exc
    return g.db


def close_db(exception=None) -> None:
    """Close the database connection at the end of the request."""
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db(app) -> None:
    """Create tables if missing. Idempotent; runs on every startup."""
    conn = _connect(database_path(app))
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()


@contextmanager
def translate_errors(action: str):
    """
    Re-raise sqlite3 errors as store errors.

    UNIQUE violations become DuplicateEntityError; anything else,
    including CHECK and foreign key failures, becomes StoreError.
    """
    try:
        yield
    except sqlite3.IntegrityError as exc:
        if 'UNIQUE' in str(exc):
            raise DuplicateEntityError(f'{action}: duplicate entry') from exc
        raise StoreError(f'{action}: {exc}') from exc
    except sqlite3.Error as exc:
        raise StoreError(f'{action}: {exc}') from exc
