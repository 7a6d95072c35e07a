"""
Credential store — user records in SQLite.

Uniqueness of username and email is enforced by the table's UNIQUE
constraints; create_user() does not pre-check, so concurrent signups
for the same name cannot both succeed.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from reviewsite.db import get_db, translate_errors


@dataclass(frozen=True)
class User:
    """A registered account. password_hash is a bcrypt hash, never plaintext."""

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime

    @classmethod
    def from_row(cls, row) -> 'User':
        return cls(
            id=row['id'],
            username=row['username'],
            email=row['email'],
            password_hash=row['password_hash'],
            created_at=datetime.fromisoformat(row['created_at']),
        )


def create_user(username: str, email: str, password_hash: str) -> User:
    """
    Insert a new user.

    Raises:
        DuplicateEntityError: username or email is already taken.
        StoreError: any other database failure.
    """
    created_at = datetime.now(timezone.utc)
    with translate_errors('create user'):
        db = get_db()
        cursor = db.execute(
            'INSERT INTO users (username, email, password_hash, created_at) VALUES (?, ?, ?, ?)',
            (username, email, password_hash, created_at.isoformat()),
        )
        db.commit()
    return User(
        id=cursor.lastrowid,
        username=username,
        email=email,
        password_hash=password_hash,
        created_at=created_at,
    )


def get_user_by_email(email: str) -> Optional[User]:
    """Look up a user by normalized email address."""
    with translate_errors('get user by email'):
        row = get_db().execute(
            'SELECT id, username, email, password_hash, created_at FROM users WHERE email = ?',
            (email,),
        ).fetchone()
    return User.from_row(row) if row is not None else None


def count_users() -> int:
    with translate_errors('count users'):
        return get_db().execute('SELECT COUNT(*) FROM users').fetchone()[0]
