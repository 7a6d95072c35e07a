"""
Review store — review records joined with their authors.

Every read returns the author already resolved, so templates never
issue follow-up queries.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from reviewsite.db import get_db, translate_errors

_SELECT_WITH_AUTHOR = '''
    SELECT r.id, r.rating, r.comment, r.created_at,
           u.id AS author_id, u.username AS author_username
    FROM reviews r
    JOIN users u ON u.id = r.user_id
'''


@dataclass(frozen=True)
class Author:
    id: int
    username: str


@dataclass(frozen=True)
class Review:
    id: int
    author: Author
    rating: int
    comment: str
    created_at: datetime

    @classmethod
    def from_row(cls, row) -> 'Review':
        return cls(
            id=row['id'],
            author=Author(id=row['author_id'], username=row['author_username']),
            rating=row['rating'],
            comment=row['comment'],
            created_at=datetime.fromisoformat(row['created_at']),
        )


def create_review(user_id: int, rating: int, comment: str,
                  created_at: Optional[datetime] = None) -> int:
    """
    Insert a review owned by user_id and return its id.

    The comment is stored trimmed. The table's CHECK constraints reject
    ratings outside 1..5 and empty comments.

    Raises:
        StoreError: the insert failed, including constraint violations.
    """
    if created_at is None:
        created_at = datetime.now(timezone.utc)
    with translate_errors('create review'):
        db = get_db()
        cursor = db.execute(
            'INSERT INTO reviews (user_id, rating, comment, created_at) VALUES (?, ?, ?, ?)',
            (user_id, rating, comment.strip(), created_at.isoformat()),
        )
        db.commit()
    return cursor.lastrowid


def list_reviews() -> List[Review]:
    """All reviews with authors, newest first."""
    with translate_errors('list reviews'):
        rows = get_db().execute(
            _SELECT_WITH_AUTHOR + ' ORDER BY r.created_at DESC, r.id DESC'
        ).fetchall()
    return [Review.from_row(row) for row in rows]


def get_review(review_id: int) -> Optional[Review]:
    with translate_errors('get review'):
        row = get_db().execute(
            _SELECT_WITH_AUTHOR + ' WHERE r.id = ?',
            (review_id,),
        ).fetchone()
    return Review.from_row(row) if row is not None else None
