"""
Session manager — server-side sessions via flask-session.

The cookie holds only a random opaque id. The stored record carries the
authenticated identity and, once a form has been rendered, flask-wtf's
CSRF secret.
"""

from dataclasses import dataclass
from typing import Optional

from flask import current_app, session

SESSION_USER_KEY = 'user'


@dataclass(frozen=True)
class SessionUser:
    """Identity stored in the session after signup or login."""

    id: int
    username: str
    email: str


def establish_session(user) -> Optional[str]:
    """
    Start an authenticated session for user and return its id.

    Existing session data is dropped and the session id is regenerated,
    so a pre-login session id cannot be carried into the authenticated
    session.
    """
    session.clear()
    session[SESSION_USER_KEY] = {
        'id': user.id,
        'username': user.username,
        'email': user.email,
    }
    session.permanent = True  # PERMANENT_SESSION_LIFETIME idle timeout applies
    # regenerate() skips empty sessions, so it runs after the identity is stored.
    current_app.session_interface.regenerate(session)
    return session.sid


def current_user() -> Optional[SessionUser]:
    """Return the session's identity, or None for anonymous visitors."""
    data = session.get(SESSION_USER_KEY)
    if not data:
        return None
    return SessionUser(id=data['id'], username=data['username'], email=data['email'])


def destroy_session() -> None:
    """
    Drop all server-side session data.

    flask-session deletes the cookie when it saves an emptied session,
    so this is safe to call when no session exists.
    """
    session.clear()
