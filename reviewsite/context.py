"""
Per-request context passed explicitly into every handler.

Views build a RequestContext once and hand it to the handler and the
result dispatcher, so handlers never read the session or request globals
themselves. CSRFProtect runs as a before_request hook, so by the time a
view builds its context any POST has already passed token validation.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from flask import Flask, g, request

from reviewsite.logging_config import sanitize_log_value
from reviewsite.sessions import SessionUser, current_user


@dataclass(frozen=True)
class RequestContext:
    user: Optional[SessionUser]
    ip: str
    user_agent: str
    request_id: str

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @classmethod
    def from_request(cls) -> 'RequestContext':
        return cls(
            user=current_user(),
            ip=request.remote_addr or 'unknown',
            user_agent=sanitize_log_value(
                request.headers.get('User-Agent', 'unknown'),
                max_length=200,
            ),
            request_id=g.get('request_id', 'unknown'),
        )

    def log_fields(self) -> dict:
        """Fields attached to every audit log entry for this request."""
        return {
            'ip': self.ip,
            'user_agent': self.user_agent,
            'request_id': self.request_id,
        }


def init_request_ids(app: Flask) -> None:
    @app.before_request
    def set_request_id() -> None:
        g.request_id = str(uuid.uuid4())[:8]
