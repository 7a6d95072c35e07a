"""
Structured audit logging.

Account and review events are logged as one JSON object per line.
Events: signup_success, signup_failed, login_success, login_failed,
logout, csrf_failure, review_created, store_error.

Never logged: passwords, session ids, or raw request bodies.
"""

import json
import logging
import re
import time
from typing import Any, Dict

AUDIT_LOGGER_NAME = 'reviewsite.audit'

# Control characters that would let user input forge extra log lines.
_LOG_INJECTION_PATTERN = re.compile(r'[\x00-\x08\x0a-\x1f\x7f]')

_CONTEXT_FIELDS = (
    'ip',
    'user_agent',
    'request_id',
    'email',
    'username',
    'user_id',
    'review_id',
    'reason',
)


def sanitize_log_value(value: Any, max_length: int = 256) -> str:
    """Strip control characters and truncate a value for log output."""
    cleaned = _LOG_INJECTION_PATTERN.sub('', str(value))
    return cleaned[:max_length]


class AuditFormatter(logging.Formatter):
    """JSON formatter for audit events."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            'timestamp': time.strftime('%Y-%m-%dT%H:%M:%S%z', time.gmtime(record.created)),
            'level': record.levelname,
            'event': getattr(record, 'event', 'unknown'),
            'message': record.getMessage(),
        }

        for field in _CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = sanitize_log_value(value)

        return json.dumps(log_entry)


def setup_audit_logging(app) -> logging.Logger:
    """
    Configure the audit logger.

    Returns the dedicated 'reviewsite.audit' logger writing JSON to stderr.
    Safe to call once per create_app(); handlers are only attached once.
    """
    logger = logging.getLogger(AUDIT_LOGGER_NAME)
    logger.setLevel(logging.INFO)

    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(AuditFormatter())
    logger.addHandler(console_handler)

    return logger


def audit_log(event: str, message: str, level: int = logging.INFO, **context) -> None:
    """
    Log an audit event.

    Args:
        event: Event type (e.g., 'login_success', 'store_error')
        message: Human-readable description
        level: Logging level, INFO unless the event reports a failure
        **context: Extra fields (ip, user_agent, request_id, email, ...)
    """
    logger = logging.getLogger(AUDIT_LOGGER_NAME)
    extra = {'event': event}
    extra.update(context)
    logger.log(level, message, extra=extra)


def log_store_error(ctx, action: str, exc: Exception) -> None:
    """Store failures are shown to users generically and logged here in full."""
    audit_log(
        event='store_error',
        message=f'Store failure during {action}',
        level=logging.ERROR,
        reason=str(exc),
        **ctx.log_fields(),
    )
