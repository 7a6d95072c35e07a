"""
Credential hashing, timing-safe verification, and account audit helpers.

Login failures never reveal whether the email exists: a missing user is
checked against a dummy bcrypt hash so both paths cost the same.
"""

from typing import Optional

from flask import g, request

from reviewsite.auth.models import User, get_user_by_email
from reviewsite.context import RequestContext
from reviewsite.extensions import bcrypt
from reviewsite.logging_config import audit_log, sanitize_log_value

DUMMY_HASH: Optional[str] = None


def init_dummy_hash(app) -> None:
    """Compute the dummy hash with the app's configured cost factor."""
    global DUMMY_HASH
    DUMMY_HASH = bcrypt.generate_password_hash('dummy_password_for_timing').decode('utf-8')


def hash_password(password: str) -> str:
    return bcrypt.generate_password_hash(password).decode('utf-8')


def verify_credentials(email: str, password: str) -> Optional[User]:
    """
    Return the matching user if the password verifies, else None.

    bcrypt always runs, even when no user has this email.
    The caller must not reveal which check failed.

    Raises:
        StoreError: the user lookup failed.
    """
    user = get_user_by_email(email)

    if user is not None:
        if bcrypt.check_password_hash(user.password_hash, password):
            return user
        return None

    bcrypt.check_password_hash(DUMMY_HASH, password)
    return None


# --- Audit events ---

def log_signup_success(ctx: RequestContext, user: User) -> None:
    audit_log(
        event='signup_success',
        message=f'New account {sanitize_log_value(user.username)}',
        username=user.username,
        email=user.email,
        user_id=user.id,
        **ctx.log_fields(),
    )


def log_signup_failed(ctx: RequestContext, email: str, reason: str) -> None:
    audit_log(
        event='signup_failed',
        message=f'Signup rejected for {sanitize_log_value(email)}: {reason}',
        email=email,
        reason=reason,
        **ctx.log_fields(),
    )


def log_login_success(ctx: RequestContext, user: User) -> None:
    audit_log(
        event='login_success',
        message=f'Successful login for {sanitize_log_value(user.email)}',
        email=user.email,
        user_id=user.id,
        **ctx.log_fields(),
    )


def log_login_failed(ctx: RequestContext, email: str, reason: str = 'invalid_credentials') -> None:
    audit_log(
        event='login_failed',
        message=f'Failed login for {sanitize_log_value(email)}: {reason}',
        email=email,
        reason=reason,
        **ctx.log_fields(),
    )


def log_logout(ctx: RequestContext) -> None:
    email = ctx.user.email if ctx.user else 'anonymous'
    audit_log(
        event='logout',
        message=f'Logout for {sanitize_log_value(email)}',
        email=email,
        **ctx.log_fields(),
    )


def log_csrf_failure(reason: str) -> None:
    """
    CSRF failures happen before any view builds a RequestContext,
    so the request fields are read directly here.
    """
    audit_log(
        event='csrf_failure',
        message='CSRF token validation failed',
        reason=reason,
        ip=request.remote_addr or 'unknown',
        user_agent=sanitize_log_value(request.headers.get('User-Agent', 'unknown'), max_length=200),
        request_id=g.get('request_id', 'unknown'),
    )
