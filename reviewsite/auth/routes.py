"""
Authentication routes — signup, login, logout.

Request flow (signup/login POST):
1. CSRF validation (flask-wtf before_request hook) — before we see the request
2. Rate limiter (flask-limiter decorator)
3. WTForms validation — input constraints
4. Store call — insert, or timing-safe credential check
5. Session establishment and audit logging

Each view builds a RequestContext, calls its handler, and passes the
Ok/Err result to render_result().
"""

from flask import current_app

from reviewsite.auth import auth_bp
from reviewsite.auth.forms import LoginForm, SignupForm, first_error
from reviewsite.auth.models import create_user
from reviewsite.auth.security import (
    hash_password,
    log_login_failed,
    log_login_success,
    log_logout,
    log_signup_failed,
    log_signup_success,
    verify_credentials,
)
from reviewsite.context import RequestContext
from reviewsite.errors import DuplicateEntityError, StoreError
from reviewsite.extensions import limiter
from reviewsite.logging_config import log_store_error
from reviewsite.results import Err, ErrorKind, Ok, render_result
from reviewsite.sessions import destroy_session, establish_session

INVALID_CREDENTIALS = 'Invalid email or password.'
DUPLICATE_USER = 'A user with that username or email already exists.'


# --- Handlers ---

def handle_signup(ctx: RequestContext, form: SignupForm):
    if ctx.is_authenticated:
        return Ok.redirect('reviews.index')

    if not form.is_submitted():
        return Ok.page('signup.html', form=form)

    if not form.validate():
        log_signup_failed(ctx, form.email.data or '', reason='validation')
        return Err(ErrorKind.VALIDATION, first_error(form), 'signup.html', {'form': form})

    # The UNIQUE constraints are the only duplicate guard; no pre-check.
    try:
        user = create_user(
            username=form.username.data,
            email=form.email.data,
            password_hash=hash_password(form.password.data),
        )
    except DuplicateEntityError:
        log_signup_failed(ctx, form.email.data, reason='duplicate')
        return Err(ErrorKind.DUPLICATE, DUPLICATE_USER, 'signup.html', {'form': form})
    except StoreError as exc:
        log_store_error(ctx, 'signup', exc)
        return Err(
            ErrorKind.STORE,
            'Something went wrong while creating your account. Please try again.',
            'signup.html',
            {'form': form},
        )

    establish_session(user)
    log_signup_success(ctx, user)
    return Ok.redirect('reviews.index')


def handle_login(ctx: RequestContext, form: LoginForm):
    if ctx.is_authenticated:
        return Ok.redirect('reviews.index')

    if not form.is_submitted():
        return Ok.page('login.html', form=form)

    if not form.validate():
        return Err(ErrorKind.VALIDATION, first_error(form), 'login.html', {'form': form})

    email = form.email.data
    try:
        user = verify_credentials(email, form.password.data)
    except StoreError as exc:
        log_store_error(ctx, 'login', exc)
        return Err(
            ErrorKind.STORE,
            'Something went wrong while signing you in. Please try again.',
            'login.html',
            {'form': form},
        )

    if user is None:
        log_login_failed(ctx, email)
        # Same message whether the email or the password was wrong.
        return Err(ErrorKind.AUTHENTICATION, INVALID_CREDENTIALS, 'login.html', {'form': form})

    establish_session(user)
    log_login_success(ctx, user)
    return Ok.redirect('reviews.index')


def handle_logout(ctx: RequestContext):
    destroy_session()
    log_logout(ctx)
    return Ok.redirect('auth.login')


# --- Routes ---

@auth_bp.route('/signup', methods=['GET', 'POST'])
@limiter.limit(
    lambda: current_app.config.get('SIGNUP_RATE_LIMIT', '5/minute'),
    methods=['POST'],
)
def signup():
    ctx = RequestContext.from_request()
    return render_result(handle_signup(ctx, SignupForm()), ctx)


@auth_bp.route('/login', methods=['GET', 'POST'])
@limiter.limit(
    lambda: current_app.config.get('LOGIN_RATE_LIMIT', '10/minute'),
    methods=['POST'],
)
def login():
    ctx = RequestContext.from_request()
    return render_result(handle_login(ctx, LoginForm()), ctx)


@auth_bp.route('/logout')
def logout():
    """
    Logout is a plain GET link. It only removes state, and it succeeds
    whether or not a session exists. Nothing is flashed afterwards:
    an empty session is what makes flask-session delete the cookie.
    """
    ctx = RequestContext.from_request()
    return render_result(handle_logout(ctx), ctx)
