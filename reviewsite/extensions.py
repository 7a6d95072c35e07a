"""
Flask extension instances — created here, initialized in the app factory.

Kept apart from __init__.py so blueprints can import them without
circular imports.
"""

from flask_bcrypt import Bcrypt
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_session import Session
from flask_wtf.csrf import CSRFProtect

# Password hashing for stored user credentials.
bcrypt = Bcrypt()

# Validates the session-bound token on every POST before views run.
csrf = CSRFProtect()

# Server-side sessions; the cookie only carries a random opaque id.
sess = Session()

# Per-client-IP limits on the form submission endpoints.
# Storage and defaults come from RATELIMIT_* config keys.
limiter = Limiter(key_func=get_remote_address)
