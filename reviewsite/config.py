"""
Application configuration — session, CSRF, hashing and rate-limit settings.

Each environment is a class; create_app() loads one with from_object().
config_from_env() picks the class for the WSGI entry point.
"""

import os
import secrets


class BaseConfig:
    """Shared configuration for all environments."""

    # --- Flask Core ---
    # Signs the session id cookie and seeds CSRF tokens.
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)

    # Review comments are capped at 2000 chars; 16KB leaves ample headroom.
    MAX_CONTENT_LENGTH = 16 * 1024

    # --- Session Configuration (flask-session) ---
    # create_app() points SESSION_CACHELIB at a FileSystemCache in the instance folder.
    SESSION_TYPE = 'cachelib'
    SESSION_PERMANENT = True
    # One-hour idle timeout, renewed on every request.
    PERMANENT_SESSION_LIFETIME = 3600  # seconds
    SESSION_REFRESH_EACH_REQUEST = True
    SESSION_KEY_PREFIX = 'session:'

    # --- Session Cookie Flags ---
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_NAME = 'reviewsite_session'

    # --- CSRF (flask-wtf) ---
    # Token validity follows the session rather than a separate clock.
    WTF_CSRF_TIME_LIMIT = None

    # --- bcrypt ---
    BCRYPT_LOG_ROUNDS = 12

    # --- Rate Limiting (flask-limiter) ---
    RATELIMIT_ENABLED = True
    # Single-instance deployment; use redis:// when running several workers.
    RATELIMIT_STORAGE_URI = 'memory://'
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_DEFAULT = '200/hour'

    LOGIN_RATE_LIMIT = '10/minute'
    SIGNUP_RATE_LIMIT = '5/minute'
    REVIEW_RATE_LIMIT = '20/minute'

    # --- Reviews ---
    REVIEW_COMMENT_MAX_LENGTH = 2000

    # --- Database ---
    # SQLite file inside the Flask instance folder.
    DATABASE_NAME = os.environ.get('DATABASE_NAME', 'reviews.db')


class ProductionConfig(BaseConfig):
    """Production environment — secure cookies, mandatory secret."""

    DEBUG = False
    TESTING = False

    # Never fall back to a random key here: restarts would drop every session.
    SECRET_KEY = os.environ.get('SECRET_KEY')

    SESSION_COOKIE_SECURE = True

    # Number of reverse proxies in front of the app (nginx, ALB).
    PROXY_COUNT = int(os.environ.get('PROXY_COUNT', '1'))

    @classmethod
    def init_app(cls, app):
        """Validate required configuration at startup."""
        if not cls.SECRET_KEY:
            raise RuntimeError(
                'SECRET_KEY environment variable is required in production. '
                'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"'
            )


class DevelopmentConfig(BaseConfig):
    """Development environment — cookies allowed over plain HTTP."""

    DEBUG = True
    SESSION_COOKIE_SECURE = False


class TestConfig(BaseConfig):
    """Test environment — fast bcrypt, CSRF/rate-limiting off by default."""

    TESTING = True
    SESSION_COOKIE_SECURE = False
    # 4 rounds keeps each hash around a few milliseconds.
    BCRYPT_LOG_ROUNDS = 4
    RATELIMIT_ENABLED = False
    WTF_CSRF_ENABLED = False
    DATABASE_NAME = 'test.db'


class RateLimitTestConfig(TestConfig):
    """Test config with rate limiting enabled."""

    RATELIMIT_ENABLED = True


class CSRFTestConfig(TestConfig):
    """Test config with CSRF protection enabled."""

    WTF_CSRF_ENABLED = True


def config_from_env():
    """Return the config class named by REVIEWSITE_ENV (default: development)."""
    env = os.environ.get('REVIEWSITE_ENV', 'development').lower()
    if env == 'production':
        return ProductionConfig
    return DevelopmentConfig
