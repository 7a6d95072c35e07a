"""
Pytest fixtures for the review site test suite.

Provides app configurations that isolate individual controls:
- app/client: Base test config (CSRF off, rate limiting off)
- csrf_app/csrf_client: CSRF enabled
- rate_limit_app/rate_limit_client: Rate limiting enabled

Every app gets its own tmp_path instance folder, so the SQLite file and
session files never leak between tests.
"""

import re

import pytest

from reviewsite import create_app
from reviewsite.config import CSRFTestConfig, RateLimitTestConfig, TestConfig

ANN = {
    'username': 'ann',
    'email': 'a@x.com',
    'password': 'pw1',
    'confirm_password': 'pw1',
}


def extract_csrf_token(html: str) -> str:
    match = re.search(r'name="csrf_token"[^>]*value="([^"]+)"', html)
    assert match, 'CSRF token not found in form'
    return match.group(1)


@pytest.fixture
def app(tmp_path):
    """Create a Flask app with the base test configuration."""
    return create_app(TestConfig, instance_path=str(tmp_path))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def csrf_app(tmp_path):
    """Create a Flask app with CSRF protection enabled."""
    return create_app(CSRFTestConfig, instance_path=str(tmp_path))


@pytest.fixture
def csrf_client(csrf_app):
    return csrf_app.test_client()


@pytest.fixture
def rate_limit_app(tmp_path):
    """Create a Flask app with rate limiting enabled."""
    return create_app(RateLimitTestConfig, instance_path=str(tmp_path))


@pytest.fixture
def rate_limit_client(rate_limit_app):
    return rate_limit_app.test_client()


@pytest.fixture
def registered_user(app):
    """Insert 'ann' directly through the store, without logging in."""
    from reviewsite.auth.models import create_user
    from reviewsite.auth.security import hash_password

    with app.app_context():
        return create_user(ANN['username'], ANN['email'], hash_password(ANN['password']))


@pytest.fixture
def authenticated_client(client):
    """Test client that has signed up as 'ann' and holds its session."""
    response = client.post('/signup', data=ANN)
    assert response.status_code == 302
    return client
