"""
WSGI entry point for production deployment (gunicorn).

Usage:
    gunicorn -c gunicorn.conf.py wsgi:app
"""

import sys

from reviewsite.config import ProductionConfig

# Fail fast with a clear message instead of a traceback from create_app().
if not ProductionConfig.SECRET_KEY:
    print(
        'FATAL: SECRET_KEY environment variable is required.\n'
        'Generate one with: python -c "import secrets; print(secrets.token_hex(32))"',
        file=sys.stderr,
    )
    sys.exit(1)

from reviewsite import create_app  # noqa: E402

app = create_app(config_class=ProductionConfig)
