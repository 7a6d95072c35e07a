"""
Flask application factory.

Creates the review site with its session, CSRF, hashing and rate-limit
extensions, then registers the auth and reviews blueprints.

Extension initialization order:
1. bcrypt — needed before init_dummy_hash runs
2. csrf — registers the before_request hook that rejects forged POSTs
3. session — server-side session storage
4. limiter — honours RATELIMIT_ENABLED from the config class
"""

import os

from cachelib.file import FileSystemCache
from flask import Flask, render_template

from reviewsite.config import DevelopmentConfig


def create_app(config_class=None, instance_path=None):
    """
    Create and configure the Flask application.

    Args:
        config_class: Configuration class to use. Defaults to DevelopmentConfig.
        instance_path: Folder for the SQLite database and session files.
                       Tests pass a tmp_path so every app is isolated.

    Returns:
        Configured Flask application instance.
    """
    if config_class is None:
        config_class = DevelopmentConfig

    app = Flask(
        __name__,
        instance_path=instance_path,
        static_folder='static',
        static_url_path='/static',
    )
    app.config.from_object(config_class)

    if hasattr(config_class, 'init_app'):
        config_class.init_app(app)

    # Behind nginx/ALB, take the client IP and scheme from X-Forwarded-*
    # so rate limits and audit logs see the real client.
    proxy_count = app.config.get('PROXY_COUNT', 0)
    if proxy_count:
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_count, x_proto=proxy_count)

    os.makedirs(app.instance_path, exist_ok=True)

    # Session records live beside the database in the instance folder.
    session_dir = os.path.join(app.instance_path, 'flask_sessions')
    os.makedirs(session_dir, exist_ok=True)
    app.config['SESSION_CACHELIB'] = FileSystemCache(cache_dir=session_dir, threshold=500)

    # --- Request ids for log correlation ---
    # Registered before CSRFProtect so rejected requests still carry an id.
    from reviewsite.context import init_request_ids
    init_request_ids(app)

    # --- Initialize Extensions ---

    from reviewsite.extensions import bcrypt, csrf, limiter, sess

    bcrypt.init_app(app)
    csrf.init_app(app)
    sess.init_app(app)
    limiter.init_app(app)
    # The limiter is shared across apps (tests create many); decorators stay
    # in place but skip enforcement when RATELIMIT_ENABLED is off.
    limiter.enabled = app.config.get('RATELIMIT_ENABLED', True)

    # --- Security Headers ---
    from reviewsite.headers import init_security_headers
    init_security_headers(app)

    # --- Logging ---
    from reviewsite.logging_config import setup_audit_logging
    setup_audit_logging(app)

    from reviewsite.auth.security import init_dummy_hash
    with app.app_context():
        init_dummy_hash(app)

    # --- Register Blueprints ---
    from reviewsite.auth import auth_bp
    from reviewsite.reviews import reviews_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(reviews_bp)

    # --- CSRF Error Handler ---
    from flask_wtf.csrf import CSRFError
    from reviewsite.auth.security import log_csrf_failure

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        """Reject the forged or stale submission before any handler runs."""
        log_csrf_failure(e.description)
        return render_template('errors/400.html'), 400

    # --- HTTP Error Handlers ---

    @app.errorhandler(429)
    def handle_rate_limit(e):
        return render_template('errors/429.html'), 429

    @app.errorhandler(404)
    def handle_not_found(e):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def handle_server_error(e):
        """Internal server error — no stack traces or internal details."""
        return render_template('errors/500.html'), 500

    @app.errorhandler(413)
    def handle_request_too_large(e):
        return render_template('errors/413.html'), 413

    # --- Database Initialization ---
    from reviewsite.db import close_db, init_db

    app.teardown_appcontext(close_db)

    with app.app_context():
        init_db(app)

    return app
