"""
Gunicorn configuration for production deployment.

Usage:
    gunicorn -c gunicorn.conf.py wsgi:app

The in-memory rate limiter is per process; with several workers, point
RATELIMIT_STORAGE_URI at redis so limits are shared.
"""

import multiprocessing
import os

bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:8000')

# 2 * cores + 1, capped: page renders are cheap and bcrypt dominates.
workers = min(multiprocessing.cpu_count() * 2 + 1, 4)
worker_class = 'sync'

timeout = 30
graceful_timeout = 10
keepalive = 2

# Recycle workers periodically; jitter avoids simultaneous restarts.
max_requests = 1000
max_requests_jitter = 50

# Matches Flask's MAX_CONTENT_LENGTH ballpark for headers and request line.
limit_request_line = 8190
limit_request_fields = 50
limit_request_field_size = 8190

server_software = ''

# Access log: no bodies, cookies or authorization headers.
accesslog = '-'
errorlog = '-'
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" %(L)s'
loglevel = os.environ.get('LOG_LEVEL', 'info')

proc_name = 'reviewsite'

# Only trust X-Forwarded-* from the local reverse proxy.
forwarded_allow_ips = os.environ.get('FORWARDED_ALLOW_IPS', '127.0.0.1')
