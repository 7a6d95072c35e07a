"""
Development entry point.

Usage:
    python run.py

Starts the Flask development server on http://localhost:$PORT (default 5000).
"""

import os

from reviewsite import create_app
from reviewsite.config import config_from_env

app = create_app(config_from_env())

if __name__ == '__main__':
    port = int(os.environ.get('PORT', '5000'))
    print(f'\n  Review site running on http://localhost:{port}\n')

    app.run(
        host='127.0.0.1',
        port=port,
        debug=app.config.get('DEBUG', False),
    )
