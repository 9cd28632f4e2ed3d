"""Entry point: create tables and serve the API with Flask's server.

Usage:
    python run.py

For production run a WSGI server against ``social_backend:app`` instead,
for example ``gunicorn social_backend:app``.
"""
import os

from init_db import init_database
from social_backend import app


if __name__ == '__main__':
    init_database()

    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=os.environ.get('FLASK_ENV') == 'development')
