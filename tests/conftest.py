# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# The backend reads its configuration from the environment at import time,
# so the test environment is set up before social_backend is imported.
# =============================================================================

import os

os.environ['DATABASE_URL'] = 'sqlite://'
os.environ.setdefault('SECRET_KEY', 'test-secret-key-for-the-social-graph-suite')
os.environ['BCRYPT_LOG_ROUNDS'] = '4'
os.environ['RATELIMIT_ENABLED'] = 'false'
os.environ['FORCE_HTTPS'] = 'false'

import pytest

from social_backend import app as flask_app, db


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Application with a fresh schema for every test."""
    flask_app.config['TESTING'] = True
    with flask_app.app_context():
        db.create_all()
    yield flask_app
    with flask_app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def register(client):
    """Register a user through the API; returns (id, auth headers, token)."""
    def _register(user_name, email=None, password='correct-horse', **profile):
        body = {
            'userName': user_name,
            'email': email or f'{user_name}@example.com',
            'password': password,
        }
        body.update(profile)
        response = client.post('/api/users', json=body)
        assert response.status_code == 201, response.get_json()
        data = response.get_json()
        return data['user']['id'], auth_header(data['token']), data['token']
    return _register
