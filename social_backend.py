"""
Social Graph Backend
Users, tokens, profiles and who-follows-whom.
"""
import os
import secrets
import uuid
from datetime import datetime, timedelta

# Flask imports
from flask import Flask, request, jsonify, g
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_talisman import Talisman
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from werkzeug.routing import IntegerConverter

# === LOGGING CONFIGURATION ===
from utils.logging_config import setup_logger, log_error

logger = setup_logger('social_graph')


def env_flag(name, default='false'):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


ALLOWED_ORIGINS = [
    origin.strip() for origin in os.environ.get(
        'ALLOWED_ORIGINS',
        'http://localhost:3000,http://localhost:5000,http://127.0.0.1:5000'
    ).split(',') if origin.strip()
]

# === CREATE FLASK APP ===
app = Flask(__name__)
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

# === FLASK CONFIGURATION ===
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', secrets.token_hex(32))
if 'SECRET_KEY' not in os.environ:
    logger.warning("SECRET_KEY not set - using a generated key, tokens will not survive a restart")

app.config.update(
    JWT_EXPIRATION_HOURS=int(os.environ.get('JWT_EXPIRATION_HOURS', 24)),
    BCRYPT_LOG_ROUNDS=int(os.environ.get('BCRYPT_LOG_ROUNDS', 10)),
    RATELIMIT_ENABLED=env_flag('RATELIMIT_ENABLED', 'true'),
    SESSION_COOKIE_HTTPONLY=True,
    SESSION_COOKIE_SAMESITE='Lax',
    PERMANENT_SESSION_LIFETIME=timedelta(hours=24)
)

# Database configuration
app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get(
    'DATABASE_URL',
    'sqlite:///social_graph.db'
).replace('postgres://', 'postgresql://')
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
if not app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        'pool_size': 20,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
        'max_overflow': 40,
        'pool_timeout': 30
    }

# === INITIALIZE EXTENSIONS ===
db = SQLAlchemy(app)
migrate = Migrate(app, db)
bcrypt = Bcrypt(app)
CORS(app, supports_credentials=True, origins=ALLOWED_ORIGINS)

# Security headers
Talisman(app,
    force_https=env_flag('FORCE_HTTPS'),
    strict_transport_security={'max_age': 31536000, 'include_subdomains': True},
    content_security_policy=False,
    frame_options='SAMEORIGIN'
)

# Rate limiting
limiter = Limiter(
    app=app,
    key_func=get_remote_address,
    default_limits=["5000 per day", "500 per hour"],
    storage_uri="memory://"
)

# === DATABASE MODELS ===
from models.user import User
from models.follow import Follow

# === AUTHENTICATION ===
from auth.decorators import require_auth, require_owner

# === SERVICES ===
from repositories import UserRepository, FollowRepository
from services.user_service import UserService
from services.following_service import FollowingService
from utils.errors import ApiError
from utils.validators import validate, MAX_INT, REGISTER_RULES, CREDENTIAL_RULES, UPDATE_RULES

user_repository = UserRepository(db)
follow_repository = FollowRepository(db)
user_service = UserService(db, user_repository, follow_repository, bcrypt, logger)
following_service = FollowingService(db, user_repository, follow_repository, logger)


class IdConverter(IntegerConverter):
    """Path ids: positive and within the INTEGER column range, anything else is a 404"""

    def __init__(self, url_map):
        super().__init__(url_map, min=1, max=MAX_INT)


app.url_map.converters['id'] = IdConverter


def request_body():
    """JSON body of the current request, or an empty dict"""
    return request.get_json(silent=True) or {}


# === REQUEST HANDLERS ===
@app.before_request
def before_request():
    g.request_id = str(uuid.uuid4())
    g.request_start_time = datetime.utcnow()

    logger.debug('request_started', extra={
        'method': request.method,
        'path': request.path,
        'remote_addr': request.remote_addr
    })


@app.after_request
def after_request(response):
    if hasattr(g, 'request_start_time'):
        duration = (datetime.utcnow() - g.request_start_time).total_seconds()

        logger.info(f"{request.method} {request.path} {response.status_code} "
                    f"{round(duration * 1000, 2)}ms", extra={
            'status_code': response.status_code,
        })

    response.headers['X-Request-ID'] = getattr(g, 'request_id', 'unknown')
    return response


# === API ENDPOINTS ===

# Health check
@app.route('/api/health', methods=['GET'])
def health_check():
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.utcnow().isoformat()
    })


# Account endpoints
@app.route('/api/users', methods=['POST'])
@limiter.limit("10 per hour")
def register():
    """Register new user"""
    data = validate(request_body(), REGISTER_RULES)
    return jsonify(user_service.register(data)), 201


@app.route('/api/users/token', methods=['POST'])
@limiter.limit("20 per minute")
def issue_token():
    """Exchange email and password for a token"""
    data = validate(request_body(), CREDENTIAL_RULES)
    return jsonify(user_service.issue_token(data['email'], data['password']))


@app.route('/api/users/all', methods=['GET'])
@require_auth
def list_users():
    """List every user"""
    return jsonify(user_service.list_all())


# Profile endpoints
@app.route('/api/users/<id:user_id>', methods=['GET'])
@require_auth
def get_user(user_id):
    return jsonify(user_service.get_by_id(user_id))


@app.route('/api/users/<id:user_id>', methods=['PUT'])
@require_auth
def update_user(user_id):
    """Update the caller's own profile"""
    require_owner(user_id, 'edit this user')
    data = validate(request_body(), UPDATE_RULES)
    return jsonify(user_service.update(user_id, data, g.current_user.id))


@app.route('/api/users/<id:user_id>', methods=['DELETE'])
@require_auth
def delete_user(user_id):
    """Delete the caller's own account"""
    return jsonify(user_service.delete(user_id, g.current_user.id))


# Following endpoints
@app.route('/api/users/<id:user_id>/followers', methods=['GET'])
def get_followers(user_id):
    return jsonify(following_service.list_followers(user_id))


@app.route('/api/users/<id:user_id>/following', methods=['GET'])
def get_following(user_id):
    return jsonify(following_service.list_following(user_id))


@app.route('/api/users/<id:user_id>/following', methods=['POST'])
@require_auth
def follow_user(user_id):
    """Follow the user whose id is given in the body"""
    target_id = request_body().get('id')
    return jsonify(following_service.follow(user_id, g.current_user.id, target_id))


@app.route('/api/users/<id:user_id>/following/<id:following_id>', methods=['DELETE'])
@require_auth
def unfollow_user(user_id, following_id):
    """Unfollow a user"""
    return jsonify(following_service.unfollow(user_id, g.current_user.id, following_id))


# === ERROR HANDLERS ===
@app.errorhandler(ApiError)
def api_error(error):
    if error.status >= 500:
        logger.error(f"{error.title}: {error.message}", exc_info=True)
    body = error.to_dict()
    body['request_id'] = getattr(g, 'request_id', 'unknown')
    return jsonify(body), error.status


@app.errorhandler(HTTPException)
def http_error(error):
    return jsonify({
        'error': error.name,
        'title': error.name,
        'errors': [error.description],
        'request_id': getattr(g, 'request_id', 'unknown')
    }), error.code


@app.errorhandler(Exception)
def internal_error(error):
    db.session.rollback()
    log_error(logger, error, context=f"{request.method} {request.path}")
    return jsonify({
        'error': 'Internal server error',
        'request_id': getattr(g, 'request_id', 'unknown')
    }), 500

