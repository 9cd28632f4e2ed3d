from functools import wraps
from flask import request, g
from auth.jwt_handler import verify_token
from models.user import User
from utils.errors import AuthError, not_authorized

TOKEN_COOKIE = 'token'


def get_request_token(req):
    """Bearer token from the Authorization header, falling back to the token cookie"""
    auth_header = req.headers.get('Authorization', '')
    if auth_header:
        if not auth_header.startswith('Bearer '):
            raise AuthError('Invalid authorization header')
        return auth_header[len('Bearer '):].strip()
    return req.cookies.get(TOKEN_COOKIE)


def authenticate(req):
    """Resolve the request's token to a User or raise AuthError"""
    token = get_request_token(req)
    if not token:
        raise AuthError('Authentication required')

    payload = verify_token(token)
    if not payload:
        raise AuthError('Invalid or expired token')

    user = User.query.filter_by(id=payload['user_id']).first()
    if not user:
        raise AuthError('User not found')

    return user


def require_auth(f):
    """Authentication decorator"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = authenticate(request)

        # Add user to request context
        g.current_user = user

        return f(*args, **kwargs)
    return decorated_function


def require_owner(user_id, action):
    """Raise AuthError unless the authenticated user owns ``user_id``"""
    if g.current_user.id != user_id:
        raise not_authorized(action)
