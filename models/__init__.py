# models/__init__.py
from models.user import User, PROFILE_FIELDS
from models.follow import Follow

__all__ = ['User', 'Follow', 'PROFILE_FIELDS']
