# repositories/__init__.py
from repositories.user_repository import UserRepository
from repositories.follow_repository import FollowRepository

__all__ = ['UserRepository', 'FollowRepository']
