"""Persistence access for follow edges"""
from sqlalchemy import or_

from models.follow import Follow
from models.user import User


class FollowRepository:
    def __init__(self, db):
        self.db = db

    def find_edge(self, follower_id, following_id):
        return Follow.query.filter_by(
            follower_id=follower_id,
            following_id=following_id
        ).first()

    def create_edge(self, follower_id, following_id):
        follow = Follow(follower_id=follower_id, following_id=following_id)
        self.db.session.add(follow)
        self.db.session.flush()
        return follow

    def delete_edge(self, follow):
        self.db.session.delete(follow)
        self.db.session.flush()

    def list_followers(self, user_id):
        """Users following ``user_id``, in the order the edges were created"""
        return (User.query
                .join(Follow, Follow.follower_id == User.id)
                .filter(Follow.following_id == user_id)
                .order_by(Follow.id)
                .all())

    def list_following(self, user_id):
        """Users that ``user_id`` follows, in the order the edges were created"""
        return (User.query
                .join(Follow, Follow.following_id == User.id)
                .filter(Follow.follower_id == user_id)
                .order_by(Follow.id)
                .all())

    def delete_for_user(self, user_id):
        """Remove every edge touching ``user_id``; returns the number removed"""
        count = Follow.query.filter(
            or_(Follow.follower_id == user_id, Follow.following_id == user_id)
        ).delete(synchronize_session=False)
        self.db.session.flush()
        return count
