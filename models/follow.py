"""User following relationships model"""
from social_backend import db
from datetime import datetime


class Follow(db.Model):
    __tablename__ = 'follows'

    id = db.Column(db.Integer, primary_key=True)
    follower_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    following_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # One edge per pair, and nobody follows themselves
    __table_args__ = (
        db.UniqueConstraint('follower_id', 'following_id', name='unique_user_follow'),
        db.CheckConstraint('follower_id <> following_id', name='no_self_follow'),
    )

    def __repr__(self):
        return f'<Follow {self.follower_id} -> {self.following_id}>'

    def to_dict(self):
        return {
            'id': self.id,
            'followerId': self.follower_id,
            'followingId': self.following_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }
