"""
Persistence access for users

Repositories add, change and flush rows; committing or rolling back is
left to the calling service.
"""
from models.user import User


class UserRepository:
    def __init__(self, db):
        self.db = db

    def find_by_id(self, user_id):
        return self.db.session.get(User, user_id)

    def find_by_email(self, email):
        return User.query.filter_by(email=email).first()

    def find_by_user_name(self, user_name):
        return User.query.filter_by(user_name=user_name).first()

    def find_all(self):
        return User.query.order_by(User.id).all()

    def create(self, **fields):
        user = User(**fields)
        self.db.session.add(user)
        self.db.session.flush()
        return user

    def update(self, user, **fields):
        for attr, value in fields.items():
            setattr(user, attr, value)
        self.db.session.flush()
        return user

    def delete(self, user):
        self.db.session.delete(user)
        self.db.session.flush()
