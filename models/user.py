from datetime import datetime
from social_backend import db

# JSON key -> column attribute for the profile fields a user may edit
PROFILE_FIELDS = {
    'userName': 'user_name',
    'email': 'email',
    'firstName': 'first_name',
    'lastName': 'last_name',
    'bio': 'bio',
    'profilePicPath': 'profile_pic_path',
    'age': 'age',
    'gender': 'gender',
}


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    user_name = db.Column(db.String(50), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    hashed_password = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(50))
    last_name = db.Column(db.String(50))
    bio = db.Column(db.Text)
    profile_pic_path = db.Column(db.String(500))
    age = db.Column(db.Integer)
    gender = db.Column(db.String(20))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<User {self.user_name}>'

    def to_summary(self):
        """Projection used in follower/following lists"""
        return {'id': self.id, 'userName': self.user_name}

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        data = {key: getattr(self, attr) for key, attr in PROFILE_FIELDS.items()}
        data['id'] = self.id
        data['createdAt'] = self.created_at.isoformat() if self.created_at else None
        data['updatedAt'] = self.updated_at.isoformat() if self.updated_at else None
        return data
