"""
Service for user registration, token issuance and profile CRUD
"""
from sqlalchemy.exc import IntegrityError

from auth.jwt_handler import generate_token
from models.user import PROFILE_FIELDS
from utils.errors import AuthError, ConflictError, user_not_found, not_authorized
from utils.logging_config import log_audit
from utils.security import sanitize_profile

# Free-text fields that are escaped before storage; userName is stored verbatim
TEXT_FIELDS = ('firstName', 'lastName', 'bio', 'gender')


def duplicate_user():
    return ConflictError('Email or username already in use',
                         errors=['A user with that email or username already exists.'])


class UserService:
    def __init__(self, db, users, follows, bcrypt, logger):
        self.db = db
        self.users = users
        self.follows = follows
        self.bcrypt = bcrypt
        self.logger = logger

    def _profile_columns(self, data):
        """Map the JSON profile keys present in ``data`` to column values"""
        present = {key: data[key] for key in PROFILE_FIELDS if key in data}
        present.update(sanitize_profile({key: value for key, value in present.items() if key in TEXT_FIELDS}))
        if present.get('userName'):
            present['userName'] = present['userName'].strip()
        if present.get('email'):
            present['email'] = present['email'].lower().strip()
        if 'age' in present:
            present['age'] = None if present['age'] in ('', None) else int(present['age'])
        return {PROFILE_FIELDS[key]: value for key, value in present.items()}

    def _check_unique(self, columns, user_id=None):
        email = columns.get('email')
        if email:
            existing = self.users.find_by_email(email)
            if existing and existing.id != user_id:
                raise ConflictError('Email already registered',
                                    errors=['A user with that email already exists.'])
        user_name = columns.get('user_name')
        if user_name:
            existing = self.users.find_by_user_name(user_name)
            if existing and existing.id != user_id:
                raise ConflictError('Username already taken',
                                    errors=['A user with that username already exists.'])

    def _save(self, context, write, *args, **kwargs):
        """Run a repository write and commit; unique-key races surface as a conflict"""
        try:
            result = write(*args, **kwargs)
            self.db.session.commit()
        except IntegrityError:
            self.db.session.rollback()
            self.logger.warning(f"{context}: unique constraint violated")
            raise duplicate_user()
        except Exception:
            self.db.session.rollback()
            raise
        return result

    def register(self, data):
        """Register new user; returns the new id and a token"""
        columns = self._profile_columns(data)
        self._check_unique(columns)

        columns['hashed_password'] = self.bcrypt.generate_password_hash(data['password']).decode('utf-8')
        user = self._save('Registration', self.users.create, **columns)

        log_audit(self.logger, user.id, 'register', user.email)
        return {
            'user': {'id': user.id},
            'token': generate_token(user.id)
        }

    def issue_token(self, email, password):
        """Exchange credentials for a token"""
        user = self.users.find_by_email(email.lower().strip())

        if not user or not self.bcrypt.check_password_hash(user.hashed_password, password):
            self.logger.info(f"Login failed for {email}")
            raise AuthError('Login failed', title='Login failed',
                            errors=['The provided credentials were invalid.'])

        log_audit(self.logger, user.id, 'login')
        return {'token': generate_token(user.id), 'user': {'id': user.id}}

    def list_all(self):
        return {'users': [user.to_dict() for user in self.users.find_all()]}

    def get_by_id(self, user_id):
        user = self.users.find_by_id(user_id)
        if not user:
            raise user_not_found(user_id)
        return {'user': user.to_dict()}

    def update(self, user_id, data, acting_user_id):
        """Owner-only partial update of the profile fields present in ``data``"""
        if acting_user_id != user_id:
            raise not_authorized('edit this user')

        user = self.users.find_by_id(user_id)
        if not user:
            raise user_not_found(user_id)

        columns = self._profile_columns(data)
        self._check_unique(columns, user_id=user.id)

        self._save('Update user', self.users.update, user, **columns)

        log_audit(self.logger, user.id, 'update_profile', sorted(data))
        return {'user': user.to_dict()}

    def delete(self, user_id, acting_user_id):
        """Owner-only delete; the user's follow edges go with it"""
        if acting_user_id != user_id:
            raise not_authorized('delete this user')

        user = self.users.find_by_id(user_id)
        if not user:
            raise user_not_found(user_id)

        try:
            removed = self.follows.delete_for_user(user.id)
            self.users.delete(user)
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            raise

        log_audit(self.logger, user_id, 'delete_account', f"{removed} follow edges removed")
        return {'message': f'Deleted user with id of {user_id}.'}
