"""
Service for handling user following functionality
"""
from sqlalchemy.exc import IntegrityError

from utils.errors import ConflictError, ValidationError, user_not_found, not_authorized
from utils.logging_config import log_audit
from utils.validators import is_id

NOT_FOLLOWING = 'You were not following this person.'


class FollowingService:
    def __init__(self, db, users, follows, logger):
        self.db = db
        self.users = users
        self.follows = follows
        self.logger = logger

    def _get_user(self, user_id):
        user = self.users.find_by_id(user_id)
        if not user:
            raise user_not_found(user_id)
        return user

    def list_followers(self, user_id):
        """Get a user together with the users following them"""
        user = self._get_user(user_id)
        data = user.to_dict()
        data['followers'] = [u.to_summary() for u in self.follows.list_followers(user.id)]
        return {'user': data}

    def list_following(self, user_id):
        """Get a user together with the users they follow"""
        user = self._get_user(user_id)
        data = user.to_dict()
        data['following'] = [u.to_summary() for u in self.follows.list_following(user.id)]
        return {'user': data}

    def follow(self, user_id, acting_user_id, target_id):
        """The acting user (who must own ``user_id``) starts following ``target_id``"""
        if acting_user_id != user_id:
            raise not_authorized('follow this user')

        if not is_id(target_id):
            raise ValidationError('Bad request.', errors=['Please provide the id of the user to follow.'])
        target_id = int(target_id)

        if target_id == acting_user_id:
            raise ValidationError('Cannot follow yourself', errors=['You cannot follow yourself.'])

        self._get_user(target_id)

        if self.follows.find_edge(acting_user_id, target_id):
            raise ConflictError('Already following this user', errors=['You are already following this user.'])

        try:
            follow = self.follows.create_edge(acting_user_id, target_id)
            self.db.session.commit()
        except IntegrityError:
            # A concurrent request inserted the same edge first
            self.db.session.rollback()
            raise ConflictError('Already following this user', errors=['You are already following this user.'])
        except Exception:
            self.db.session.rollback()
            raise

        log_audit(self.logger, acting_user_id, 'follow', f"user {target_id}")
        return {'follow': follow.to_dict()}

    def unfollow(self, user_id, acting_user_id, following_id):
        """Remove the edge user_id -> following_id; a missing edge is a soft failure"""
        if acting_user_id != user_id:
            raise not_authorized('unfollow this user')

        follow = self.follows.find_edge(user_id, following_id)
        if not follow:
            self.logger.info(f"User {user_id} tried to unfollow {following_id} without following")
            return {'err': [NOT_FOLLOWING]}

        try:
            self.follows.delete_edge(follow)
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            raise

        log_audit(self.logger, acting_user_id, 'unfollow', f"user {following_id}")
        return {'following': following_id}
