"""
API error types shared by services, auth and the central error handler
"""


class ApiError(Exception):
    """Base error carrying an HTTP status, a title and field-level messages"""
    status = 500
    title = 'Internal server error'

    def __init__(self, message=None, errors=None, title=None, status=None):
        super().__init__(message or self.title)
        self.message = message or self.title
        self.errors = list(errors) if errors else [self.message]
        if title is not None:
            self.title = title
        if status is not None:
            self.status = status

    def to_dict(self):
        return {
            'error': self.message,
            'title': self.title,
            'errors': self.errors,
        }


class ValidationError(ApiError):
    status = 400
    title = 'Bad request.'


class AuthError(ApiError):
    status = 401
    title = 'Unauthorized'


class NotFoundError(ApiError):
    status = 404
    title = 'Not found.'


class ConflictError(ApiError):
    status = 409
    title = 'Conflict'


def user_not_found(user_id):
    """Standard 404 for a missing user"""
    return NotFoundError(
        'User not found',
        errors=[f'User with id of {user_id} could not be found.'],
        title='User not found.'
    )


def not_authorized(action):
    """Standard 401 for owner-only operations, e.g. action='edit this user'"""
    return AuthError(f'You are not authorized to {action}.')
