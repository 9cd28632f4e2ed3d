"""
Input validation utilities

Routes declare a list of ``Rule`` objects and call ``validate`` on the
request body before any service logic runs.
"""
import re

from utils.errors import ValidationError

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'

# Largest value an INTEGER column (ids, age) holds on every supported backend
MAX_INT = 2 ** 31 - 1


def validate_email(email):
    """Validate email format"""
    if not email or not isinstance(email, str):
        return False

    return re.match(EMAIL_PATTERN, email) is not None


def exists(value):
    """Present and truthy (empty strings and zero-length values fail)"""
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None and value != [] and value != {}


def is_str(value):
    return isinstance(value, str)


def max_length(limit):
    def check(value):
        return len(value) <= limit
    return check


def no_markup(value):
    return not re.search(r'[<>]', value)


def is_int(value):
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and value.strip().isdigit()


def non_negative(value):
    return int(value) >= 0


def within_int_range(value):
    return int(value) <= MAX_INT


def is_id(value):
    """A positive integer that fits an id column"""
    return is_int(value) and 1 <= int(value) <= MAX_INT


class Rule:
    """One field check: every function in ``checks`` must accept the value"""

    def __init__(self, field, *checks, message, optional=False, nullable=False):
        self.field = field
        self.checks = checks
        self.message = message
        # optional: the field may be left out; nullable: null/empty is accepted as a value
        self.optional = optional
        self.nullable = nullable

    def passes(self, data):
        if self.optional and self.field not in data:
            return True
        value = data.get(self.field)
        if self.nullable and (value is None or value == ''):
            return True
        return all(check(value) for check in self.checks)


def validate(data, rules):
    """Run all rules against ``data``; raise one ValidationError listing every failure"""
    if not isinstance(data, dict):
        raise ValidationError('Bad request.', errors=['Request body must be a JSON object.'])

    errors = [rule.message for rule in rules if not rule.passes(data)]
    if errors:
        raise ValidationError('Bad request.', errors=errors)
    return data


def text_rule(field, label, limit=None):
    """Optional, nullable free-text profile field"""
    checks = (is_str,) if limit is None else (is_str, max_length(limit))
    message = f'{label} must be text' + (f' of at most {limit} characters.' if limit else '.')
    return Rule(field, *checks, message=message, optional=True, nullable=True)


AGE_RULE = Rule('age', is_int, non_negative, within_int_range,
                message='Age must be a non-negative whole number.', optional=True, nullable=True)

PROFILE_TEXT_RULES = [
    text_rule('firstName', 'First name', 50),
    text_rule('lastName', 'Last name', 50),
    text_rule('bio', 'Bio'),
    text_rule('profilePicPath', 'Profile picture path', 500),
    text_rule('gender', 'Gender', 20),
]

USER_NAME_RULES = [
    Rule('userName', is_str, exists, message='Please provide a username'),
    Rule('userName', is_str, max_length(50), no_markup,
         message='Username must be at most 50 characters and may not contain < or >.', optional=True),
]

CREDENTIAL_RULES = [
    Rule('email', is_str, exists, validate_email, message='Please provide a valid email.'),
    Rule('password', is_str, exists, message='Please provide a password.'),
]

REGISTER_RULES = USER_NAME_RULES + CREDENTIAL_RULES + [AGE_RULE] + PROFILE_TEXT_RULES

UPDATE_RULES = [
    Rule('userName', is_str, exists, message='Please provide a username', optional=True),
] + USER_NAME_RULES[1:] + [
    Rule('email', validate_email, message='Please provide a valid email.', optional=True),
    AGE_RULE,
] + PROFILE_TEXT_RULES
