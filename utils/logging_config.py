"""
Logging configuration for the social graph backend

Every line carries the id of the request it was written under (``-`` outside
a request), the same id the API returns in the ``X-Request-ID`` header.
"""
import logging
import os

from flask import g, has_request_context

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'


class RequestIdFilter(logging.Filter):
    """Stamp records with the current request id"""

    def filter(self, record):
        if not hasattr(record, 'request_id'):
            record.request_id = g.get('request_id', '-') if has_request_context() else '-'
        return True


def resolve_level(level=None):
    """Explicit level, else LOG_LEVEL, else DEBUG in development and INFO otherwise"""
    if level is not None:
        return level
    named = logging.getLevelName(os.environ.get('LOG_LEVEL', '').upper())
    if isinstance(named, int):
        return named
    return logging.DEBUG if os.environ.get('FLASK_ENV') == 'development' else logging.INFO


def setup_logger(name, level=None):
    level = resolve_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    return logger


def log_error(logger, error, context=None):
    """Unexpected failure, with traceback"""
    error_msg = f"{type(error).__name__}: {error}"
    if context:
        error_msg += f" | {context}"
    logger.error(error_msg, exc_info=True)


def log_audit(logger, user_id, action, details=None):
    """One AUDIT line per state change made on behalf of a user"""
    audit_msg = f"AUDIT: User {user_id} | Action: {action}"
    if details:
        audit_msg += f" | Details: {details}"
    logger.info(audit_msg)
