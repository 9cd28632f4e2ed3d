import logging

import pytest
from flask import g

from utils.logging_config import RequestIdFilter, log_audit, log_error, resolve_level, setup_logger


def make_record(**extra):
    record = logging.LogRecord('social_graph', logging.INFO, __file__, 1, 'hello', None, None)
    record.__dict__.update(extra)
    return record


class TestRequestIdFilter:
    def test_outside_a_request(self):
        record = make_record()
        assert RequestIdFilter().filter(record)
        assert record.request_id == '-'

    def test_inside_a_request(self, app):
        with app.test_request_context('/api/health'):
            g.request_id = 'abc-123'
            record = make_record()
            RequestIdFilter().filter(record)
        assert record.request_id == 'abc-123'

    def test_explicit_request_id_is_kept(self, app):
        with app.test_request_context('/api/health'):
            g.request_id = 'abc-123'
            record = make_record(request_id='given')
            RequestIdFilter().filter(record)
        assert record.request_id == 'given'


class TestResolveLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'ERROR')
        assert resolve_level(logging.WARNING) == logging.WARNING

    def test_log_level_env(self, monkeypatch):
        monkeypatch.setenv('LOG_LEVEL', 'warning')
        assert resolve_level() == logging.WARNING

    @pytest.mark.parametrize('flask_env, expected', [
        ('development', logging.DEBUG),
        ('production', logging.INFO),
    ])
    def test_falls_back_to_flask_env(self, monkeypatch, flask_env, expected):
        monkeypatch.setenv('LOG_LEVEL', 'nonsense')
        monkeypatch.setenv('FLASK_ENV', flask_env)
        assert resolve_level() == expected


def test_setup_logger_adds_one_handler():
    logger = setup_logger('social_graph.test_setup', level=logging.INFO)
    setup_logger('social_graph.test_setup', level=logging.INFO)

    assert len(logger.handlers) == 1
    assert any(isinstance(f, RequestIdFilter) for f in logger.handlers[0].filters)


def test_audit_and_error_lines(caplog):
    logger = logging.getLogger('social_graph.test_lines')
    caplog.set_level(logging.INFO, logger='social_graph.test_lines')

    log_audit(logger, 7, 'follow', 'user 9')
    try:
        raise RuntimeError('disk full')
    except RuntimeError as error:
        log_error(logger, error, context='POST /api/users')

    audit, failure = caplog.records
    assert audit.getMessage() == 'AUDIT: User 7 | Action: follow | Details: user 9'
    assert failure.getMessage() == 'RuntimeError: disk full | POST /api/users'
    assert failure.exc_info is not None
