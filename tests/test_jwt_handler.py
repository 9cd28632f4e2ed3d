import jwt
import pytest

from auth.jwt_handler import JWT_ALGORITHM, generate_token, verify_token


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield


@pytest.mark.usefixtures('app_context')
class TestTokens:
    def test_round_trip_returns_user_id(self):
        payload = verify_token(generate_token(7))
        assert payload['user_id'] == 7
        assert payload['exp'] > payload['iat']

    def test_expired_token_is_rejected(self):
        assert verify_token(generate_token(7, expires_in=-1)) is None

    def test_foreign_signature_is_rejected(self):
        forged = jwt.encode({'user_id': 7}, 'some-other-secret-that-is-long-enough-to-sign', algorithm=JWT_ALGORITHM)
        assert verify_token(forged) is None

    def test_garbage_is_rejected(self):
        assert verify_token('not.a.token') is None

    def test_token_without_user_id_is_rejected(self, app):
        token = jwt.encode({'sub': 'someone'}, app.config['SECRET_KEY'], algorithm=JWT_ALGORITHM)
        assert verify_token(token) is None
