"""
Tests for AuthService.
"""
import pytest
from datetime import datetime, timedelta, timezone
import jwt

from healthgame.services.auth_service import AuthService
from healthgame.exceptions import (
    InvalidCredentialsException,
    InvalidTokenException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from healthgame.constants import JWT_ALGORITHM


class TestPasswords:

    def test_hash_is_not_plaintext_and_verifies(self):
        hashed = AuthService.hash_password("s3cret!")
        assert hashed != "s3cret!"
        assert AuthService.verify_password("s3cret!", hashed)
        assert not AuthService.verify_password("wrong", hashed)


class TestTokens:

    def test_token_resolves_user_id(self):
        token = AuthService.create_token(42)
        assert AuthService.decode_token(token) == 42

    def test_expired_token_rejected(self):
        token = AuthService.create_token(42, now=datetime.now(timezone.utc) - timedelta(days=30))
        with pytest.raises(InvalidTokenException) as exc:
            AuthService.decode_token(token)
        assert exc.value.reason == "expired"

    def test_token_signed_with_other_secret_rejected(self):
        token = jwt.encode({"sub": "42"}, "some-other-secret", algorithm=JWT_ALGORITHM)
        with pytest.raises(InvalidTokenException):
            AuthService.decode_token(token)

    def test_garbage_token_rejected(self):
        with pytest.raises(InvalidTokenException):
            AuthService.decode_token("not.a.token")


class TestAccounts:

    def test_register_normalises_email(self, db_session):
        user = AuthService(db_session).register("Dana", "  Dana@Example.COM ", "password1")
        assert user.email == "dana@example.com"
        assert user.password_hash != "password1"

    def test_duplicate_email_rejected(self, db_session):
        service = AuthService(db_session)
        service.register("Dana", "dana@example.com", "password1")
        with pytest.raises(UserAlreadyExistsException):
            service.register("Other Dana", "DANA@example.com", "password2")

    def test_authenticate(self, db_session):
        service = AuthService(db_session)
        created = service.register("Dana", "dana@example.com", "password1")

        assert service.authenticate("Dana@example.com", "password1").id == created.id
        with pytest.raises(InvalidCredentialsException):
            service.authenticate("dana@example.com", "nope")
        with pytest.raises(InvalidCredentialsException):
            service.authenticate("ghost@example.com", "password1")

    def test_get_user_missing(self, db_session):
        with pytest.raises(UserNotFoundException):
            AuthService(db_session).get_user(999)
