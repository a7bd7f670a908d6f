"""
Authentication service.
Password hashing (bcrypt), bearer token issue/verify (PyJWT), register and login.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from healthgame.models import User
from healthgame.repositories.user_repository import UserRepository
from healthgame.exceptions import (
    InvalidCredentialsException,
    InvalidTokenException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from healthgame.constants import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRES_DAYS, BCRYPT_ROUNDS

logger = logging.getLogger("healthgame.auth")


class AuthService:
    """Service for user accounts and tokens"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository()

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

    @staticmethod
    def create_token(user_id: int, now: Optional[datetime] = None) -> str:
        """Issue a signed token for a user, valid for JWT_EXPIRES_DAYS"""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + timedelta(days=JWT_EXPIRES_DAYS),
        }
        return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> int:
        """
        Resolve the user id carried by a token.

        Raises:
            InvalidTokenException: If the token is expired, forged or malformed
        """
        try:
            payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise InvalidTokenException("expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenException(str(e))

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenException("missing subject")

    def register(self, name: str, email: str, password: str) -> User:
        """
        Create a new account.

        Raises:
            UserAlreadyExistsException: If the email is already registered
        """
        email = email.strip().lower()
        if self.user_repo.get_by_email(self.db, email):
            raise UserAlreadyExistsException(email)

        user = User(name=name.strip(), email=email, password_hash=self.hash_password(password))
        try:
            user = self.user_repo.create(self.db, user)
        except IntegrityError:
            self.db.rollback()
            raise UserAlreadyExistsException(email)

        logger.info(f"Registered user {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """
        Check login credentials.

        Raises:
            InvalidCredentialsException: If the email is unknown or the password is wrong
        """
        user = self.user_repo.get_by_email(self.db, email.strip())
        if not user or not self.verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsException()
        return user

    def get_user(self, user_id: int) -> User:
        """
        Raises:
            UserNotFoundException: If the user does not exist
        """
        user = self.user_repo.get_by_id(self.db, user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return user
