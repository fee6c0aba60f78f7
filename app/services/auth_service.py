"""
Authentication service: registration, login, bearer tokens and password reset
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.exceptions import (
    DuplicateEmail,
    DuplicateUsername,
    Forbidden,
    InvalidCredentials,
    InvalidOrExpiredToken,
)
from app.repositories.base import UserRecord, UserRepository

logger = logging.getLogger(__name__)

_dummy_hash: Optional[bytes] = None


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they are stored as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    """Salted bcrypt hash"""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def _burn_password_check(password: str) -> None:
    """Spend the same bcrypt cost for unknown emails as for wrong passwords"""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = bcrypt.hashpw(b"unused-password", bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    try:
        bcrypt.checkpw(password.encode("utf-8"), _dummy_hash)
    except ValueError:
        # Over-long input; verify_password fails the same way for known emails
        pass


def generate_token(user_id: int) -> str:
    """Signed bearer token carrying the user id, valid for JWT_EXPIRES_DAYS"""
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=settings.JWT_EXPIRES_DAYS)).timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> int:
    """
    Verify signature and expiry and return the user id

    Raises:
        Forbidden: token invalid, expired or without a numeric subject
    """
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.info(f"Token verification failed: {str(e)}")
        raise Forbidden()

    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise Forbidden()


class AuthService:
    """Account lifecycle on top of a UserRepository"""

    def __init__(self, users: UserRepository):
        self.users = users

    def register(self, email: str, password: str, username: str) -> Tuple[UserRecord, str]:
        """
        Create an auto-verified account and issue a token

        Raises:
            DuplicateEmail / DuplicateUsername: unique key already taken
        """
        email = _normalize_email(email)

        if self.users.get_by_email(email):
            raise DuplicateEmail()
        if self.users.get_by_username(username):
            raise DuplicateUsername()

        user = self.users.create(
            email=email,
            password_hash=hash_password(password),
            username=username,
            is_verified=True
        )

        logger.info(f"User registered: id={user.id}, username={user.username}")

        return user, generate_token(user.id)

    def login(self, email: str, password: str) -> Tuple[UserRecord, str]:
        """
        Check credentials and issue a token

        Raises:
            InvalidCredentials: unknown email or wrong password, indistinguishably
        """
        user = self.users.get_by_email(_normalize_email(email))

        if user is None:
            _burn_password_check(password)
            raise InvalidCredentials()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        logger.info(f"User logged in: id={user.id}")

        return user, generate_token(user.id)

    def authenticate(self, token: Optional[str]) -> UserRecord:
        """
        Resolve a bearer token to its user

        Raises:
            Forbidden: token missing, invalid, expired, or user deleted
        """
        if not token:
            raise Forbidden("Access token required")

        user = self.users.get_by_id(decode_token(token))
        if user is None:
            raise Forbidden("Invalid token")
        return user

    def authenticate_optional(self, token: Optional[str]) -> Optional[UserRecord]:
        """Like authenticate, but any failure means anonymous"""
        if not token:
            return None
        try:
            return self.authenticate(token)
        except Forbidden:
            return None

    def forgot_password(self, email: str) -> None:
        """Record a one-hour reset token for a known email; unknown emails are ignored"""
        user = self.users.get_by_email(_normalize_email(email))
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        token = secrets.token_hex(32)
        expiry = datetime.now(timezone.utc) + timedelta(minutes=settings.RESET_TOKEN_TTL_MINUTES)
        self.users.set_reset_token(user.id, token, expiry)

        # TODO: deliver the reset link by email once an outbound mail provider is configured
        logger.info(f"Reset token for user {user.id}: {token}")

    def reset_password(self, token: str, new_password: str) -> None:
        """
        Replace the password and clear the reset token

        Raises:
            InvalidOrExpiredToken: no user holds the token or it has expired
        """
        user = self.users.get_by_reset_token(token) if token else None

        if (
            user is None
            or user.reset_token_expiry is None
            or _as_utc(user.reset_token_expiry) < datetime.now(timezone.utc)
        ):
            raise InvalidOrExpiredToken()

        self.users.update_password(user.id, hash_password(new_password))
        logger.info(f"Password reset for user {user.id}")
