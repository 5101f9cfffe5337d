"""Authentication service: password hashing and JWT issue/verify."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import bcrypt
import jwt

from report_tracker.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)
from report_tracker.models.user import User
from report_tracker.repositories.user_repository import UserRepository
from report_tracker.utils.logger import get_logger

log = get_logger(__name__)


@dataclass
class AuthenticatedPrincipal:
    """Caller identity extracted from a verified JWT."""

    user_id: UUID


class AuthService:
    """Service for issuing and verifying HS256 access tokens."""

    TOKEN_TYPE = "Bearer"

    def __init__(self, secret_key: str, algorithm: str = "HS256", expiration_minutes: int = 1440):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expiration = timedelta(minutes=expiration_minutes)

    # ------------------------------------------------------------------
    # Passwords
    # ------------------------------------------------------------------

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a plaintext password with bcrypt."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Check a plaintext password against a bcrypt hash."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    async def authenticate(self, user_repo: UserRepository, email: str, password: str) -> User:
        """
        Look up a user by email and verify their password.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user = await user_repo.get_by_email(email)
        if user is None or not self.verify_password(password, user.password_hash):
            log.warning("login failed", email=email)
            raise InvalidCredentialsError()
        log.info("login succeeded", user_id=str(user.id))
        return user

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def create_access_token(self, user: User) -> tuple[str, int]:
        """
        Issue a signed access token for a user.

        Returns:
            Tuple of (token, expires_in_seconds)
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "iat": now,
            "exp": now + self._expiration,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token, int(self._expiration.total_seconds())

    def verify_token(self, authorization_header: Optional[str]) -> AuthenticatedPrincipal:
        """
        Verify a bearer token and extract the caller identity.

        Args:
            authorization_header: The Authorization header value (Bearer <token>)

        Returns:
            AuthenticatedPrincipal for the token subject

        Raises:
            MissingTokenError: If no token is provided
            InvalidTokenError: If token is malformed, expired or forged
        """
        if not authorization_header:
            raise MissingTokenError()

        parts = authorization_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise InvalidTokenError("Invalid authorization header format")

        token = parts[1]

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            log.warning("token expired")
            raise InvalidTokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            log.warning("token invalid", error=str(e))
            raise InvalidTokenError(f"Token validation failed: {str(e)}")

        try:
            user_id = UUID(str(payload["sub"]))
        except ValueError:
            raise InvalidTokenError("Token has an invalid user identifier")

        log.debug("token verified", user_id=str(user_id))
        return AuthenticatedPrincipal(user_id=user_id)


# Singleton instance
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        from report_tracker.config import get_settings

        settings = get_settings()
        _auth_service = AuthService(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expiration_minutes=settings.jwt_expiration_minutes,
        )
    return _auth_service
