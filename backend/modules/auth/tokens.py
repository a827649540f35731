"""
Bearer token issuing and verification.

Tokens are HS256 JWTs signed with a single process-wide secret and valid
for a fixed window (7 days by default). There is no refresh token and no
server-side revocation: a token stays valid until it expires.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    AuthConfigurationError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
)
from .models import TokenClaims, User


class TokenService:
    """Stateless JWT signer/verifier."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_days: int = 7):
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(days=expires_days)

    def issue(self, user: User, issued_at: Optional[datetime] = None) -> str:
        """
        Sign a token for a user.

        Args:
            user: The user the token identifies
            issued_at: Issue time, defaults to now

        Returns:
            Encoded JWT string
        """
        self._require_secret()
        now = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "username": user.username,
            "nickname": user.nickname,
            "provider": user.provider.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> TokenClaims:
        """
        Verify signature and expiry, and decode the claims.

        Raises:
            MissingTokenError: If token is empty
            ExpiredTokenError: If the token's exp has passed
            InvalidTokenError: If the signature, structure or claims are bad
        """
        if not token:
            raise MissingTokenError()
        self._require_secret()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid authentication token: {e}")

        try:
            return TokenClaims(**payload)
        except PydanticValidationError:
            raise InvalidTokenError("Invalid authentication token: unexpected claims")

    def _require_secret(self) -> None:
        if not self._secret:
            raise AuthConfigurationError()
