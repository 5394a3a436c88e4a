"""Password verifiers, identity tokens and the request-time access gate."""

import logging
import time
from typing import Callable, Optional

import bcrypt
from jose import JWTError, jwt

from .errors import (
    BadSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    UnauthorizedError,
)
from .schemas.user import TokenData

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
AUTH_SCHEME = "Bearer"
BCRYPT_MAX_BYTES = 72


def get_password_hash(password: str, rounds: int = 10) -> str:
    """Hash a password using bcrypt directly."""
    password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]  # bcrypt input limit
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    hashed_bytes = hashed_password.encode("utf-8") if isinstance(hashed_password, str) else hashed_password
    return bcrypt.checkpw(password_bytes, hashed_bytes)


class TokenService:
    """Issues and verifies signed, time-bounded identity tokens (HS256 JWTs).

    Nothing is stored server-side: a token is valid iff its signature checks
    out against ``secret_key`` and the clock is still before its ``exp``.
    """

    def __init__(
        self,
        secret_key: str,
        expire_minutes: int = 8 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret_key = secret_key
        self._ttl_seconds = expire_minutes * 60
        self._clock = clock

    def issue(self, user_id: int, username: str) -> str:
        """Create a JWT access token for ``user_id``."""
        issued_at = int(self._clock())
        claims = {
            "userId": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
        }
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenData:
        """Decode ``token`` and return the identity it carries.

        Raises:
            MalformedTokenError: the string is not a decodable JWT or lacks identity claims
            BadSignatureError: the signature (or algorithm) does not match
            TokenExpiredError: the current time is at or past ``exp``
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedTokenError(str(e))

        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise BadSignatureError(str(e))

        user_id = payload.get("userId")
        username = payload.get("username")
        expires_at = payload.get("exp")
        if not isinstance(user_id, int) or not isinstance(username, str):
            raise MalformedTokenError("missing identity claims")
        if not isinstance(expires_at, (int, float)):
            raise MalformedTokenError("missing exp claim")

        if self._clock() >= expires_at:
            raise TokenExpiredError()

        return TokenData(user_id=user_id, username=username)


class AccessGate:
    """Guard composed ahead of every protected operation.

    ``authorize`` either returns the caller's identity or raises
    ``UnauthorizedError``; there is no partial outcome.
    """

    def __init__(self, tokens: TokenService, user_exists: Callable[[int], bool]) -> None:
        self._tokens = tokens
        self._user_exists = user_exists

    @staticmethod
    def extract_token(authorization: Optional[str]) -> str:
        if not authorization:
            raise UnauthorizedError("missing authorization header")

        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != AUTH_SCHEME or not parts[1]:
            raise UnauthorizedError("invalid authorization format")
        return parts[1]

    def authorize(self, authorization: Optional[str]) -> TokenData:
        try:
            token = self.extract_token(authorization)
            identity = self._tokens.verify(token)
            if not self._user_exists(identity.user_id):
                raise UnauthorizedError("user not found")
        except UnauthorizedError as e:
            logger.debug("Rejected request: %s", e.reason)
            raise

        return identity
