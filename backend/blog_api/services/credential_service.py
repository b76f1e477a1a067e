"""
Blog API Backend - Credential Service
======================================

What:  Issues and verifies the bearer tokens used by every protected route,
       and hashes/checks stored passwords.
How:   Tokens are HS256 JWTs (PyJWT) signed with settings.jwt_secret.
       Passwords are stored as bcrypt hashes.
Who:   UserService issues tokens on signup/signin; the auth gate verifies them.

Token claims:
    userId  int   the user identifier consumed by the auth gate
    sub     str   the same identifier as a string (registered claim)
    iat     int   issued-at, epoch seconds
    exp     int   expiry, epoch seconds (omitted when expiry is disabled)
"""

import hashlib
import logging
import time
from typing import Any, Dict, Optional

import bcrypt
import jwt

from blog_api.config import settings
from blog_api.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72


class CredentialService:
    """
    Stateless token issuer/verifier.

    The secret and algorithm are read from settings on each call, so tests
    can construct an instance with explicit values instead.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @property
    def secret(self) -> str:
        if self._secret is not None:
            return self._secret
        return settings.jwt_secret.get_secret_value()

    @property
    def algorithm(self) -> str:
        return self._algorithm or settings.jwt_algorithm

    @property
    def expire_minutes(self) -> int:
        if self._expire_minutes is not None:
            return self._expire_minutes
        return settings.access_token_expire_minutes

    def issue(self, user_id: int) -> str:
        """Produce a signed token embedding `user_id` as the `userId` claim."""
        issued_at = int(time.time())
        payload: Dict[str, Any] = {
            "userId": int(user_id),
            "sub": str(user_id),
            "iat": issued_at,
        }
        if self.expire_minutes > 0:
            payload["exp"] = issued_at + self.expire_minutes * 60
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> Dict[str, Any]:
        """
        Check the token signature (and expiry, when present) and return its claims.

        Raises:
            AuthenticationError: missing, malformed, expired or forged token,
                                 or a token without an integer userId claim
        """
        raw = (token or "").strip()
        if not raw:
            raise AuthenticationError(message="authentication failed", reason="missing")

        try:
            claims = jwt.decode(raw, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError(message="token expired", reason="invalid") from e
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected: %s", e)
            raise AuthenticationError(message="invalid token", reason="invalid") from e

        user_id = claims.get("userId")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise AuthenticationError(message="invalid token", reason="invalid")
        return claims


def _bcrypt_input(plain_password: str) -> bytes:
    # Longer inputs are pre-hashed so that no part of them is ignored
    password = plain_password.encode("utf-8")
    if len(password) > _BCRYPT_MAX_BYTES:
        password = hashlib.sha256(password).hexdigest().encode("ascii")
    return password


def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(_bcrypt_input(plain_password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_bcrypt_input(plain_password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# ── Singleton Instance ────────────────────────────────────────────────────
credential_service = CredentialService()
