"""
Blog API Backend - Auth Gate
=============================

What:  Guards protected routes: reads the Authorization header, verifies the
       token and exposes the caller's user id to the handler.
How:   `authenticate()` turns a header value into a tagged result
       (Authenticated | Rejected). The `get_current_user_id` dependency
       stores the user id on request.state or raises AuthenticationError,
       which the global handler renders as 401 before the handler body runs.

Wire format:
    Authorization: <token>          (bare token)
    Authorization: Bearer <token>   (also accepted)
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from fastapi import Request

from blog_api.exceptions import AuthenticationError
from blog_api.services.credential_service import credential_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authenticated:
    user_id: int


@dataclass(frozen=True)
class Rejected:
    reason: str   # "missing" | "invalid"
    message: str


AuthResult = Union[Authenticated, Rejected]


def _extract_token(authorization: Optional[str]) -> str:
    raw = (authorization or "").strip()
    scheme, _, rest = raw.partition(" ")
    if scheme.lower() == "bearer" and rest.strip():
        return rest.strip()
    return raw


def authenticate(authorization: Optional[str]) -> AuthResult:
    """Resolve an Authorization header value to the caller's identity."""
    token = _extract_token(authorization)
    if not token:
        return Rejected(reason="missing", message="authentication failed")
    try:
        claims = credential_service.verify(token)
    except AuthenticationError as e:
        return Rejected(reason=e.reason, message=e.message)
    return Authenticated(user_id=claims["userId"])


async def get_current_user_id(request: Request) -> int:
    """
    FastAPI dependency for protected routes.

    Returns:
        The authenticated user id (also stored as request.state.user_id)

    Raises:
        AuthenticationError: always, when the result is Rejected (→ 401)
    """
    result = authenticate(request.headers.get("Authorization"))
    if isinstance(result, Rejected):
        logger.info("Rejected %s %s: %s token", request.method, request.url.path, result.reason)
        raise AuthenticationError(message=result.message, reason=result.reason)

    request.state.user_id = result.user_id
    return result.user_id
