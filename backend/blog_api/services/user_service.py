"""
Blog API Backend - User Service
================================

What:  Signup and signin: user persistence plus token issuance.
How:   Reads/writes the `users` table through the request's AsyncSession,
       every store call bounded by the persistence time budget.
Who:   Called by the /signup and /signin route handlers.

Duplicate emails:
    Detected by the UNIQUE constraint on users.email (IntegrityError on
    flush), not by a read-then-write check, so concurrent signups with the
    same email cannot both succeed.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import bounded
from blog_api.exceptions import AuthenticationError, ConflictError, DatabaseError
from blog_api.models.user import User
from blog_api.schemas.auth import SignInRequest, SignUpRequest, TokenResponse
from blog_api.services.credential_service import (
    credential_service,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserService:
    """
    Business logic for user accounts.

    Error Handling Strategy:
        IntegrityError on insert → ConflictError (409)
        Any other SQLAlchemyError → DatabaseError (500), details logged only
    """

    async def find_user_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await bounded(
                db.execute(select(User).where(User.email == normalize_email(email))),
                "find_user_by_email",
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user by email: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__}) from e

    async def create_user(
        self, db: AsyncSession, name: str, email: str, password: str
    ) -> User:
        """
        Insert a new user and commit.

        Raises:
            ConflictError: the email is already registered (→ 409)
            DatabaseError: any other store failure (→ 500)
        """
        user = User(name=name, email=normalize_email(email), password=hash_password(password))
        try:
            db.add(user)
            await bounded(db.flush(), "create_user")
            await bounded(db.commit(), "create_user")
        except IntegrityError as e:
            await db.rollback()
            logger.info("Signup rejected, email already registered")
            raise ConflictError(message="User already exists") from e
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create user",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("User %s created", user.id)
        return user

    async def find_user_by_email_and_password(
        self, db: AsyncSession, email: str, password: str
    ) -> Optional[User]:
        """Return the user only when the email exists and the password matches."""
        user = await self.find_user_by_email(db, email)
        if user is None or not verify_password(password, user.password):
            return None
        return user

    async def sign_up(self, db: AsyncSession, payload: SignUpRequest) -> TokenResponse:
        user = await self.create_user(db, payload.name, payload.email, payload.password)
        return TokenResponse(
            token=credential_service.issue(user.id),
            message="User created successfully",
        )

    async def sign_in(self, db: AsyncSession, payload: SignInRequest) -> TokenResponse:
        """
        Raises:
            AuthenticationError: unknown email or wrong password. Both cases
                                 produce the same message (→ 401).
        """
        user = await self.find_user_by_email_and_password(db, payload.email, payload.password)
        if user is None:
            raise AuthenticationError(message="Invalid email or password", reason="invalid")
        return TokenResponse(
            token=credential_service.issue(user.id),
            message="User logged in successfully",
        )


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
