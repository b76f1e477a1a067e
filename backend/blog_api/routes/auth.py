"""
Blog API Backend - Auth Route Handlers
=======================================

What:  POST /signup and POST /signin. Both are public and return a bearer
       token on success.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db_session
from blog_api.schemas.auth import SignInRequest, SignUpRequest, TokenResponse
from blog_api.schemas.common import ErrorResponse
from blog_api.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/signup",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid inputs", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Register a user and receive a token",
)
async def sign_up(
    payload: SignUpRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await user_service.sign_up(db, payload)


@router.post(
    "/signin",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid inputs", "model": ErrorResponse},
        401: {"description": "Invalid email or password", "model": ErrorResponse},
    },
    summary="Exchange email and password for a token",
)
async def sign_in(
    payload: SignInRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await user_service.sign_in(db, payload)
