"""
Blog API Backend - Posts Route Handlers
========================================

What:  CRUD endpoints for blog posts. Every route requires a valid token.
How:   Dependencies run in declaration order: the auth gate first, then the
       path id check, then FastAPI validates the body. Handlers delegate to
       BlogService and wrap the result in the documented envelope.

Route Inventory:
    GET    /posts        list all posts
    POST   /posts        create a post with its tags
    GET    /posts/{id}   read one post
    PUT    /posts/{id}   partial update (title/body/tags)
    DELETE /posts/{id}   delete a post and its tags
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.auth import get_current_user_id
from blog_api.database import get_db_session
from blog_api.exceptions import ValidationError
from blog_api.schemas.blog import (
    BlogEnvelope,
    BlogResponse,
    CreateBlogRequest,
    CreateBlogResponse,
    UpdateBlogRequest,
)
from blog_api.schemas.common import ErrorResponse, MessageResponse
from blog_api.services.blog_service import blog_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
        503: {"description": "Database did not answer in time", "model": ErrorResponse},
    },
)

# blogs.id is a 32-bit INTEGER column
MAX_POST_ID = 2**31 - 1


def parse_post_id(post_id: str) -> int:
    """
    Validate the `{post_id}` path segment.

    Only ASCII decimal integers in 1..MAX_POST_ID are ids; anything else is
    a 400 and never reaches the database.
    """
    raw = post_id.strip()
    if not (raw.isascii() and raw.isdigit()):
        raise ValidationError(message="Please provide a valid id", field="id")
    value = int(raw)
    if not 0 < value <= MAX_POST_ID:
        raise ValidationError(message="Please provide a valid id", field="id")
    return value


@router.get(
    "",
    response_model=List[BlogResponse],
    summary="List all blog posts with their tags",
)
async def list_posts(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[BlogResponse]:
    blogs = await blog_service.list_blogs(db)
    return [BlogResponse.model_validate(blog) for blog in blogs]


@router.post(
    "",
    response_model=CreateBlogResponse,
    responses={400: {"description": "Invalid body", "model": ErrorResponse}},
    summary="Create a blog post and its tag list",
)
async def create_post(
    payload: CreateBlogRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> CreateBlogResponse:
    """
    The author is the `userId` sent in the body; it is not required to match
    the caller's token.
    """
    if payload.user_id != user_id:
        logger.info("User %s is creating a post on behalf of user %s", user_id, payload.user_id)

    blog = await blog_service.create_blog(
        db,
        user_id=payload.user_id,
        title=payload.title,
        body=payload.body,
        tags=payload.tags,
    )
    return CreateBlogResponse(
        transaction_result=BlogEnvelope(blog=BlogResponse.model_validate(blog))
    )


@router.get(
    "/{post_id}",
    response_model=BlogResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Get a single blog post by id",
)
async def get_post(
    user_id: int = Depends(get_current_user_id),
    post_id: int = Depends(parse_post_id),
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    blog = await blog_service.get_blog(db, post_id)
    return BlogResponse.model_validate(blog)


@router.put(
    "/{post_id}",
    response_model=BlogEnvelope,
    responses={
        400: {"description": "Invalid id or body", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Update title, body and/or tags of a blog post",
)
async def update_post(
    payload: UpdateBlogRequest,
    user_id: int = Depends(get_current_user_id),
    post_id: int = Depends(parse_post_id),
    db: AsyncSession = Depends(get_db_session),
) -> BlogEnvelope:
    blog = await blog_service.update_blog(
        db,
        post_id,
        title=payload.title,
        body=payload.body,
        tags=payload.tags,
    )
    return BlogEnvelope(blog=BlogResponse.model_validate(blog))


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Delete a blog post and its tags",
)
async def delete_post(
    user_id: int = Depends(get_current_user_id),
    post_id: int = Depends(parse_post_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await blog_service.delete_blog(db, post_id)
    return MessageResponse(message="blog post deleted successfully")
