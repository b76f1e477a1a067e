"""
Blog API Backend - Blog Service
================================

What:  CRUD over blog posts and their tag lists.
How:   Works on the request's AsyncSession. Writes that touch both tables
       (create, update, delete) run in a single transaction and commit
       before returning; any failure rolls both tables back together.
Who:   Called by the /posts route handlers.

Tag semantics:
    One Tags row per Blog. On update a supplied tag list replaces the stored
    one (no merging); an omitted list leaves it untouched.

Error Handling Strategy:
    Missing rows → NotFoundError (404)
    Time budget exceeded → ServiceUnavailableError (503), raised by bounded()
    Any other SQLAlchemyError → DatabaseError (500), details logged only
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import bounded
from blog_api.exceptions import DatabaseError, NotFoundError
from blog_api.models.blog import Blog, Tags

logger = logging.getLogger(__name__)


class BlogService:
    """Business logic layer for blog posts."""

    async def list_blogs(self, db: AsyncSession) -> List[Blog]:
        """All blog posts with their tags, oldest first."""
        try:
            result = await bounded(db.execute(select(Blog).order_by(Blog.id)), "list_blogs")
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing blogs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Internal server error cannot fetch Posts right now",
                context={"error_type": type(e).__name__},
            ) from e

    async def create_blog(
        self,
        db: AsyncSession,
        user_id: int,
        title: str,
        body: str,
        tags: List[str],
    ) -> Blog:
        """
        Create a Blog and its Tags row atomically.

        Both INSERTs are flushed in one unit of work and committed together;
        if either fails neither row persists.
        """
        blog = Blog(user_id=user_id, title=title, body=body, tag=Tags(tag=list(tags)))
        try:
            db.add(blog)
            await bounded(db.flush(), "create_blog")
            await bounded(db.commit(), "create_blog")
        except SQLAlchemyError as e:
            logger.error("Database error creating blog: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create a blogPost",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Blog %s created by user %s with %d tags", blog.id, user_id, len(tags))
        return blog

    async def get_blog(self, db: AsyncSession, blog_id: int) -> Blog:
        """
        Raises:
            NotFoundError: no blog with this id (→ 404)
        """
        blog = await self._find(db, blog_id, "get_blog")
        if blog is None:
            raise NotFoundError(resource="blog", resource_id=str(blog_id), message="Blog not found")
        return blog

    async def update_blog(
        self,
        db: AsyncSession,
        blog_id: int,
        title: Optional[str] = None,
        body: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Blog:
        """
        Update title/body on the Blog row and replace the tag list, atomically.

        The blog is looked up first; a missing blog raises NotFoundError
        before anything is written. Fields passed as None are left unchanged.
        """
        blog = await self._find(db, blog_id, "update_blog")
        if blog is None:
            raise NotFoundError(
                resource="blog", resource_id=str(blog_id), message="Blog post not found"
            )

        if tags is not None:
            if blog.tag is None:
                # Rows written before the one-to-one constraint may lack one
                blog.tag = Tags(tag=list(tags))
            else:
                blog.tag.tag = list(tags)
        if title is not None:
            blog.title = title
        if body is not None:
            blog.body = body

        try:
            await bounded(db.flush(), "update_blog")
            await bounded(db.commit(), "update_blog")
        except SQLAlchemyError as e:
            logger.error("Database error updating blog %s: %s", blog_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the blog post",
                context={"blog_id": blog_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Blog %s updated", blog_id)
        return blog

    async def delete_blog(self, db: AsyncSession, blog_id: int) -> None:
        """
        Delete a blog and its Tags row in one transaction.

        Raises:
            NotFoundError: zero Blog rows were affected (→ 404). Repeating
                           the delete keeps producing NotFoundError.
        """
        try:
            await bounded(db.execute(delete(Tags).where(Tags.blog_id == blog_id)), "delete_blog")
            result = await bounded(
                db.execute(delete(Blog).where(Blog.id == blog_id)), "delete_blog"
            )
            deleted = result.rowcount
            if deleted == 0:
                await db.rollback()
            else:
                await bounded(db.commit(), "delete_blog")
        except SQLAlchemyError as e:
            logger.error("Database error deleting blog %s: %s", blog_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the blog post",
                context={"blog_id": blog_id, "error_type": type(e).__name__},
            ) from e

        if deleted == 0:
            raise NotFoundError(resource="blog", resource_id=str(blog_id), message="Blog not found")
        logger.info("Blog %s deleted", blog_id)

    async def _find(self, db: AsyncSession, blog_id: int, operation: str) -> Optional[Blog]:
        try:
            result = await bounded(
                db.execute(select(Blog).where(Blog.id == blog_id)), operation
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching blog %s: %s", blog_id, str(e))
            raise DatabaseError(
                message="internal Server Error",
                context={"blog_id": blog_id, "error_type": type(e).__name__},
            ) from e


# ── Singleton Instance ────────────────────────────────────────────────────
blog_service = BlogService()
