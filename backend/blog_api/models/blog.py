"""
Blog API Backend - Blog and Tags SQLAlchemy Models
===================================================

What:  ORM models for the `blogs` and `tags` tables.
Who:   BlogService for CRUD operations.

Cardinality:
    Exactly one Tags row per Blog, holding the whole tag list.
    Enforced by the schema, not by convention:
    - tags.blog_id is UNIQUE and NOT NULL
    - Blog.tag is a scalar relationship (uselist=False)
    - cascade="all, delete-orphan" writes and removes the Tags row together
      with its Blog inside the same unit of work

userId:
    blogs.user_id is a plain integer column. It is not a foreign key, so a
    blog may reference a user id that does not exist.
"""

from typing import List

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_api.database import Base


class Blog(Base):
    """
    A blog post.

    Lifecycle:
        1. Created together with its Tags row (single transaction)
        2. Updated in place: title/body on this row, tag list on the Tags row
        3. Deleted together with its Tags row (single transaction)

    Any authenticated user may update or delete any blog post.
    """

    __tablename__ = "blogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[int] = mapped_column(Integer, nullable=False)

    # selectin: the tag row is loaded eagerly with every Blog query, since
    # lazy loading is not available on an AsyncSession
    tag: Mapped["Tags"] = relationship(
        back_populates="blog",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_blogs_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title='{self.title}', user_id={self.user_id})>"


class Tags(Base):
    """The ordered tag list attached to one Blog."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # JSON keeps the list ordered and portable across PostgreSQL and SQLite
    tag: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    blog_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("blogs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    blog: Mapped[Blog] = relationship(back_populates="tag")

    def __repr__(self) -> str:
        return f"<Tags(id={self.id}, blog_id={self.blog_id}, tag={self.tag!r})>"
