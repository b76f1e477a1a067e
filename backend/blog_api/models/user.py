"""
Blog API Backend - User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.
Who:   UserService (signup/signin) and the schema bootstrap in database.py.

Table Design:
    - Integer identity primary key, embedded in issued tokens as `userId`
    - email carries a UNIQUE constraint; duplicate signups fail in the store
      itself and are surfaced as ConflictError
    - password holds a bcrypt hash, never the submitted plaintext
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


class User(Base):
    """
    A registered API user.

    Lifecycle:
        Created on signup, read on signin. This API never updates or deletes users.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(320), nullable=False)

    # bcrypt output is 60 chars; 255 leaves room for a scheme change
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
