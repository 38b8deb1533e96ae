"""
Inkwell Backend: Post SQLAlchemy Model
=========================================

What:  ORM model representing the `posts` table.
Who:   Created and updated by BlogService; listed on the feed and profiles.

Table Design:
    - author_id: NOT NULL foreign key, so every post has exactly one owner
    - published: drafts (False) are hidden from profile listings
    - views: incremented on every successful single-post read; never decreases
    - created_at DESC index: the feed and profiles list newest first
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.database import Base
from inkwell.models.user import utcnow


class Post(Base):
    """
    A blog post owned by a single user.

    Lifecycle:
        1. Created by its author (published or as a draft)
        2. Updated only by its author
        3. Never deleted
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="",
        comment="Short summary shown on feed cards",
    )

    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    views: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Read counter; monotonically non-decreasing",
    )

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_posts_created_at", created_at.desc()),
        Index("idx_posts_author_id", "author_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, author_id={self.author_id}, "
            f"published={self.published}, views={self.views})>"
        )
