"""
Inkwell Backend: Liked SQLAlchemy Model
==========================================

Join record between users and posts. A user likes a given post at most
once; the composite unique constraint enforces it at the database level and
BlogService.like_post checks it before inserting.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.database import Base
from inkwell.models.user import utcnow


class Liked(Base):
    __tablename__ = "liked"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_liked_user_post"),
        Index("idx_liked_post_id", "post_id"),
    )

    def __repr__(self) -> str:
        return f"<Liked(user_id={self.user_id}, post_id={self.post_id})>"
