"""
Inkwell Backend: User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Created by UserService at signup; read by signin and profile lookups.

Table Design:
    - UUID primary key generated in Python, so the id is known before flush
    - email and name: each carries its own UNIQUE constraint
    - password: bcrypt hash string (60 chars); plaintext is never stored
    - bio: optional free text shown on the profile page
    - created_at: UTC, timezone-aware
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    An account that can author posts and like them.

    Lifecycle:
        1. Created at signup with a hashed password
        2. Never deleted; profile edits are out of scope
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login identifier, unique across users",
    )

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Public display name, unique across users; used in profile URLs",
    )

    # bcrypt output: $2b$<rounds>$<22-char salt><31-char hash>
    password: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
