"""
Inkwell Backend: SQLAlchemy Repositories
===========================================

What:  Async SQLAlchemy implementations of the repository interfaces.
How:   Each repository wraps the request's AsyncSession. Writes are flushed
       (not committed) so generated values and constraint violations surface
       inside the call; the commit happens in get_db_session.
Who:   Built per request by `get_store`; used by UserService and BlogService.

Query plans:
    find_by_email / find_by_name  → UNIQUE index lookups
    list_with_authors             → posts JOIN users ORDER BY created_at DESC
    list_published_by_author      → idx_posts_author_id + sort
    count_for_post                → idx_liked_post_id
"""

import logging
import uuid
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.database import get_db_session
from inkwell.exceptions import ConflictError
from inkwell.models import Liked, Post, User
from inkwell.repositories.base import PostWithAuthor

logger = logging.getLogger(__name__)


class SqlUserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, *, email: str, name: str, password: str, bio: Optional[str] = None) -> User:
        user = User(email=email, name=name, password=password, bio=bio)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # A concurrent signup won the race between the service's lookup
            # and this insert.
            logger.info("Unique constraint hit while creating user '%s'", name)
            raise ConflictError(message="Email or name is already taken") from exc
        return user

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_name(self, name: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.name == name))
        return result.scalar_one_or_none()


class SqlPostRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        *,
        author_id: uuid.UUID,
        title: str,
        description: str,
        content: str,
        published: bool,
    ) -> Post:
        post = Post(
            author_id=author_id,
            title=title,
            description=description,
            content=content,
            published=published,
            views=0,
        )
        self.session.add(post)
        await self.session.flush()
        return post

    async def find_by_id(self, post_id: uuid.UUID) -> Optional[Post]:
        return await self.session.get(Post, post_id)

    async def find_with_author(self, post_id: uuid.UUID) -> Optional[PostWithAuthor]:
        result = await self.session.execute(
            select(Post, User.name)
            .join(User, Post.author_id == User.id)
            .where(Post.id == post_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        return PostWithAuthor(post=row[0], author_name=row[1])

    async def list_with_authors(self) -> List[PostWithAuthor]:
        result = await self.session.execute(
            select(Post, User.name)
            .join(User, Post.author_id == User.id)
            .order_by(desc(Post.created_at))
        )
        return [PostWithAuthor(post=post, author_name=name) for post, name in result.all()]

    async def list_published_by_author(self, author_id: uuid.UUID) -> List[Post]:
        result = await self.session.execute(
            select(Post)
            .where(Post.author_id == author_id, Post.published.is_(True))
            .order_by(desc(Post.created_at))
        )
        return list(result.scalars().all())

    async def update(self, post: Post, changes: Dict[str, Any]) -> Post:
        for field, value in changes.items():
            setattr(post, field, value)
        await self.session.flush()
        return post


class SqlLikedRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, *, user_id: uuid.UUID, post_id: uuid.UUID) -> Liked:
        liked = Liked(user_id=user_id, post_id=post_id)
        self.session.add(liked)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(message="You already liked this post") from exc
        return liked

    async def find(self, user_id: uuid.UUID, post_id: uuid.UUID) -> Optional[Liked]:
        result = await self.session.execute(
            select(Liked).where(Liked.user_id == user_id, Liked.post_id == post_id)
        )
        return result.scalar_one_or_none()

    async def count_for_post(self, post_id: uuid.UUID) -> int:
        result = await self.session.execute(
            select(func.count(Liked.id)).where(Liked.post_id == post_id)
        )
        return result.scalar() or 0


class SqlStore:
    """The three SQL repositories over one session (one transaction)."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = SqlUserRepository(session)
        self.posts = SqlPostRepository(session)
        self.likes = SqlLikedRepository(session)


async def get_store(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SqlStore, None]:
    """
    FastAPI dependency yielding the request's Store.

    Tests replace it through `app.dependency_overrides[get_store]`.
    """
    yield SqlStore(session)
