"""
Inkwell Backend: Repository Interfaces
=========================================

What:  The narrow persistence interface services are written against.
How:   typing.Protocol classes, one per entity, grouped into a Store.
       SqlStore (repositories/sql.py) implements them over an AsyncSession;
       tests implement them in memory.

Services never build queries themselves. Everything they need from the
database is a method here.
"""

import uuid
from typing import Any, Dict, List, NamedTuple, Optional, Protocol

from inkwell.models import Liked, Post, User


class PostWithAuthor(NamedTuple):
    post: Post
    author_name: str


class UserRepository(Protocol):
    async def create(self, *, email: str, name: str, password: str, bio: Optional[str] = None) -> User:
        """Insert a user. Raises ConflictError if email or name is taken."""
        ...

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]: ...

    async def find_by_email(self, email: str) -> Optional[User]: ...

    async def find_by_name(self, name: str) -> Optional[User]: ...


class PostRepository(Protocol):
    async def create(
        self,
        *,
        author_id: uuid.UUID,
        title: str,
        description: str,
        content: str,
        published: bool,
    ) -> Post: ...

    async def find_by_id(self, post_id: uuid.UUID) -> Optional[Post]: ...

    async def find_with_author(self, post_id: uuid.UUID) -> Optional[PostWithAuthor]: ...

    async def list_with_authors(self) -> List[PostWithAuthor]:
        """Every post, drafts included, newest first."""
        ...

    async def list_published_by_author(self, author_id: uuid.UUID) -> List[Post]:
        """Published posts of one author, newest first."""
        ...

    async def update(self, post: Post, changes: Dict[str, Any]) -> Post: ...


class LikedRepository(Protocol):
    async def create(self, *, user_id: uuid.UUID, post_id: uuid.UUID) -> Liked:
        """Insert a like. Raises ConflictError if the pair already exists."""
        ...

    async def find(self, user_id: uuid.UUID, post_id: uuid.UUID) -> Optional[Liked]: ...

    async def count_for_post(self, post_id: uuid.UUID) -> int: ...


class Store(Protocol):
    """Per-request bundle of repositories sharing one transaction."""

    users: UserRepository
    posts: PostRepository
    likes: LikedRepository
