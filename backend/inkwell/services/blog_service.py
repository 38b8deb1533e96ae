"""
Inkwell Backend: Blog Service
================================

What:  Business logic for posts: create, update, feed, single read, like.
How:   Each method receives the request's Store and the authenticated user id
       (where relevant) and returns a response schema.
Who:   Called by the /blog route handlers.

Ownership rule:
    Only a post's author may update it. Any other authenticated user gets
    ForbiddenError, whatever fields they send.

View counter:
    get_post reads the post, then writes views + 1. Two concurrent reads of
    the same post can both write the same value, losing one increment. The
    counter never decreases.
"""

import logging
import uuid
from typing import List

from inkwell.database import database_errors
from inkwell.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthenticatedError
from inkwell.repositories.base import PostWithAuthor, Store
from inkwell.schemas.post import (
    AuthorSummary,
    CreatePostInput,
    FeedPost,
    LikeResponse,
    PostDetail,
    PostIdResponse,
    UpdatePostInput,
)

logger = logging.getLogger(__name__)


def parse_post_id(raw: str) -> uuid.UUID:
    """Path ids that are not UUIDs cannot resolve to a post."""
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError):
        raise NotFoundError(resource="post", resource_id=str(raw))


def to_feed_post(row: PostWithAuthor) -> FeedPost:
    post = row.post
    return FeedPost(
        id=post.id,
        title=post.title,
        description=post.description,
        published=post.published,
        views=post.views,
        created_at=post.created_at,
        author=AuthorSummary(name=row.author_name),
    )


class BlogService:
    """Post operations. Stateless; a module-level singleton is used by the routes."""

    async def create_post(self, store: Store, author_id: uuid.UUID, payload: CreatePostInput) -> PostIdResponse:
        """
        Create a post owned by `author_id`.

        Raises:
            UnauthenticatedError: the token's user no longer exists (→ 401)
        """
        with database_errors("create the post"):
            if await store.users.find_by_id(author_id) is None:
                raise UnauthenticatedError(message="Your account no longer exists. Please sign in again.")
            post = await store.posts.create(
                author_id=author_id,
                title=payload.title,
                description=payload.description,
                content=payload.content,
                published=payload.published,
            )

        logger.info("Post %s created by %s (published=%s)", post.id, author_id, post.published)
        return PostIdResponse(id=post.id)

    async def update_post(self, store: Store, user_id: uuid.UUID, payload: UpdatePostInput) -> PostIdResponse:
        """
        Apply the fields present in `payload` to the post it names.

        Raises:
            NotFoundError: no post with this id (→ 404)
            ForbiddenError: caller is not the author (→ 403)
        """
        with database_errors("update the post"):
            post = await store.posts.find_by_id(payload.id)
            if post is None:
                raise NotFoundError(resource="post", resource_id=str(payload.id))
            if post.author_id != user_id:
                logger.warning("User %s tried to update post %s owned by %s", user_id, post.id, post.author_id)
                raise ForbiddenError(context={"post_id": str(post.id)})

            changes = payload.changes()
            if changes:
                await store.posts.update(post, changes)

        logger.info("Post %s updated (%s)", post.id, ", ".join(sorted(changes)) or "no changes")
        return PostIdResponse(id=post.id)

    async def list_posts(self, store: Store) -> List[FeedPost]:
        """Every post with its author's name, newest first. Drafts are included."""
        with database_errors("load posts"):
            rows = await store.posts.list_with_authors()
        return [to_feed_post(row) for row in rows]

    async def get_post(self, store: Store, post_id: str) -> PostDetail:
        """
        Full post with author name and like count; counts one view.

        Raises:
            NotFoundError: id is not a UUID or no such post (→ 404); nothing
                           is written in that case
        """
        pid = parse_post_id(post_id)
        with database_errors("load the post"):
            row = await store.posts.find_with_author(pid)
            if row is None:
                raise NotFoundError(resource="post", resource_id=post_id)
            post = await store.posts.update(row.post, {"views": row.post.views + 1})
            likes = await store.likes.count_for_post(post.id)

        summary = to_feed_post(PostWithAuthor(post=post, author_name=row.author_name))
        return PostDetail(**summary.model_dump(), content=post.content, likes=likes)

    async def like_post(self, store: Store, user_id: uuid.UUID, post_id: str) -> LikeResponse:
        """
        Record that `user_id` likes the post.

        Raises:
            NotFoundError: no such post (→ 404)
            ConflictError: the user already liked it (→ 409)
        """
        pid = parse_post_id(post_id)
        with database_errors("like the post"):
            if await store.users.find_by_id(user_id) is None:
                raise UnauthenticatedError(message="Your account no longer exists. Please sign in again.")
            post = await store.posts.find_by_id(pid)
            if post is None:
                raise NotFoundError(resource="post", resource_id=post_id)
            if await store.likes.find(user_id, pid) is not None:
                raise ConflictError(message="You already liked this post")
            await store.likes.create(user_id=user_id, post_id=pid)
            likes = await store.likes.count_for_post(pid)

        logger.info("User %s liked post %s (%d likes)", user_id, pid, likes)
        return LikeResponse(id=pid, likes=likes)


blog_service = BlogService()
