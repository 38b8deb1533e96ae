"""
Inkwell Backend: Blog Service Unit Tests
===========================================

BlogService against the in-memory store: ownership, feed contents, view
counting and likes. Persistence failures are simulated with mocks.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from inkwell.exceptions import (
    ConflictError,
    DatabaseError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
)
from inkwell.schemas.post import CreatePostInput, UpdatePostInput
from inkwell.services.blog_service import BlogService


async def make_user(store, name):
    return await store.users.create(email=f"{name}@x.com", name=name, password="hash")


class TestCreateAndUpdate:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_create_post_is_owned_by_caller(self, store):
        author = await make_user(store, "a")

        result = await self.service.create_post(store, author.id, CreatePostInput(title="hi"))

        post = await store.posts.find_by_id(result.id)
        assert post.author_id == author.id
        assert post.views == 0
        assert post.published is False

    @pytest.mark.asyncio
    async def test_create_post_for_missing_account(self, store):
        with pytest.raises(UnauthenticatedError):
            await self.service.create_post(store, uuid.uuid4(), CreatePostInput(title="hi"))
        assert store.posts.rows == {}

    @pytest.mark.asyncio
    async def test_owner_can_update(self, store):
        author = await make_user(store, "a")
        created = await self.service.create_post(store, author.id, CreatePostInput(title="hi", content="old"))

        await self.service.update_post(
            store, author.id, UpdatePostInput(id=created.id, title="bye", published=True)
        )

        post = await store.posts.find_by_id(created.id)
        assert post.title == "bye"
        assert post.published is True
        assert post.content == "old"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields",
        [{"title": "bye"}, {"published": True}, {"content": "x", "description": "y"}, {}],
    )
    async def test_non_owner_is_forbidden_whatever_the_fields(self, store, fields):
        author = await make_user(store, "a")
        intruder = await make_user(store, "b")
        created = await self.service.create_post(store, author.id, CreatePostInput(title="hi"))

        with pytest.raises(ForbiddenError):
            await self.service.update_post(store, intruder.id, UpdatePostInput(id=created.id, **fields))

        post = await store.posts.find_by_id(created.id)
        assert post.title == "hi"
        assert store.posts.update_calls == []

    @pytest.mark.asyncio
    async def test_update_missing_post(self, store):
        author = await make_user(store, "a")
        with pytest.raises(NotFoundError):
            await self.service.update_post(store, author.id, UpdatePostInput(id=uuid.uuid4(), title="x"))


class TestReading:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_feed_includes_drafts_with_author_names_newest_first(self, store):
        a = await make_user(store, "a")
        b = await make_user(store, "b")
        first = await self.service.create_post(store, a.id, CreatePostInput(title="one", published=True))
        second = await self.service.create_post(store, b.id, CreatePostInput(title="two"))

        feed = await self.service.list_posts(store)

        assert [p.id for p in feed] == [second.id, first.id]
        assert [p.author.name for p in feed] == ["b", "a"]
        assert feed[0].published is False

    @pytest.mark.asyncio
    async def test_get_post_counts_one_view_per_read(self, store):
        a = await make_user(store, "a")
        created = await self.service.create_post(store, a.id, CreatePostInput(title="hi", content="body"))

        first = await self.service.get_post(store, str(created.id))
        second = await self.service.get_post(store, str(created.id))

        assert first.views == 1
        assert second.views == 2
        assert second.content == "body"
        assert second.author.name == "a"
        assert second.likes == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("post_id", [str(uuid.uuid4()), "not-a-uuid", "bulk"])
    async def test_get_missing_post_writes_nothing(self, store, post_id):
        a = await make_user(store, "a")
        await self.service.create_post(store, a.id, CreatePostInput(title="hi"))

        with pytest.raises(NotFoundError):
            await self.service.get_post(store, post_id)

        assert store.posts.update_calls == []
        assert all(p.views == 0 for p in store.posts.rows.values())

    @pytest.mark.asyncio
    async def test_persistence_failure_becomes_database_error(self, store):
        store.posts.list_with_authors = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection reset"))
        )
        with pytest.raises(DatabaseError):
            await self.service.list_posts(store)


class TestLikes:

    def setup_method(self):
        self.service = BlogService()

    @pytest.mark.asyncio
    async def test_likes_from_distinct_users_accumulate(self, store):
        a = await make_user(store, "a")
        b = await make_user(store, "b")
        created = await self.service.create_post(store, a.id, CreatePostInput(title="hi"))

        first = await self.service.like_post(store, a.id, str(created.id))
        second = await self.service.like_post(store, b.id, str(created.id))

        assert first.likes == 1
        assert second.likes == 2
        detail = await self.service.get_post(store, str(created.id))
        assert detail.likes == 2

    @pytest.mark.asyncio
    async def test_second_like_by_same_user_conflicts(self, store):
        a = await make_user(store, "a")
        created = await self.service.create_post(store, a.id, CreatePostInput(title="hi"))
        await self.service.like_post(store, a.id, str(created.id))

        with pytest.raises(ConflictError):
            await self.service.like_post(store, a.id, str(created.id))
        assert await store.likes.count_for_post(created.id) == 1

    @pytest.mark.asyncio
    async def test_like_missing_post(self, store):
        a = await make_user(store, "a")
        with pytest.raises(NotFoundError):
            await self.service.like_post(store, a.id, str(uuid.uuid4()))
