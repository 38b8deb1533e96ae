"""
Inkwell Backend: User Service Unit Tests
===========================================

UserService against the in-memory store: signup uniqueness, password
storage, signin failure modes and profile contents.
"""

import threading

import pytest

from inkwell.exceptions import ConflictError, InvalidCredentialsError, NotFoundError
from inkwell.schemas.post import CreatePostInput
from inkwell.schemas.user import SigninInput, SignupInput
from inkwell.services.blog_service import BlogService
from inkwell.services.user_service import UserService


def signup_input(name="a", email=None, password="p1", bio=None):
    return SignupInput(email=email or f"{name}@x.com", name=name, password=password, bio=bio)


class TestSignup:

    @pytest.fixture(autouse=True)
    def _service(self, credentials):
        self.credentials = credentials
        self.service = UserService(credentials)

    @pytest.mark.asyncio
    async def test_signup_returns_token_and_name(self, store):
        result = await self.service.signup(store, signup_input())

        assert result.name == "a"
        user = await store.users.find_by_name("a")
        assert self.credentials.verify_token(result.token) == user.id

    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self, store):
        await self.service.signup(store, signup_input(password="p1"))

        user = await store.users.find_by_email("a@x.com")
        assert user.password != "p1"
        assert self.credentials.verify_password("p1", user.password)

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, store):
        await self.service.signup(store, signup_input(name="a", email="a@x.com"))

        with pytest.raises(ConflictError) as exc_info:
            await self.service.signup(store, signup_input(name="b", email="a@x.com"))
        assert exc_info.value.field == "email"
        assert len(store.users.rows) == 1

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, store):
        await self.service.signup(store, signup_input(name="a", email="a@x.com"))

        with pytest.raises(ConflictError) as exc_info:
            await self.service.signup(store, signup_input(name="a", email="other@x.com"))
        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_bio_is_kept(self, store):
        await self.service.signup(store, signup_input(bio="writes about tea"))
        user = await store.users.find_by_name("a")
        assert user.bio == "writes about tea"


class TestSignin:

    @pytest.fixture(autouse=True)
    def _service(self, credentials):
        self.credentials = credentials
        self.service = UserService(credentials)

    @pytest.mark.asyncio
    async def test_correct_password_signs_in(self, store):
        await self.service.signup(store, signup_input())

        result = await self.service.signin(store, SigninInput(email="a@x.com", password="p1"))

        user = await store.users.find_by_name("a")
        assert result.name == "a"
        assert self.credentials.verify_token(result.token) == user.id

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, store):
        await self.service.signup(store, signup_input())

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await self.service.signin(store, SigninInput(email="a@x.com", password="nope"))
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await self.service.signin(store, SigninInput(email="ghost@x.com", password="p1"))

        assert wrong_password.value.message == unknown_email.value.message

    @pytest.mark.asyncio
    async def test_unknown_email_bcrypt_work_stays_off_the_event_loop(self, store, monkeypatch):
        loop_thread = threading.get_ident()
        hashing_threads = []
        real_hash = self.credentials.hash_password

        def recording_hash(password):
            hashing_threads.append(threading.get_ident())
            return real_hash(password)

        monkeypatch.setattr(self.credentials, "hash_password", recording_hash)

        with pytest.raises(InvalidCredentialsError):
            await self.service.signin(store, SigninInput(email="ghost@x.com", password="p1"))

        assert hashing_threads
        assert loop_thread not in hashing_threads


class TestProfile:

    @pytest.fixture(autouse=True)
    def _service(self, credentials):
        self.service = UserService(credentials)
        self.blog = BlogService()

    @pytest.mark.asyncio
    async def test_profile_lists_published_posts_newest_first(self, store):
        await self.service.signup(store, signup_input(bio="hello"))
        author = await store.users.find_by_name("a")
        first = await self.blog.create_post(store, author.id, CreatePostInput(title="first", published=True))
        await self.blog.create_post(store, author.id, CreatePostInput(title="draft", published=False))
        second = await self.blog.create_post(store, author.id, CreatePostInput(title="second", published=True))

        profile = await self.service.get_profile(store, "a")

        assert profile.name == "a"
        assert profile.bio == "hello"
        assert [p.id for p in profile.posts] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_profile_excludes_other_authors(self, store):
        await self.service.signup(store, signup_input(name="a"))
        await self.service.signup(store, signup_input(name="b"))
        other = await store.users.find_by_name("b")
        await self.blog.create_post(store, other.id, CreatePostInput(title="not a's", published=True))

        profile = await self.service.get_profile(store, "a")

        assert profile.posts == []

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, store):
        with pytest.raises(NotFoundError):
            await self.service.get_profile(store, "nobody")
