"""
Inkwell Backend: User Service
================================

What:  Business logic behind signup, signin and profile pages.
How:   Works against the Store passed in for each call; password and token
       work is delegated to the CredentialService given at construction.
Who:   Called by the /user route handlers.

Signup flow:
    validated input → uniqueness checks → bcrypt hash → insert → token

Signin flow:
    validated input → lookup by email → bcrypt verify → token
    Unknown email and wrong password raise the same InvalidCredentialsError.
"""

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from inkwell.database import database_errors
from inkwell.exceptions import ConflictError, InvalidCredentialsError, NotFoundError
from inkwell.repositories.base import Store
from inkwell.schemas.post import PostSummary
from inkwell.schemas.user import AuthResponse, ProfileResponse, SigninInput, SignupInput
from inkwell.services.credentials import CredentialService, credential_service

logger = logging.getLogger(__name__)


class UserService:
    """
    Account operations.

    Stateless apart from the injected CredentialService and a lazily built
    dummy hash, which signin checks unknown emails against so both failure
    paths cost one bcrypt verification.
    """

    def __init__(self, credentials: CredentialService):
        self.credentials = credentials
        self._dummy_hash: Optional[str] = None

    async def signup(self, store: Store, payload: SignupInput) -> AuthResponse:
        """
        Create an account and sign it in.

        Raises:
            ConflictError: email or name already belongs to another user (→ 409)
            DatabaseError: persistence failure (→ 500)
        """
        with database_errors("create your account"):
            if await store.users.find_by_email(payload.email) is not None:
                raise ConflictError(message="Email is already registered", field="email")
            if await store.users.find_by_name(payload.name) is not None:
                raise ConflictError(message="Name is already taken", field="name")

            hashed = await run_in_threadpool(self.credentials.hash_password, payload.password)
            user = await store.users.create(
                email=payload.email,
                name=payload.name,
                password=hashed,
                bio=payload.bio,
            )

        logger.info("User signed up: %s (%s)", user.name, user.id)
        return AuthResponse(token=self.credentials.issue_token(user.id), name=user.name)

    async def signin(self, store: Store, payload: SigninInput) -> AuthResponse:
        """
        Exchange email and password for a token.

        Raises:
            InvalidCredentialsError: unknown email or wrong password (→ 403)
        """
        with database_errors("sign you in"):
            user = await store.users.find_by_email(payload.email)

        if user is None:
            await run_in_threadpool(self._verify_against_dummy, payload.password)
            logger.info("Signin failed: unknown email")
            raise InvalidCredentialsError()

        matches = await run_in_threadpool(self.credentials.verify_password, payload.password, user.password)
        if not matches:
            logger.info("Signin failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError(context={"user_id": str(user.id)})

        logger.info("User signed in: %s", user.id)
        return AuthResponse(token=self.credentials.issue_token(user.id), name=user.name)

    async def get_profile(self, store: Store, username: str) -> ProfileResponse:
        """
        Public profile plus the user's published posts, newest first.

        Raises:
            NotFoundError: no user has this name (→ 404)
        """
        with database_errors("load the profile"):
            user = await store.users.find_by_name(username)
            if user is None:
                raise NotFoundError(resource="user", resource_id=username)
            posts = await store.posts.list_published_by_author(user.id)

        return ProfileResponse(
            name=user.name,
            bio=user.bio,
            created_at=user.created_at,
            posts=[PostSummary.model_validate(post) for post in posts],
        )

    def _verify_against_dummy(self, password: str) -> bool:
        """Runs in the threadpool; the dummy hash is built there on first use."""
        if self._dummy_hash is None:
            self._dummy_hash = self.credentials.hash_password("inkwell-dummy-password")
        return self.credentials.verify_password(password, self._dummy_hash)


user_service = UserService(credential_service)
