"""
Inkwell Backend: User Route Handlers
=======================================

Endpoints (under the API prefix):
    POST /user/signup              → {token, name}
    POST /user/signin              → {token, name}
    GET  /user/profile/{username}  → profile + published posts (auth)

Routes stay thin: validate the body, call UserService, return its result.
"""

import uuid
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from inkwell.middleware.auth import require_user_id
from inkwell.repositories import Store, get_store
from inkwell.schemas.common import ErrorResponse
from inkwell.schemas.user import AuthResponse, ProfileResponse
from inkwell.services.user_service import user_service
from inkwell.validation import validate_signin, validate_signup


router = APIRouter(prefix="/user", tags=["Users"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    responses={
        400: {"description": "Invalid body", "model": ErrorResponse},
        409: {"description": "Email or name already taken", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def signup(
    body: Dict[str, Any] = Body(..., examples=[{"email": "a@x.com", "name": "a", "password": "secret1"}]),
    store: Store = Depends(get_store),
) -> AuthResponse:
    payload = validate_signup(body)
    return await user_service.signup(store, payload)


@router.post(
    "/signin",
    response_model=AuthResponse,
    responses={
        400: {"description": "Invalid body", "model": ErrorResponse},
        403: {"description": "Incorrect email or password", "model": ErrorResponse},
    },
    summary="Sign in with email and password",
)
async def signin(
    body: Dict[str, Any] = Body(..., examples=[{"email": "a@x.com", "password": "secret1"}]),
    store: Store = Depends(get_store),
) -> AuthResponse:
    payload = validate_signin(body)
    return await user_service.signin(store, payload)


@router.get(
    "/profile/{username}",
    response_model=ProfileResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "No such user", "model": ErrorResponse},
    },
    summary="Public profile and published posts of a user",
)
async def get_profile(
    username: str,
    user_id: uuid.UUID = Depends(require_user_id),
    store: Store = Depends(get_store),
) -> ProfileResponse:
    return await user_service.get_profile(store, username)
