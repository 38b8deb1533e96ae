"""
Inkwell Backend: Blog Route Handlers
=======================================

Endpoints (under the API prefix, all require a bearer token):
    POST /blog               create a post          → {id}
    PUT  /blog               update own post        → {id}
    GET  /blog/bulk          feed, newest first     → [post...]
    GET  /blog/{id}          single post, +1 view   → post
    POST /blog/{id}/like     like a post            → {id, likes}

/blog/bulk is declared before /blog/{post_id} so "bulk" is never read as an id.
"""

import uuid
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from inkwell.middleware.auth import require_user_id
from inkwell.repositories import Store, get_store
from inkwell.schemas.common import ErrorResponse
from inkwell.schemas.post import FeedPost, LikeResponse, PostDetail, PostIdResponse
from inkwell.services.blog_service import blog_service
from inkwell.validation import validate_create_post, validate_update_post


router = APIRouter(
    prefix="/blog",
    tags=["Blog"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.post(
    "",
    response_model=PostIdResponse,
    responses={400: {"description": "Invalid body", "model": ErrorResponse}},
    summary="Create a post owned by the caller",
)
async def create_post(
    body: Dict[str, Any] = Body(..., examples=[{"title": "hi", "description": "", "content": "", "published": True}]),
    user_id: uuid.UUID = Depends(require_user_id),
    store: Store = Depends(get_store),
) -> PostIdResponse:
    payload = validate_create_post(body)
    return await blog_service.create_post(store, user_id, payload)


@router.put(
    "",
    response_model=PostIdResponse,
    responses={
        400: {"description": "Invalid body", "model": ErrorResponse},
        403: {"description": "Caller is not the author", "model": ErrorResponse},
        404: {"description": "No such post", "model": ErrorResponse},
    },
    summary="Update a post the caller owns",
)
async def update_post(
    body: Dict[str, Any] = Body(..., examples=[{"id": "00000000-0000-0000-0000-000000000000", "title": "bye"}]),
    user_id: uuid.UUID = Depends(require_user_id),
    store: Store = Depends(get_store),
) -> PostIdResponse:
    payload = validate_update_post(body)
    return await blog_service.update_post(store, user_id, payload)


@router.get(
    "/bulk",
    response_model=List[FeedPost],
    summary="All posts, newest first",
)
async def list_posts(
    user_id: uuid.UUID = Depends(require_user_id),
    store: Store = Depends(get_store),
) -> List[FeedPost]:
    return await blog_service.list_posts(store)


@router.get(
    "/{post_id}",
    response_model=PostDetail,
    responses={404: {"description": "No such post", "model": ErrorResponse}},
    summary="Read a post (counts one view)",
)
async def get_post(
    post_id: str,
    user_id: uuid.UUID = Depends(require_user_id),
    store: Store = Depends(get_store),
) -> PostDetail:
    return await blog_service.get_post(store, post_id)


@router.post(
    "/{post_id}/like",
    response_model=LikeResponse,
    responses={
        404: {"description": "No such post", "model": ErrorResponse},
        409: {"description": "Already liked", "model": ErrorResponse},
    },
    summary="Like a post",
)
async def like_post(
    post_id: str,
    user_id: uuid.UUID = Depends(require_user_id),
    store: Store = Depends(get_store),
) -> LikeResponse:
    return await blog_service.like_post(store, user_id, post_id)
