"""
Inkwell Backend: Post Request/Response Schemas
=================================================

What:  Pydantic models defining the /blog API contract.
How:   Input models are applied by inkwell.validation; response models are
       built by BlogService from ORM rows.

Schemas are separate from the SQLAlchemy models so the API exposes only the
fields listed here (author_id, for example, is replaced by the author name).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictBool, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreatePostInput(BaseModel):
    """Body of POST /blog. Only `title` is required; posts default to drafts."""

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=500)
    content: str = Field(default="")
    published: StrictBool = Field(default=False)


class UpdatePostInput(BaseModel):
    """
    Body of PUT /blog.

    `id` selects the post. Every other field is optional; only the fields
    present in the body are written. An explicit null is rejected rather than
    being treated as "absent".
    """

    id: uuid.UUID
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=500)
    content: Optional[str] = None
    published: Optional[StrictBool] = None

    @field_validator("title", "description", "content", "published", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v

    def changes(self) -> dict:
        """The updatable fields that were actually sent."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostIdResponse(BaseModel):
    """Returned by create and update."""

    id: uuid.UUID


class AuthorSummary(BaseModel):
    name: str


class PostSummary(BaseModel):
    """
    What:  Compact post representation for list views.
    Who:   Items of a profile's post list; base of FeedPost.
    """

    id: uuid.UUID
    title: str
    description: str
    published: bool
    views: int
    created_at: datetime

    model_config = {"from_attributes": True}


class FeedPost(PostSummary):
    """Item of GET /blog/bulk: a summary plus the author's name."""

    author: AuthorSummary


class PostDetail(FeedPost):
    """
    What:  Full post returned by GET /blog/{id}.

    `views` already includes the read that produced this response.
    """

    content: str
    likes: int = Field(default=0, description="Number of users who liked this post")


class LikeResponse(BaseModel):
    """Returned by POST /blog/{id}/like."""

    id: uuid.UUID = Field(description="Id of the liked post")
    likes: int = Field(description="Total likes on the post after this one")
