"""
Inkwell Backend: User Request/Response Schemas
=================================================

What:  Pydantic models for the /user endpoints.
How:   Input models are applied by inkwell.validation before any service
       logic runs; response models shape what the API returns.

The password field is never part of a response model.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from inkwell.schemas.post import PostSummary

# bcrypt only reads the first 72 bytes of its input and newer releases
# reject anything longer.
MAX_PASSWORD_BYTES = 72


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SignupInput(BaseModel):
    """Body of POST /user/signup."""

    email: EmailStr = Field(description="Login email; must be unused")
    name: str = Field(min_length=1, max_length=50, description="Unique display name")
    password: str = Field(min_length=1, description="Plaintext password, up to 72 bytes")
    bio: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names appear in profile URLs, so they cannot contain slashes or be blank."""
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        if "/" in v:
            raise ValueError("name must not contain '/'")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class SigninInput(BaseModel):
    """Body of POST /user/signin."""

    email: EmailStr
    password: str = Field(min_length=1)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AuthResponse(BaseModel):
    """Returned by signup and signin. The frontend stores `token` and sends it as a bearer token."""

    token: str = Field(description="Signed JWT bearer token")
    name: str = Field(description="Display name of the authenticated user")


class ProfileResponse(BaseModel):
    """
    What:  Public profile of a user.
    Who:   Returned by GET /user/profile/{username}.

    Only published posts are listed, newest first. Email and password hash
    are not exposed.
    """

    name: str
    bio: Optional[str] = None
    created_at: datetime
    posts: List[PostSummary] = Field(default_factory=list)
