"""
Inkwell Backend: Request Validation
======================================

What:  One check per request shape (signup, signin, create-post, update-post).
How:   Each check runs the raw JSON mapping through its Pydantic model and
       returns the narrowed model, or raises ValidationError naming the
       failing fields.
When:  Called by the route handlers before any service or database call,
       so a rejected request has no side effects.

Routes take the body as a plain mapping and call these functions instead of
letting FastAPI validate a typed body; that keeps the error format (400 with
field detail) identical for every endpoint.
"""

from typing import Any, Dict, List, Mapping, Type, TypeVar

import pydantic
from pydantic import BaseModel

from inkwell.exceptions import ValidationError
from inkwell.schemas.post import CreatePostInput, UpdatePostInput
from inkwell.schemas.user import SigninInput, SignupInput

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten Pydantic error dicts into `{"field": "a.b", "message": "..."}` entries."""
    formatted = []
    for err in errors:
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        formatted.append({"field": field, "message": err.get("msg", "invalid value")})
    return formatted


def _validate(model: Type[ModelT], raw: Any) -> ModelT:
    if not isinstance(raw, Mapping):
        raise ValidationError(message="Request body must be a JSON object", field="body")
    try:
        return model.model_validate(dict(raw))
    except pydantic.ValidationError as exc:
        errors = format_errors(exc.errors())
        first = errors[0]
        raise ValidationError(
            message=f"{first['field']}: {first['message']}",
            field=first["field"],
            errors=errors,
        ) from exc


def validate_signup(raw: Any) -> SignupInput:
    return _validate(SignupInput, raw)


def validate_signin(raw: Any) -> SigninInput:
    return _validate(SigninInput, raw)


def validate_create_post(raw: Any) -> CreatePostInput:
    return _validate(CreatePostInput, raw)


def validate_update_post(raw: Any) -> UpdatePostInput:
    return _validate(UpdatePostInput, raw)
