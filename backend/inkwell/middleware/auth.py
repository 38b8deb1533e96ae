"""
Inkwell Backend: Bearer Token Authorization
==============================================

What:  FastAPI dependency guarding every route except signup, signin and health.
How:   Reads `Authorization: Bearer <token>` through HTTPBearer, verifies it
       with the CredentialService and returns the user id. The id is also
       stored on `request.state.user_id` for logging.
When:  Runs before the route body, and therefore before body validation in
       the handler.

Failure modes (all → UnauthenticatedError, HTTP 401):
    - no Authorization header
    - scheme other than Bearer
    - bad signature, malformed or expired token
"""

import logging
import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inkwell.exceptions import InvalidTokenError, UnauthenticatedError
from inkwell.middleware.request_id import request_id_var
from inkwell.services.credentials import credential_service

logger = logging.getLogger(__name__)

# auto_error=False: a missing header reaches require_user_id as None, so the
# 401 uses the application's error format instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


async def require_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> uuid.UUID:
    """Resolve the authenticated user's id or raise UnauthenticatedError."""
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise UnauthenticatedError()

    try:
        user_id = credential_service.verify_token(credentials.credentials)
    except InvalidTokenError as exc:
        logger.info("[%s] Rejected bearer token: %s", request_id_var.get(""), exc.message)
        raise UnauthenticatedError(message="Your session is invalid or has expired. Please sign in again.") from exc

    request.state.user_id = user_id
    return user_id
