"""
Inkwell Backend: Credential Service
======================================

What:  Password hashing (bcrypt) and session token signing (PyJWT).
How:   Configuration (work factor, secret, algorithm, lifetime) is taken from
       the Settings object passed to the constructor; the service keeps no
       other state.
Who:   UserService (hash/verify/issue) and the auth dependency (verify_token).

Token format:
    HS256 JWT with claims
        sub: user id (string UUID)
        iat: issued-at (UTC seconds)
        exp: expiry (UTC seconds)

    There is no server-side session store. A token stays valid until `exp`
    or until JWT_SECRET changes.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from inkwell.config import Settings, settings
from inkwell.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)


class CredentialService:
    """
    Stateless password and token operations.

    bcrypt calls are CPU-bound (hundreds of milliseconds at the default work
    factor); async callers run them through a threadpool.
    """

    def __init__(self, config: Settings):
        self._rounds = config.bcrypt_rounds
        self._secret = config.jwt_secret
        self._algorithm = config.jwt_algorithm
        self._lifetime = timedelta(minutes=config.jwt_expire_minutes)

    # ── Passwords ─────────────────────────────────────────────────────────

    def hash_password(self, plaintext: str) -> str:
        """
        Hash a password with a fresh salt.

        Two calls with the same plaintext return different strings; both
        verify against the plaintext.
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("ascii")

    def verify_password(self, plaintext: str, hashed: str) -> bool:
        """
        Check a password against a stored bcrypt hash.

        Returns False for a wrong password, a malformed hash or an over-long
        password. It does not raise for bad credentials.
        """
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError):
            logger.debug("Password check failed on a malformed input")
            return False

    # ── Tokens ────────────────────────────────────────────────────────────

    def issue_token(self, user_id: uuid.UUID, expires_in: Optional[timedelta] = None) -> str:
        """Sign a token whose subject is `user_id`, valid for the configured lifetime."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + (expires_in if expires_in is not None else self._lifetime),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str) -> uuid.UUID:
        """
        Return the user id embedded in `token`.

        Raises:
            InvalidTokenError: bad signature, malformed token, expired token,
                               or a subject that is not a user id
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError(message="Token has expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(context={"reason": type(exc).__name__}) from exc

        try:
            return uuid.UUID(str(payload["sub"]))
        except ValueError as exc:
            raise InvalidTokenError(context={"reason": "bad_subject"}) from exc


credential_service = CredentialService(settings)
