"""
Inkwell Backend: Credential Service Unit Tests
=================================================

Covers bcrypt hashing/verification and JWT issue/verify, including expiry,
tampering and wrong-secret cases. bcrypt runs with 4 rounds (conftest).
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from inkwell.config import Settings
from inkwell.exceptions import InvalidTokenError
from inkwell.services.credentials import CredentialService


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self, credentials):
        hashed = credentials.hash_password("p1")
        assert hashed != "p1"
        assert hashed.startswith("$2")

    def test_same_password_hashes_differently(self, credentials):
        """Salted: two hashes of one password differ but both verify."""
        first = credentials.hash_password("correct horse")
        second = credentials.hash_password("correct horse")
        assert first != second
        assert credentials.verify_password("correct horse", first)
        assert credentials.verify_password("correct horse", second)

    @pytest.mark.parametrize("password", ["p1", "a much longer passphrase", "ünïcødé ✓"])
    def test_verify_accepts_original(self, credentials, password):
        assert credentials.verify_password(password, credentials.hash_password(password)) is True

    def test_verify_rejects_other_password(self, credentials):
        hashed = credentials.hash_password("p1")
        assert credentials.verify_password("p2", hashed) is False
        assert credentials.verify_password("", hashed) is False

    def test_verify_returns_false_for_malformed_hash(self, credentials):
        """A corrupt stored hash is a failed check, not an exception."""
        assert credentials.verify_password("p1", "not-a-bcrypt-hash") is False

    def test_work_factor_comes_from_settings(self):
        service = CredentialService(Settings(bcrypt_rounds=5))
        assert service.hash_password("p1").split("$")[2] == "05"


class TestTokens:

    def test_issued_token_verifies_to_user(self, credentials):
        user_id = uuid.uuid4()
        token = credentials.issue_token(user_id)
        assert credentials.verify_token(token) == user_id

    def test_token_carries_subject_and_expiry(self, credentials):
        user_id = uuid.uuid4()
        token = credentials.issue_token(user_id)
        claims = jwt.decode(token, options={"verify_signature": False})
        assert claims["sub"] == str(user_id)
        assert claims["exp"] > claims["iat"]

    def test_expired_token_is_rejected(self, credentials):
        token = credentials.issue_token(uuid.uuid4(), expires_in=timedelta(seconds=-1))
        with pytest.raises(InvalidTokenError, match="expired"):
            credentials.verify_token(token)

    def test_token_from_other_secret_is_rejected(self, credentials):
        other = CredentialService(Settings(jwt_secret="a-completely-different-secret-9876543210"))
        token = other.issue_token(uuid.uuid4())
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(token)

    def test_tampered_token_is_rejected(self, credentials):
        token = credentials.issue_token(uuid.uuid4())
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(tampered)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_is_rejected(self, credentials, token):
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(token)

    def test_non_uuid_subject_is_rejected(self, credentials):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "not-a-uuid", "iat": now, "exp": now + timedelta(minutes=5)},
            "test-secret-not-for-production-0123456789",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(token)

    def test_token_without_expiry_is_rejected(self, credentials):
        token = jwt.encode(
            {"sub": str(uuid.uuid4())},
            "test-secret-not-for-production-0123456789",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            credentials.verify_token(token)
