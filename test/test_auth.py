"""
Tests for access token verification
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from notifications_api.auth import decode_access_token, get_current_identity
from notifications_api.config import settings
from notifications_api.exceptions import AuthenticationError, InvalidTokenError, TokenExpiredError


def encode(payload: dict, key: str | None = None) -> str:
    return jwt.encode(payload, key or settings.secret_key, algorithm=settings.algorithm)


class TestDecodeAccessToken:
    def test_valid_token(self):
        token = encode({"sub": "keycloak-sub-1", "email": "person@example.com"})

        identity = decode_access_token(token)

        assert identity.sub == "keycloak-sub-1"
        assert identity.email == "person@example.com"

    def test_email_claim_is_optional(self):
        identity = decode_access_token(encode({"sub": "keycloak-sub-1"}))
        assert identity.email is None

    def test_expired_token(self):
        token = encode({"sub": "keycloak-sub-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)})

        with pytest.raises(TokenExpiredError):
            decode_access_token(token)

    def test_wrong_signature(self):
        token = encode({"sub": "keycloak-sub-1"}, key="another-secret")

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_missing_sub(self):
        with pytest.raises(InvalidTokenError) as exc_info:
            decode_access_token(encode({"email": "person@example.com"}))

        assert exc_info.value.message == "Token does not contain 'sub' field."


class TestGetCurrentIdentity:
    async def test_missing_token(self):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_identity(None)

        assert exc_info.value.message == "Not authenticated"

    async def test_returns_identity(self):
        identity = await get_current_identity(encode({"sub": "keycloak-sub-1"}))
        assert identity.sub == "keycloak-sub-1"
