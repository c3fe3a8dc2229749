"""
Unit tests for backend/auth.py

Part of AMA-621: Scheduling API surface

Tests cover:
- API key formats ("key" and "key:user_id")
- Missing and malformed credentials
- JWT validation with a patched JWKS client
"""

from unittest.mock import MagicMock, patch

import jwt
import pytest
from fastapi import HTTPException

from backend.auth import get_current_user, validate_api_key, validate_jwt
from backend.settings import Settings


def _settings(**overrides) -> Settings:
    return Settings(environment="test", _env_file=None, **overrides)


@pytest.mark.unit
class TestValidateApiKey:
    """API key authentication."""

    def test_plain_key_is_admin(self):
        assert validate_api_key("sk_test_abc", _settings(api_keys="sk_test_abc")) == "admin"

    def test_key_with_user(self):
        settings = _settings(api_keys="sk_a, sk_b")

        assert validate_api_key("sk_b:user_42", settings) == "user_42"

    def test_unknown_key(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key("sk_other", _settings(api_keys="sk_test_abc"))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid API key"

    def test_no_keys_configured(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key("sk_test_abc", _settings())

        assert exc_info.value.status_code == 401


@pytest.mark.unit
class TestValidateJwt:
    """Clerk JWT authentication."""

    def test_requires_bearer_prefix(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt("Token abc", _settings(clerk_domain="clerk.example.com"))

        assert exc_info.value.status_code == 401

    def test_missing_clerk_domain(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt("Bearer abc", _settings())

        assert exc_info.value.status_code == 500

    def test_valid_token_returns_subject(self):
        jwks_client = MagicMock()
        with patch("backend.auth.get_jwks_client", return_value=jwks_client), \
                patch("backend.auth.jwt.decode", return_value={"sub": "user_123"}):
            user_id = validate_jwt("Bearer token", _settings(clerk_domain="clerk.example.com"))

        assert user_id == "user_123"
        jwks_client.get_signing_key_from_jwt.assert_called_once_with("token")

    def test_expired_token(self):
        with patch("backend.auth.get_jwks_client", return_value=MagicMock()), \
                patch("backend.auth.jwt.decode", side_effect=jwt.ExpiredSignatureError()):
            with pytest.raises(HTTPException) as exc_info:
                validate_jwt("Bearer token", _settings(clerk_domain="clerk.example.com"))

        assert exc_info.value.detail == "Token expired"

    def test_token_without_subject(self):
        with patch("backend.auth.get_jwks_client", return_value=MagicMock()), \
                patch("backend.auth.jwt.decode", return_value={}):
            with pytest.raises(HTTPException) as exc_info:
                validate_jwt("Bearer token", _settings(clerk_domain="clerk.example.com"))

        assert exc_info.value.status_code == 401


@pytest.mark.unit
class TestGetCurrentUser:
    """Header dispatch."""

    @pytest.mark.asyncio
    async def test_api_key_header_wins(self):
        user_id = await get_current_user(
            authorization="Bearer ignored",
            x_api_key="sk_test_abc:user_9",
            settings=_settings(api_keys="sk_test_abc"),
        )

        assert user_id == "user_9"

    @pytest.mark.asyncio
    async def test_no_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(authorization=None, x_api_key=None, settings=_settings())

        assert exc_info.value.status_code == 401
