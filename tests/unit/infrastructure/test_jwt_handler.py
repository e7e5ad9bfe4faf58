"""
Unit tests for the JWT handler.
"""

from datetime import timedelta

import pytest
from jose import jwt

from task_tracker.config import Settings
from task_tracker.domain.models.base import ValidationError, utc_now
from task_tracker.infrastructure.auth.jwt_handler import JWTHandler


@pytest.fixture
def handler():
    return JWTHandler(Settings(jwt_secret_key="test-secret", jwt_algorithm="HS256"))


class TestJWTHandler:
    """Test cases for JWTHandler."""

    def test_create_and_verify(self, handler):
        token = handler.create_access_token("user-42")

        payload = handler.verify_token(token)

        assert payload["sub"] == "user-42"
        assert payload["exp"] > payload["iat"]
        assert handler.get_user_id(token) == "user-42"

    def test_bearer_prefix_is_accepted(self, handler):
        token = handler.create_access_token("user-42")

        assert handler.get_user_id(f"Bearer {token}") == "user-42"

    def test_expired_token(self, handler):
        token = handler.create_access_token("user-42", expires_minutes=-5)

        with pytest.raises(ValidationError):
            handler.verify_token(token)
        assert handler.is_token_valid(token) is False

    def test_wrong_secret(self, handler):
        other = JWTHandler(Settings(jwt_secret_key="another-secret"))
        token = other.create_access_token("user-42")

        with pytest.raises(ValidationError):
            handler.get_user_id(token)

    def test_missing_subject(self, handler):
        exp = int((utc_now() + timedelta(minutes=5)).timestamp())
        token = jwt.encode({"exp": exp}, "test-secret", algorithm="HS256")

        with pytest.raises(ValidationError) as exc_info:
            handler.verify_token(token)

        assert "sub" in exc_info.value.message

    def test_garbage_token(self, handler):
        assert handler.is_token_valid("not.a.token") is False
