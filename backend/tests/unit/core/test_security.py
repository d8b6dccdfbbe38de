"""
Unit Tests for Security Module
Tests for: password hashing, JWT tokens, reset token digests
"""
import pytest
from datetime import timedelta
from jose import jwt

from app.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    create_refresh_token,
    create_password_reset_token,
    decode_token,
    hash_token,
    token_matches,
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    PASSWORD_RESET_TOKEN_TYPE,
)
from app.core.config import settings
from app.core.exceptions import InvalidTokenError


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_password_returns_different_value(self):
        password = "testpassword123"
        hashed = get_password_hash(password)

        assert hashed != password
        assert len(hashed) > 0

    def test_hash_password_different_each_time(self):
        """Bcrypt generates different salts"""
        password = "testpassword123"

        assert get_password_hash(password) != get_password_hash(password)

    def test_verify_password_correct(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("testpassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_without_hash(self):
        assert verify_password("anything", None) is False
        assert verify_password("anything", "") is False

    def test_long_password_truncated_consistently(self):
        """Bcrypt only looks at the first 72 bytes"""
        password = "a" * 100
        hashed = get_password_hash(password)

        assert verify_password(password, hashed) is True
        assert verify_password("a" * 72, hashed) is True


class TestJWTTokens:
    """Test JWT token functions"""

    def test_access_token_payload(self):
        token = create_access_token({"sub": "user-123", "email": "a@example.com"})

        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert payload["sub"] == "user-123"
        assert payload["type"] == ACCESS_TOKEN_TYPE
        assert "exp" in payload

    def test_refresh_token_type(self):
        token = create_refresh_token({"sub": "user-123"})

        payload = decode_token(token, expected_type=REFRESH_TOKEN_TYPE)
        assert payload["type"] == REFRESH_TOKEN_TYPE

    def test_reset_token_carries_email(self):
        token = create_password_reset_token("user-123", "a@example.com")

        payload = decode_token(token, expected_type=PASSWORD_RESET_TOKEN_TYPE)
        assert payload["sub"] == "user-123"
        assert payload["email"] == "a@example.com"

    def test_decode_rejects_wrong_type(self):
        token = create_refresh_token({"sub": "user-123"})

        with pytest.raises(InvalidTokenError) as exc_info:
            decode_token(token, expected_type=ACCESS_TOKEN_TYPE)

        assert exc_info.value.message == "Invalid token type"

    def test_decode_rejects_expired_token(self):
        token = create_access_token({"sub": "user-123"}, expires_delta=timedelta(seconds=-1))

        with pytest.raises(InvalidTokenError):
            decode_token(token)

    def test_decode_rejects_garbage(self):
        with pytest.raises(InvalidTokenError):
            decode_token("not.a.token")

    def test_decode_rejects_other_secret(self):
        token = jwt.encode({"sub": "user-123", "type": "access"}, "another-secret", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            decode_token(token)


class TestTokenDigests:

    def test_hash_token_is_stable(self):
        assert hash_token("abc") == hash_token("abc")
        assert len(hash_token("abc")) == 64

    def test_token_matches(self):
        digest = hash_token("reset-token")

        assert token_matches("reset-token", digest) is True
        assert token_matches("other-token", digest) is False

    def test_token_matches_without_digest(self):
        assert token_matches("reset-token", None) is False
