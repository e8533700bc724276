"""
Tests for core security utilities.

Tests:
- Password hashing and verification
- JWT access token creation and validation
- Token expiration and tampering
"""

import pytest
from datetime import timedelta
import jwt as pyjwt

from core.security import (
    hash_password,
    verify_password,
    create_access_token,
    verify_jwt_token,
)
from core.config import settings


class TestPasswordHashing:
    """Test password hashing and verification."""

    def test_hash_password(self):
        """Test password hashing."""
        password = "SecurePassword123!"
        hashed = hash_password(password)

        assert isinstance(hashed, str)
        assert hashed != password
        assert hashed.startswith("$2b$")  # bcrypt format

    def test_hash_password_different_each_time(self):
        """Test that hashing same password produces different hashes."""
        password = "SecurePassword123!"

        assert hash_password(password) != hash_password(password)  # Different salts

    def test_verify_password_success(self):
        hashed = hash_password("SecurePassword123!")

        assert verify_password("SecurePassword123!", hashed) is True

    def test_verify_password_failure(self):
        hashed = hash_password("SecurePassword123!")

        assert verify_password("WrongPassword123!", hashed) is False
        assert verify_password("", hashed) is False

    def test_verify_against_malformed_hash(self):
        """A corrupt stored hash fails verification instead of raising."""
        assert verify_password("anything", "not-a-bcrypt-hash") is False
        assert verify_password("anything", "") is False


class TestJWTTokens:
    """Test JWT token creation and validation."""

    def test_create_access_token(self):
        token = create_access_token(user_id=1, email="test@example.com", role="recruiter")

        payload = pyjwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        assert payload["user_id"] == 1
        assert payload["email"] == "test@example.com"
        assert payload["role"] == "recruiter"
        assert payload["type"] == "access"
        assert payload["exp"] > payload["iat"]

    def test_verify_round_trip(self):
        token = create_access_token(user_id=42, email="a@b.com", role="admin")

        payload = verify_jwt_token(token)
        assert payload["user_id"] == 42

    def test_expired_token(self):
        token = create_access_token(
            user_id=1, email="a@b.com", role="recruiter", expires_delta=timedelta(seconds=-5)
        )

        with pytest.raises(pyjwt.ExpiredSignatureError):
            verify_jwt_token(token)

    def test_wrong_secret(self):
        token = create_access_token(
            user_id=1, email="a@b.com", role="recruiter", secret_key="another-secret-key-of-decent-length"
        )

        with pytest.raises(pyjwt.InvalidTokenError):
            verify_jwt_token(token)

    def test_non_access_token_rejected(self):
        token = pyjwt.encode(
            {"user_id": 1, "type": "refresh"},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(pyjwt.InvalidTokenError, match="Not an access token"):
            verify_jwt_token(token)

    def test_garbage_token(self):
        with pytest.raises(pyjwt.InvalidTokenError):
            verify_jwt_token("not.a.jwt")
