"""
Tests for TokenService and PasswordHasher
"""

import pytest
from datetime import datetime, timedelta, timezone

import jwt

from app.domain.errors import AuthError, ValidationError
from app.services.password_hasher import PasswordHasher
from app.services.token_service import TokenService

SECRET = "unit-test-secret-key-with-at-least-32-bytes"


class TestTokenService:

    def test_issue_and_verify(self):
        svc = TokenService(secret_key=SECRET)

        token = svc.issue(42)

        assert svc.verify(token) == 42

    def test_wrong_signature(self):
        token = TokenService(secret_key=SECRET).issue(42)

        with pytest.raises(AuthError) as exc:
            TokenService(secret_key="another-secret-key-with-enough-bytes-x").verify(token)

        assert exc.value.status_code == 401

    def test_expired_token(self):
        svc = TokenService(secret_key=SECRET)
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "42", "iat": past, "exp": past + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthError):
            svc.verify(token)

    def test_missing_exp_claim(self):
        token = jwt.encode({"sub": "42"}, SECRET, algorithm="HS256")

        with pytest.raises(AuthError):
            TokenService(secret_key=SECRET).verify(token)

    def test_garbage(self):
        with pytest.raises(AuthError):
            TokenService(secret_key=SECRET).verify("not-a-token")

    def test_random_key_when_not_configured(self, monkeypatch):
        monkeypatch.setattr("app.services.token_service.JWT_SECRET_KEY", "")

        first = TokenService()
        second = TokenService()

        assert first.secret_key
        assert first.secret_key != second.secret_key


class TestPasswordHasher:

    def test_hash_and_verify(self):
        hasher = PasswordHasher(rounds=4)

        hashed = hasher.hash("pw1")

        assert hashed != "pw1"
        assert hasher.verify("pw1", hashed)
        assert not hasher.verify("pw2", hashed)

    def test_salted(self):
        hasher = PasswordHasher(rounds=4)

        assert hasher.hash("pw1") != hasher.hash("pw1")

    def test_too_long_password(self):
        with pytest.raises(ValidationError):
            PasswordHasher(rounds=4).hash("x" * 73)

    def test_corrupted_hash(self):
        assert not PasswordHasher(rounds=4).verify("pw1", "not-a-bcrypt-hash")
