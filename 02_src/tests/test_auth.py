"""Tests for password hashing and tokens."""

from datetime import timedelta

import jwt
import pytest

from staffdir.auth import TokenError, TokenService, hash_password, verify_password
from staffdir.models import Employee


@pytest.fixture
def employee():
    return Employee(
        id="0" * 32,
        name="Ada",
        email="ada@example.com",
        department="Engineering",
        role="Engineer",
        password_hash="unused",
    )


class TestPasswords:
    """Tests for hash_password() and verify_password()."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert hashed.startswith("$argon2")

    def test_verify_correct_password(self):
        assert verify_password("correct horse", hash_password("correct horse"))

    def test_verify_wrong_password(self):
        assert not verify_password("battery staple", hash_password("correct horse"))

    def test_verify_against_garbage_hash(self):
        assert not verify_password("correct horse", "not-a-hash")


class TestTokenService:
    """Tests for TokenService."""

    def test_issue_and_verify(self, employee):
        service = TokenService("secret")
        claims = service.verify(service.issue(employee))

        assert claims["email"] == "ada@example.com"
        assert claims["id"] == employee.id

    def test_default_expiry_is_eight_hours(self, employee):
        token = TokenService("secret").issue(employee)
        claims = jwt.decode(token, "secret", algorithms=["HS256"])
        assert claims["exp"] - claims["iat"] == 8 * 3600

    def test_expired_token(self, employee):
        service = TokenService("secret", expires_in=timedelta(seconds=-1))

        with pytest.raises(TokenError) as exc_info:
            service.verify(service.issue(employee))
        assert exc_info.value.expired is True

    def test_wrong_secret(self, employee):
        token = TokenService("secret").issue(employee)

        with pytest.raises(TokenError) as exc_info:
            TokenService("other-secret").verify(token)
        assert exc_info.value.expired is False

    def test_garbage_token(self):
        with pytest.raises(TokenError):
            TokenService("secret").verify("not.a.token")
