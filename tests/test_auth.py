"""Tests for bearer token handling and the authentication dependency."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt
from sqlalchemy.exc import OperationalError

from src.config import get_settings
from src.services.auth import (
    TokenError,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

ME = "/api/v1/auth/me"


def _sign(payload: dict, secret: str | None = None) -> str:
    settings = get_settings()
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def test_password_hash_roundtrip():
    """Test that hashes verify only the original password."""
    hashed = get_password_hash("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_token_carries_user_id():
    """Test that a fresh token decodes to its user id."""
    token = create_access_token(42, "a@x.com")
    assert decode_access_token(token) == 42


def test_expired_token_is_rejected():
    """Test that expired tokens raise a distinct reason."""
    token = create_access_token(42, "a@x.com", expires_minutes=-5)
    with pytest.raises(TokenError, match="expired"):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    """Test that tokens signed with a foreign secret are invalid."""
    token = _sign(
        {"sub": "42", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        secret="some-other-secret",
    )
    with pytest.raises(TokenError, match="Invalid token"):
        decode_access_token(token)


@pytest.mark.parametrize("subject", ["abc", "0", "-3", "2147483648", "99999999999999999999"])
def test_token_with_unusable_subject_is_rejected(subject):
    """Test that subjects which are not positive integers are refused."""
    token = _sign({"sub": subject, "exp": datetime.now(UTC) + timedelta(minutes=5)})
    with pytest.raises(TokenError, match="Invalid token payload"):
        decode_access_token(token)


def test_missing_header(client):
    """Test that a request without Authorization is unauthorized."""
    response = client.get(ME)
    assert response.status_code == 401
    assert response.json()["message"] == "Authorization header missing"


@pytest.mark.parametrize("header", ["Token abc", "Bearer", "Basic dXNlcjpwYXNz"])
def test_malformed_header(client, header):
    """Test that headers without a bearer token are unauthorized."""
    response = client.get(ME, headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json()["message"] == "Authorization header missing or invalid"


def test_bearer_scheme_is_case_insensitive(client, auth_headers):
    """Test that the scheme name may use any case."""
    token = auth_headers["Authorization"].split(" ", 1)[1]
    response = client.get(ME, headers={"Authorization": f"bearer {token}"})
    assert response.status_code == 200


def test_garbage_token(client):
    """Test that an unparseable token is unauthorized."""
    response = client.get(ME, headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_expired_token(client, auth_headers):
    """Test that an expired token for a real user is unauthorized."""
    token = create_access_token(auth_headers.user_id, auth_headers.email, expires_minutes=-1)
    response = client.get(ME, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_token_for_unknown_user(client):
    """Test that a well-formed token for a missing user is unauthorized."""
    token = create_access_token(999999, "ghost@example.com")
    response = client.get(ME, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


def test_identity_matches_token_subject(client, auth_headers, other_author):
    """Test that the resolved identity is the token's subject."""
    token = create_access_token(other_author.id, other_author.email)
    response = client.get(ME, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["user"]["id"] == other_author.id


def test_store_failure_during_auth_is_internal_error(client, monkeypatch):
    """Test that a store fault while resolving the user is a 500, not a 401."""

    def broken_lookup(db, user_id):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    monkeypatch.setattr("src.api.dependencies.get_user_by_id", broken_lookup)

    token = create_access_token(1, "a@x.com")
    response = client.get(ME, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


def test_token_with_oversized_subject_is_unauthorized(client):
    """Test that a subject past the id column range never reaches the store."""
    token = _sign({"sub": "99999999999999999999", "exp": datetime.now(UTC) + timedelta(minutes=5)})
    response = client.get(ME, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token payload"
