# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# Tokens are signed locally with the HS256 secret from the test environment.
# =============================================================================

import time

import pytest
from fastapi import HTTPException
from jose import jwt

from app.auth.dependencies import decode_token
from app.config import settings
from tests.conftest import TEST_USER_ID


def make_token(**overrides) -> str:
    claims = {
        "sub": str(TEST_USER_ID),
        "email": "chef@example.com",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
    }
    claims.update(overrides)
    return jwt.encode(claims, settings.SUPABASE_JWT_SECRET, algorithm="HS256")


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Token Decoding
# =============================================================================

class TestDecodeToken:
    """Test JWT verification."""

    def test_valid_token(self):
        user = decode_token(make_token())

        assert user.id == TEST_USER_ID
        assert user.email == "chef@example.com"

    def test_expired_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(make_token(exp=int(time.time()) - 60))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_wrong_secret(self):
        token = jwt.encode(
            {"sub": str(TEST_USER_ID), "aud": "authenticated"},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)
        assert exc_info.value.status_code == 401

    def test_wrong_audience(self):
        with pytest.raises(HTTPException):
            decode_token(make_token(aud="anon"))

    def test_malformed_subject(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(make_token(sub="not-a-uuid"))
        assert "malformed" in exc_info.value.detail

    def test_garbage_token(self):
        with pytest.raises(HTTPException):
            decode_token("not.a.jwt")


# =============================================================================
# Endpoints
# =============================================================================

class TestAuthEndpoints:
    """Test /api/v1/auth routes with real token verification."""

    def test_missing_token_is_401(self, anonymous_client):
        response = anonymous_client.get("/api/v1/auth/verify")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_verify(self, anonymous_client):
        response = anonymous_client.get("/api/v1/auth/verify", headers=auth_header(make_token()))

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "user_id": str(TEST_USER_ID),
            "email": "chef@example.com",
        }

    def test_me_lists_memberships(self, anonymous_client, fake_supabase):
        fake_supabase.queue("business_profile_users", [
            {"business_profile_id": "bp-1", "role": "owner", "business_profiles": {"name": "Roma"}},
            {"business_profile_id": "bp-2", "role": None, "business_profiles": None},
        ])

        response = anonymous_client.get("/api/v1/auth/me", headers=auth_header(make_token()))

        assert response.status_code == 200
        memberships = response.json()["memberships"]
        assert memberships[0] == {"business_profile_id": "bp-1", "business_name": "Roma", "role": "owner"}
        assert memberships[1]["business_name"] is None
        assert memberships[1]["role"] == "staff"

    def test_protected_resource_requires_token(self, anonymous_client):
        response = anonymous_client.get("/api/v1/inventory")

        assert response.status_code == 401

    def test_user_without_profile_gets_404(self, anonymous_client, fake_supabase):
        response = anonymous_client.get("/api/v1/inventory", headers=auth_header(make_token()))

        assert response.status_code == 404
        assert response.json()["code"] == "BUSINESS_PROFILE_NOT_FOUND"

    def test_owner_without_membership_resolves_owned_profile(self, anonymous_client, fake_supabase):
        fake_supabase.queue("business_profiles", [{"id": "bp-owned"}])

        response = anonymous_client.get("/api/v1/inventory", headers=auth_header(make_token()))

        assert response.status_code == 200
        ingredient_query = fake_supabase.queries_for("ingredients")[0]
        assert ("business_profile_id", "bp-owned") in ingredient_query.args_of("eq")
