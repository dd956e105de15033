"""Tests for ID token verification and the session cookie flow."""

import time
from dataclasses import dataclass
from unittest.mock import MagicMock, patch

import jwt as pyjwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi import HTTPException

from venture_hub.core.auth import (
    IdentityProvider,
    dev_user,
    session_claims,
    validate_auth_config,
    verify_id_token,
)
from venture_hub.core.config import Settings

pytestmark = pytest.mark.unit

# ---------------------------------------------------------------------------
# RSA keypair generated once for entire test module
# ---------------------------------------------------------------------------
_private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
_public_key = _private_key.public_key()

_GOOGLE_CLIENT_ID = "client-123.apps.googleusercontent.com"
_AZURE_CLIENT_ID = "azure-app-456"
_TENANT = "tenant-789"


@dataclass
class _FakeSigningKey:
    key: object


def _mock_jwks_client():
    client = MagicMock()
    client.get_signing_key_from_jwt.return_value = _FakeSigningKey(key=_public_key)
    return client


def _sign(payload: dict) -> str:
    return pyjwt.encode(payload, _private_key, algorithm="RS256", headers={"kid": "test-kid"})


def _claims(**overrides) -> dict:
    now = int(time.time())
    claims = {
        "sub": "google-sub-1",
        "iss": "https://accounts.google.com",
        "aud": _GOOGLE_CLIENT_ID,
        "iat": now,
        "exp": now + 600,
        "email": "ada@example.com",
        "email_verified": True,
        "given_name": "Ada",
        "family_name": "Lovelace",
    }
    claims.update(overrides)
    return claims


@pytest.fixture
def auth_settings():
    return Settings(
        _env_file=None,
        environment="test",
        google_client_id=_GOOGLE_CLIENT_ID,
        azure_client_id=_AZURE_CLIENT_ID,
        azure_tenant_id="common",
    )


@pytest.fixture(autouse=True)
def _jwks():
    with patch("venture_hub.core.auth.get_jwks_client", return_value=_mock_jwks_client()):
        yield


class TestVerifyIdToken:
    def test_valid_google_token(self, auth_settings):
        claims = verify_id_token(_sign(_claims()), IdentityProvider.GOOGLE, auth_settings)
        assert claims["sub"] == "google-sub-1"

    def test_expired_token(self, auth_settings):
        token = _sign(_claims(iat=int(time.time()) - 7200, exp=int(time.time()) - 3600))

        with pytest.raises(HTTPException) as exc_info:
            verify_id_token(token, IdentityProvider.GOOGLE, auth_settings)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token expired"

    def test_wrong_audience(self, auth_settings):
        with pytest.raises(HTTPException) as exc_info:
            verify_id_token(_sign(_claims(aud="someone-else")), IdentityProvider.GOOGLE, auth_settings)
        assert "aud mismatch" in exc_info.value.detail

    def test_wrong_issuer(self, auth_settings):
        with pytest.raises(HTTPException) as exc_info:
            verify_id_token(_sign(_claims(iss="https://evil.example.com")), IdentityProvider.GOOGLE, auth_settings)
        assert "iss mismatch" in exc_info.value.detail

    def test_azure_multi_tenant_issuer_uses_token_tenant(self, auth_settings):
        token = _sign(_claims(
            iss=f"https://login.microsoftonline.com/{_TENANT}/v2.0",
            aud=_AZURE_CLIENT_ID,
            tid=_TENANT,
        ))
        claims = verify_id_token(token, IdentityProvider.AZURE, auth_settings)
        assert claims["tid"] == _TENANT

    def test_unconfigured_provider_is_500(self):
        settings = Settings(_env_file=None, google_client_id="")
        with pytest.raises(HTTPException) as exc_info:
            verify_id_token("token", IdentityProvider.GOOGLE, settings)
        assert exc_info.value.status_code == 500


class TestSessionClaims:
    def test_splits_display_name_when_given_name_missing(self):
        kept = session_claims(
            {"sub": "s", "name": "Grace Brewster Hopper", "preferred_username": "grace@example.com"},
            IdentityProvider.AZURE,
        )
        assert kept == {
            "sub": "s",
            "email": None,
            "first_name": "Grace",
            "last_name": "Brewster Hopper",
            "profile_image_url": None,
            "provider": "azure",
        }

    def test_unverified_google_email_dropped(self):
        kept = session_claims(_claims(email_verified=False), IdentityProvider.GOOGLE)
        assert kept["email"] is None

    def test_verified_google_email_kept(self):
        assert session_claims(_claims(), IdentityProvider.GOOGLE)["email"] == "ada@example.com"

    def test_azure_email_claim_kept(self):
        kept = session_claims({"sub": "s", "email": "grace@example.com"}, IdentityProvider.AZURE)
        assert kept["email"] == "grace@example.com"


class TestDevBypass:
    def test_refused_in_production(self):
        with pytest.raises(RuntimeError):
            validate_auth_config(Settings(_env_file=None, environment="production", dev_auth_bypass=True))

    def test_only_enabled_in_development(self):
        assert Settings(_env_file=None, environment="development", dev_auth_bypass=True).dev_auth_enabled
        assert not Settings(_env_file=None, environment="test", dev_auth_bypass=True).dev_auth_enabled

    def test_dev_user_claims(self):
        user = dev_user(Settings(_env_file=None, dev_user_id="dev-9", dev_user_type="investor"))
        assert user.user_id == "dev-9"
        assert user.claims["user_type"] == "investor"


@pytest.mark.integration
class TestSessionFlow:
    def test_login_then_profile_then_logout(self, api_client):
        with patch("venture_hub.api.routes.auth.verify_id_token", return_value=_claims()):
            response = api_client.post("/api/auth/session", json={"provider": "google", "id_token": "tok"})

        assert response.status_code == 200
        assert response.json()["id"] == "google-sub-1"

        profile = api_client.get("/api/auth/user")
        assert profile.status_code == 200
        assert profile.json()["first_name"] == "Ada"
        assert profile.json()["user_type"] == "entrepreneur"

        assert api_client.post("/api/auth/logout").json() == {"success": True}
        assert api_client.get("/api/auth/user").status_code == 401

    def test_login_matching_seeded_email_keeps_default_role(self, api_client):
        claims = _claims(sub="google-sub-2", email="investor@superuser.com", given_name="Sarah")
        with patch("venture_hub.api.routes.auth.verify_id_token", return_value=claims):
            response = api_client.post("/api/auth/session", json={"provider": "google", "id_token": "tok"})

        body = response.json()
        assert body["email"] == "investor@superuser.com"
        assert body["first_name"] == "Sarah"
        assert body["user_type"] == "entrepreneur"
        assert body["verified"] is False

    def test_unverified_email_cannot_claim_seeded_admin(self, api_client):
        """An unverified address never links to a seeded profile."""
        claims = _claims(sub="attacker-sub", email="admin@superuser.com", email_verified=False)
        with patch("venture_hub.api.routes.auth.verify_id_token", return_value=claims):
            api_client.post("/api/auth/session", json={"provider": "google", "id_token": "tok"})

        profile = api_client.get("/api/auth/user").json()
        assert profile["id"] == "attacker-sub"
        assert profile["email"] is None
        assert profile["user_type"] == "entrepreneur"
        assert profile["verified"] is False

    def test_unknown_provider_rejected(self, api_client):
        response = api_client.post("/api/auth/session", json={"provider": "myspace", "id_token": "tok"})
        assert response.status_code == 400
