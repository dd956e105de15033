"""Session authentication for FastAPI.

The OAuth handshake happens at the identity provider (Google or Azure AD).
The client posts the resulting ID token to ``/api/auth/session``; it is
verified against the provider JWKS and its claims are kept in the signed
session cookie. ``require_auth`` reads them back on every request.
"""

from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache

import jwt as pyjwt
import structlog
from fastapi import HTTPException, Request
from jwt import PyJWKClient

from venture_hub.core.config import Settings, get_settings
from venture_hub.core.exceptions import UnauthorizedError
from venture_hub.core.logging import bind_user

logger = structlog.get_logger(__name__)

SESSION_KEY = "user"

GOOGLE_JWKS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ("https://accounts.google.com", "accounts.google.com")
AZURE_JWKS_URL = "https://login.microsoftonline.com/{tenant}/discovery/v2.0/keys"
AZURE_ISSUER = "https://login.microsoftonline.com/{tenant}/v2.0"


class IdentityProvider(StrEnum):
    GOOGLE = "google"
    AZURE = "azure"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Authenticated user extracted from the session (or the dev bypass)."""

    user_id: str
    claims: dict

    @property
    def email(self) -> str | None:
        return self.claims.get("email")


@lru_cache
def get_jwks_client(jwks_url: str) -> PyJWKClient:
    """Create a cached JWKS client for a provider endpoint."""
    return PyJWKClient(jwks_url, cache_keys=True, lifespan=300)


def _provider_params(provider: IdentityProvider, settings: Settings) -> tuple[str, str]:
    """Return (jwks_url, audience) for a provider, or 500 if it is not configured."""
    if provider is IdentityProvider.GOOGLE:
        if not settings.google_client_id:
            raise HTTPException(status_code=500, detail="Google sign-in is not configured")
        return GOOGLE_JWKS_URL, settings.google_client_id

    if not settings.azure_client_id:
        raise HTTPException(status_code=500, detail="Azure AD sign-in is not configured")
    return AZURE_JWKS_URL.format(tenant=settings.azure_tenant_id), settings.azure_client_id


def _validate_issuer(provider: IdentityProvider, claims: dict, settings: Settings) -> None:
    iss = claims.get("iss")
    if provider is IdentityProvider.GOOGLE:
        if iss not in GOOGLE_ISSUERS:
            raise HTTPException(status_code=401, detail="Invalid issuer (iss mismatch)")
        return

    # Multi-tenant apps ("common") accept the issuer of the token's own tenant
    tenant = claims.get("tid") if settings.azure_tenant_id in ("common", "organizations") else settings.azure_tenant_id
    if not tenant or iss != AZURE_ISSUER.format(tenant=tenant):
        raise HTTPException(status_code=401, detail="Invalid issuer (iss mismatch)")


def verify_id_token(token: str, provider: IdentityProvider, settings: Settings | None = None) -> dict:
    """Verify an OAuth ID token and return its claims.

    Raises ``HTTPException(401)`` on any validation failure.
    """
    settings = settings or get_settings()
    jwks_url, audience = _provider_params(provider, settings)

    try:
        signing_key = get_jwks_client(jwks_url).get_signing_key_from_jwt(token)
        claims = pyjwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=audience,
            options={
                "verify_exp": True,
                "verify_iat": True,
                "require": ["sub", "exp", "iat", "iss", "aud"],
            },
        )
    except pyjwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except pyjwt.InvalidAudienceError:
        raise HTTPException(status_code=401, detail="Unauthorized audience (aud mismatch)")
    except pyjwt.MissingRequiredClaimError as exc:
        raise HTTPException(status_code=401, detail=f"Missing required claim: {exc}")
    except pyjwt.PyJWKClientError as exc:
        raise HTTPException(status_code=401, detail=f"Unable to resolve signing key: {exc}")
    except pyjwt.InvalidTokenError as exc:
        raise HTTPException(status_code=401, detail=f"Invalid token: {exc}")

    _validate_issuer(provider, claims, settings)
    return claims


def _verified_email(claims: dict, provider: IdentityProvider) -> str | None:
    """Email address the provider vouches for, or None.

    Google marks ownership with ``email_verified``. Azure AD's
    ``preferred_username`` is tenant-controlled and never used as an address.
    """
    if provider == IdentityProvider.GOOGLE:
        return claims.get("email") if claims.get("email_verified") is True else None
    return claims.get("email")


def session_claims(claims: dict, provider: IdentityProvider) -> dict:
    """Reduce verified ID token claims to what the session cookie keeps."""
    first_name = claims.get("given_name")
    last_name = claims.get("family_name")
    if not first_name and claims.get("name"):
        first_name, _, rest = claims["name"].partition(" ")
        last_name = last_name or rest or None

    return {
        "sub": claims["sub"],
        "email": _verified_email(claims, provider),
        "first_name": first_name,
        "last_name": last_name,
        "profile_image_url": claims.get("picture"),
        "provider": str(provider),
    }


def dev_user(settings: Settings) -> AuthenticatedUser:
    """Fixed mock user injected when the development bypass is on."""
    return AuthenticatedUser(
        user_id=settings.dev_user_id,
        claims={
            "sub": settings.dev_user_id,
            "email": settings.dev_user_email,
            "first_name": "Dev",
            "last_name": "User",
            "user_type": settings.dev_user_type,
            "provider": "dev",
        },
    )


def validate_auth_config(settings: Settings) -> None:
    """Fail fast if the dev auth bypass is switched on in production."""
    if settings.dev_auth_bypass and settings.environment == "production":
        raise RuntimeError("DEV_AUTH_BYPASS must not be enabled when ENVIRONMENT=production")


async def require_auth(request: Request) -> AuthenticatedUser:
    """FastAPI dependency that returns the signed-in user.

    Also auto-provisions the user's profile in the store on first use.

    Usage::

        @router.get("/protected")
        async def protected(user: AuthenticatedUser = Depends(require_auth)):
            ...
    """
    settings = get_settings()

    if settings.dev_auth_enabled:
        user = dev_user(settings)
        logger.debug("dev_auth_bypass", user_id=user.user_id, path=request.url.path)
    else:
        claims = request.session.get(SESSION_KEY)
        if not claims or not claims.get("sub"):
            raise UnauthorizedError()
        user = AuthenticatedUser(user_id=claims["sub"], claims=claims)

    store = getattr(request.app.state, "store", None)
    if store is not None:
        from venture_hub.repositories.users import UserRepository

        UserRepository(store).provision(user.user_id, user.claims)

    # Set user_id on request state for downstream use (error handlers, logging)
    request.state.user_id = user.user_id
    bind_user(user.user_id)

    return user
