"""
AWS Cognito JWT validation for the internal search surface.

Fetches the user pool JWKS, verifies access tokens, and turns their claims
into the caller identity (account + permissions) used by route guards.
"""
import time
import logging
from typing import Optional

import httpx
from jose import jwt, jwk, JWTError
from jose.exceptions import JWKError

from app.core.config import get_settings
from app.utils.type_converters import to_int

logger = logging.getLogger(__name__)

_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


async def get_jwks() -> dict:
    """Fetch the user pool JWKS, reusing the cached copy while it is fresh."""
    global _jwks_cache, _jwks_cache_time

    settings = get_settings()
    now = time.time()

    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(settings.cognito_jwks_url, timeout=10.0)
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch Cognito JWKS: {e}")
        if _jwks_cache:
            logger.warning("Using stale JWKS cache")
            return _jwks_cache
        raise

    _jwks_cache = response.json()
    _jwks_cache_time = now
    logger.info("Fetched Cognito JWKS")
    return _jwks_cache


def find_signing_key(token: str, jwks: dict) -> Optional[dict]:
    """Return the JWKS entry matching the token's ``kid`` header, if any."""
    kid = jwt.get_unverified_header(token).get("kid")
    if not kid:
        logger.warning("Token missing 'kid' header")
        return None
    return next((key for key in jwks.get("keys", []) if key.get("kid") == kid), None)


async def verify_cognito_token(token: str) -> dict:
    """
    Verify a Cognito access token and return its claims.

    Raises:
        JWTError: If the signature, expiry, issuer, token use or client id
            does not check out.
    """
    settings = get_settings()

    signing_key = find_signing_key(token, await get_jwks())
    if not signing_key:
        raise JWTError("Unable to find signing key for token")

    try:
        public_key = jwk.construct(signing_key)
    except JWKError as e:
        logger.error(f"Failed to construct public key: {e}")
        raise JWTError(f"Invalid signing key: {e}")

    payload = jwt.decode(
        token,
        public_key,
        algorithms=["RS256"],
        issuer=settings.cognito_issuer,
        options={"verify_aud": False},  # access tokens carry client_id, not aud
    )

    if payload.get("token_use") != "access":
        raise JWTError(f"Invalid token_use: expected 'access', got '{payload.get('token_use')}'")

    if settings.cognito_app_client_id and payload.get("client_id") != settings.cognito_app_client_id:
        raise JWTError("Token client_id does not match configured app client")

    return payload


def extract_user_info(payload: dict) -> dict:
    """
    Build the caller identity from token claims.

    Permissions are the union of Cognito groups and OAuth scopes, e.g. a group
    named ``SEARCH:READ`` grants READ on the SEARCH securable.
    """
    settings = get_settings()
    groups = payload.get("cognito:groups", [])
    scopes = payload.get("scope", "").split()
    return {
        "id": payload.get("sub"),
        "username": payload.get("username"),
        "email": payload.get("email"),
        "account_id": to_int(payload.get(settings.cognito_account_claim)),
        "groups": groups,
        "permissions": sorted(set(groups) | set(scopes)),
    }
