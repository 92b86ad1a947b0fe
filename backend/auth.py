"""
Authentication module for session JWTs and API keys.
Provides FastAPI dependencies for securing endpoints.

- Web clients send a session JWT (HS256, shared secret) as a Bearer token.
- The mobile health-sync app sends an API key bound to a user
  as "key:user_id".
"""
import logging
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate via API key OR session JWT.
    Returns user_id string.

    Usage:
        @app.get("/protected")
        async def protected_route(user_id: str = Depends(get_current_user)):
            return {"user_id": user_id}
    """
    # Option 1: API Key authentication
    if x_api_key:
        return validate_api_key(x_api_key, settings)

    # Option 2: JWT authentication
    if authorization:
        return validate_jwt(authorization, settings)

    raise HTTPException(
        status_code=401,
        detail="Missing authentication. Provide Authorization header or X-API-Key."
    )


def validate_api_key(api_key: str, settings: Settings) -> str:
    """
    Validate API key and return user_id.

    API key format:
    - "sk_abc123:user_12345" -> returns "user_12345"

    Unlike session tokens, a bare key identifies no user and is rejected.
    """
    valid_keys = settings.api_keys_list

    if not valid_keys:
        logger.warning("No API keys configured (API_KEYS env var empty)")
        raise HTTPException(status_code=401, detail="API key authentication not configured")

    key_part, _, user_id = api_key.partition(":")

    if key_part not in valid_keys:
        raise HTTPException(status_code=401, detail="Invalid API key")

    if not user_id:
        raise HTTPException(status_code=401, detail="API key is not bound to a user")

    return user_id


def validate_jwt(authorization: str, settings: Settings) -> str:
    """Validate a session JWT and return its subject."""
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = authorization.split(" ", 1)[1]

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT: {e}")
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")

    user_id = payload.get("sub") or payload.get("userId")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing user ID")
    logger.debug(f"JWT validated for user: {user_id}")
    return str(user_id)
