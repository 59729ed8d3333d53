from __future__ import annotations

from typing import Optional

import jwt
from fastapi import HTTPException, status

from petdesk.config import Settings, get_settings


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def parse_api_keys(raw: Optional[str]) -> set[str]:
    return {value.strip() for value in (raw or "").split(",") if value.strip()}


def auth_enabled(settings: Optional[Settings] = None) -> bool:
    settings = settings or get_settings()
    return bool(parse_api_keys(settings.API_KEYS) or settings.JWT_SECRET or settings.JWT_REQUIRED)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def decode_token(token: str, settings: Settings) -> dict:
    if not settings.JWT_SECRET:
        raise _unauthorized("JWT auth is not configured")
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"verify_aud": bool(settings.JWT_AUDIENCE)},
        )
    except jwt.PyJWTError as exc:
        raise _unauthorized("Invalid JWT") from exc


def authenticate_request(
    api_key: Optional[str] = None,
    authorization: Optional[str] = None,
    *,
    require_auth: bool = False,
) -> Optional[dict]:
    """Resolve the caller from an API key or bearer token.

    An installation with no API keys and no JWT secret stays open, so the
    dashboard works out of the box for a single operator. With JWT_REQUIRED
    only a valid token is accepted.
    """
    settings = get_settings()
    if not auth_enabled(settings):
        return None

    if not settings.JWT_REQUIRED and api_key and api_key in parse_api_keys(settings.API_KEYS):
        return {"auth_type": "api_key"}

    token = bearer_token(authorization)
    if token:
        try:
            return {"auth_type": "jwt", "payload": decode_token(token, settings)}
        except HTTPException:
            if settings.JWT_REQUIRED:
                raise

    if require_auth or settings.JWT_REQUIRED:
        raise _unauthorized("Not authenticated")
    return None


__all__ = ["auth_enabled", "authenticate_request", "bearer_token", "decode_token", "parse_api_keys"]
