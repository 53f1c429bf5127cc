"""
Auth security helpers.
"""

from __future__ import annotations

import os
from typing import Any

import jwt

ACCESS_TOKEN_COOKIE = "sb-access-token"
REFRESH_TOKEN_COOKIE = "sb-refresh-token"
CODE_VERIFIER_COOKIE = "sb-code-verifier"

REFRESH_COOKIE_MAX_AGE_S = 30 * 24 * 60 * 60

# Supabase signs user access tokens for this audience.
ACCESS_TOKEN_AUDIENCE = "authenticated"


class AuthSecurityError(RuntimeError):
    pass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw not in {"0", "false", "no", "off"}


def jwt_secret() -> str | None:
    # Optional. Without it, tokens are checked by the auth provider instead.
    return os.environ.get("SUPABASE_JWT_SECRET", "").strip() or None


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def cookie_secure() -> bool:
    return _env_bool("COOKIE_SECURE", True)


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    secret = jwt_secret()
    if secret is None:
        raise AuthSecurityError("SUPABASE_JWT_SECRET is not set.")

    try:
        payload = jwt.decode(
            raw,
            secret,
            algorithms=[jwt_algorithm()],
            audience=ACCESS_TOKEN_AUDIENCE,
        )
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    if not str(payload.get("sub") or "").strip():
        raise AuthSecurityError("Access token has no subject.")

    return payload
