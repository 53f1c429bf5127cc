"""
Auth business logic: OAuth code exchange and current-user resolution.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import HTTPException, status

from core import supabase

from . import schemas, security

logger = logging.getLogger(__name__)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )


def _to_auth_user(user_data: dict[str, Any]) -> schemas.AuthUser:
    email = user_data.get("email")
    return schemas.AuthUser(
        id=str(user_data["id"]).strip(),
        email=str(email) if email else None,
    )


async def exchange_code(code: str, *, code_verifier: str | None = None) -> schemas.AuthSession:
    """
    Exchange an authorization code for a session.

    Raises `supabase.SupabaseError` when the provider rejects the code.
    """
    data = await supabase.exchange_code_for_session(code=code, code_verifier=code_verifier)
    user_data = data.get("user")
    return schemas.AuthSession(
        access_token=str(data["access_token"]),
        refresh_token=str(data.get("refresh_token") or ""),
        expires_in=int(data.get("expires_in") or 3600),
        token_type=str(data.get("token_type") or "bearer"),
        user=_to_auth_user(user_data) if isinstance(user_data, dict) and user_data.get("id") else None,
    )


def _user_from_local_token(access_token: str) -> schemas.AuthUser:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        logger.warning("Rejected access token: %s", exc)
        raise _unauthorized() from exc
    email = payload.get("email")
    return schemas.AuthUser(id=str(payload["sub"]).strip(), email=str(email) if email else None)


async def get_user_from_access_token(access_token: str) -> schemas.AuthUser:
    if security.jwt_secret() is not None:
        return _user_from_local_token(access_token)

    try:
        user_data = await supabase.get_user(access_token=access_token)
    except supabase.SupabaseError as exc:
        logger.warning("Auth provider rejected session: %s", exc)
        raise _unauthorized() from exc
    except (httpx.HTTPError, RuntimeError) as exc:
        # Transport failures and missing provider settings are server faults.
        logger.error("Auth provider unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc) or "Internal Server Error",
        ) from exc

    return _to_auth_user(user_data)
