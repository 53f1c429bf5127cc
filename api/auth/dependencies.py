"""
Auth dependencies for protected FastAPI routes.

Handlers receive the authenticated user as an explicit dependency instead of
building an auth client from the request themselves.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from . import schemas, security, service


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )


def _extract_bearer_token(authorization: str | None) -> str | None:
    raw = (authorization or "").strip()
    if not raw:
        return None

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise _unauthorized()

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise _unauthorized()
    return token


async def get_access_token(request: Request) -> str:
    # Browser requests carry the session cookie; API clients may send a bearer header.
    token = (request.cookies.get(security.ACCESS_TOKEN_COOKIE) or "").strip()
    if token:
        return token

    token = _extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        raise _unauthorized()
    return token


async def get_current_user(access_token: str = Depends(get_access_token)) -> schemas.AuthUser:
    return await service.get_user_from_access_token(access_token)
