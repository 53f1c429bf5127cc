"""
Auth API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from core import supabase

from . import schemas, security, service

logger = logging.getLogger(__name__)

router = APIRouter()

AUTH_FAILED_ERROR = "Authentication failed"
EXCHANGE_FAILED_ERROR = "Could not authenticate user"


def _origin(request: Request) -> str:
    return str(request.base_url).rstrip("/")


def _redirect(request: Request, path: str) -> RedirectResponse:
    return RedirectResponse(f"{_origin(request)}{path}", status_code=status.HTTP_302_FOUND)


def _set_session_cookies(response: RedirectResponse, session: schemas.AuthSession) -> None:
    secure = security.cookie_secure()
    response.set_cookie(
        security.ACCESS_TOKEN_COOKIE,
        session.access_token,
        max_age=session.expires_in,
        httponly=True,
        secure=secure,
        samesite="lax",
    )
    if session.refresh_token:
        response.set_cookie(
            security.REFRESH_TOKEN_COOKIE,
            session.refresh_token,
            max_age=security.REFRESH_COOKIE_MAX_AGE_S,
            httponly=True,
            secure=secure,
            samesite="lax",
        )
    response.delete_cookie(security.CODE_VERIFIER_COOKIE)


@router.get("/auth/callback")
async def auth_callback(request: Request, code: str | None = None) -> RedirectResponse:
    """
    Finish the OAuth sign-in: trade `code` for a session and send the browser on.
    """
    logger.info("Auth callback received code: %s", "present" if code else "missing")

    if not code:
        logger.warning("No code found in callback URL.")
        return _redirect(request, f"/?error={AUTH_FAILED_ERROR}")

    code_verifier = request.cookies.get(security.CODE_VERIFIER_COOKIE)
    try:
        session = await service.exchange_code(code, code_verifier=code_verifier)
    except supabase.SupabaseError as exc:
        logger.error("Error exchanging code: %s", exc)
        return _redirect(request, f"/?error={EXCHANGE_FAILED_ERROR}")
    except Exception:
        logger.exception("Unexpected error during code exchange")
        return _redirect(request, f"/?error={EXCHANGE_FAILED_ERROR}")

    logger.info("Code exchange successful. Redirecting to dashboard.")
    response = _redirect(request, "/dashboard")
    _set_session_cookies(response, session)
    return response
