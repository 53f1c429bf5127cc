"""
Supabase auth (GoTrue) HTTP client helpers.

Used endpoints:
- POST /auth/v1/token?grant_type=pkce  -> {"access_token": "...", "refresh_token": "...", "user": {...}}
- GET  /auth/v1/user                   -> {"id": "...", "email": "...", ...}
"""

from __future__ import annotations

import os
from typing import Any

import httpx


# Provider failures are explicit and separable from transport errors.
class SupabaseError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def supabase_url() -> str:
    url = os.environ.get("SUPABASE_URL", "").strip()
    if not url:
        raise RuntimeError("SUPABASE_URL is not set.")
    return url.rstrip("/")


def supabase_anon_key() -> str:
    key = os.environ.get("SUPABASE_ANON_KEY", "").strip()
    if not key:
        raise RuntimeError("SUPABASE_ANON_KEY is not set.")
    return key


def request_timeout_s() -> float:
    return _env_float("SUPABASE_TIMEOUT_S", 30.0)


def _client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=supabase_url(),
        headers={"apikey": supabase_anon_key()},
        timeout=request_timeout_s(),
        transport=transport,
    )


def _raise_for_status(resp: httpx.Response, action: str) -> None:
    if resp.status_code == 200:
        return None
    # Avoid dumping huge bodies; include a small snippet.
    body = resp.text[:500]
    raise SupabaseError(
        f"Supabase {action} failed: {resp.status_code} {body}",
        status_code=resp.status_code,
    )


def _json_payload(resp: httpx.Response, action: str) -> dict[str, Any]:
    try:
        data = resp.json()
    except ValueError as exc:
        raise SupabaseError(f"Supabase {action} returned a non-JSON body: {resp.text[:200]}") from exc
    if not isinstance(data, dict):
        raise SupabaseError(f"Supabase {action} returned an unexpected payload.")
    return data


async def exchange_code_for_session(
    *,
    code: str,
    code_verifier: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """
    Trade an OAuth authorization code for a session (access + refresh token).
    """
    code = (code or "").strip()
    if not code:
        raise SupabaseError("Authorization code is empty.")

    async with _client(transport) as client:
        resp = await client.post(
            "/auth/v1/token",
            params={"grant_type": "pkce"},
            json={"auth_code": code, "code_verifier": code_verifier or ""},
        )

    _raise_for_status(resp, "code exchange")

    data = _json_payload(resp, "code exchange")
    if not data.get("access_token"):
        raise SupabaseError("Supabase returned no access token.")
    return data


async def get_user(
    *,
    access_token: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """
    Resolve the user that owns `access_token`.
    """
    access_token = (access_token or "").strip()
    if not access_token:
        raise SupabaseError("Access token is empty.")

    async with _client(transport) as client:
        resp = await client.get(
            "/auth/v1/user",
            headers={"Authorization": f"Bearer {access_token}"},
        )

    _raise_for_status(resp, "user lookup")

    data = _json_payload(resp, "user lookup")
    if not str(data.get("id") or "").strip():
        raise SupabaseError("Supabase returned no user.")
    return data
