"""
Auth schemas (session and user models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    id: str = Field(..., min_length=1)
    email: str | None = None


class AuthSession(BaseModel):
    access_token: str = Field(..., min_length=1)
    refresh_token: str = ""
    expires_in: int = 3600
    token_type: str = "bearer"
    user: AuthUser | None = None
