# recipeshare/app/schemas/auth.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

AuthModeValue = Literal["signin", "signup"]


class AuthModeResponse(BaseModel):
    mode: AuthModeValue


class Credentials(BaseModel):
    email: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    userId: str
    email: Optional[str] = None
    accessToken: Optional[str] = None
    refreshToken: Optional[str] = None
    expiresAt: Optional[int] = None
    redirectTo: str


class SignOutResponse(BaseModel):
    redirectTo: str
