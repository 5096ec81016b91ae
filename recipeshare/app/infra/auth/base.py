# recipeshare/app/infra/auth/base.py
"""
Abstract identity interface.
The hosted auth service owns users and sessions; the app only asks it
who a token belongs to and forwards password sign-in/sign-up/sign-out.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class AuthUser:
    id: str
    email: Optional[str] = None


@dataclass
class AuthSession:
    user: AuthUser
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None


class AuthGateway(ABC):

    @abstractmethod
    def get_user(self, access_token: str) -> Optional[AuthUser]:
        """
        Resolve the identity behind an access token.

        Returns:
            The user, or None when the token is invalid or expired
        """
        pass

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession:
        pass

    @abstractmethod
    def sign_up(self, email: str, password: str) -> AuthSession:
        """
        Register a new identity. The session tokens are empty when the
        project requires email confirmation before the first sign-in.
        """
        pass

    @abstractmethod
    def sign_out(self, access_token: str) -> None:
        pass
