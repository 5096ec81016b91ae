from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from supabase import Client

from recipeshare.app.domain.errors import BackendRequestError
from recipeshare.app.infra.auth.base import AuthGateway, AuthSession, AuthUser

logger = logging.getLogger(__name__)


def _to_user(user: Any) -> AuthUser:
    return AuthUser(id=str(user.id), email=getattr(user, "email", None))


def _to_session(response: Any, operation: str) -> AuthSession:
    user = getattr(response, "user", None)
    if user is None:
        raise BackendRequestError(operation, "No user returned by the auth service.")
    session = getattr(response, "session", None)
    return AuthSession(
        user=_to_user(user),
        access_token=getattr(session, "access_token", None),
        refresh_token=getattr(session, "refresh_token", None),
        expires_at=getattr(session, "expires_at", None),
    )


class SupabaseAuthGateway(AuthGateway):
    """
    Auth calls against Supabase.

    Token checks and sign-out pass the token explicitly and use the shared
    client. Sign-in and sign-up store a session on whatever client runs
    them, so they go through a fresh client from session_client_factory.
    """

    def __init__(self, client: Client, session_client_factory: Callable[[], Client]):
        self._client = client
        self._session_client_factory = session_client_factory

    def get_user(self, access_token: str) -> Optional[AuthUser]:
        try:
            response = self._client.auth.get_user(access_token)
        except Exception as error:
            # GoTrue answers invalid/expired tokens with an error, not an empty user
            logger.debug("Token rejected by auth service: %s", error)
            return None
        user = getattr(response, "user", None) if response else None
        return _to_user(user) if user else None

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            session_client = self._session_client_factory()
            response = session_client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as error:
            logger.warning("Sign-in failed for %s: %s", email, error)
            raise BackendRequestError("sign in", str(error)) from error
        session = _to_session(response, "sign in")
        logger.info("Signed in: user=%s", session.user.id)
        return session

    def sign_up(self, email: str, password: str) -> AuthSession:
        try:
            session_client = self._session_client_factory()
            response = session_client.auth.sign_up({"email": email, "password": password})
        except Exception as error:
            logger.warning("Sign-up failed for %s: %s", email, error)
            raise BackendRequestError("sign up", str(error)) from error
        session = _to_session(response, "sign up")
        logger.info("Signed up: user=%s", session.user.id)
        return session

    def sign_out(self, access_token: str) -> None:
        try:
            self._client.auth.admin.sign_out(access_token)
        except Exception as error:
            logger.warning("Sign-out failed: %s", error)
            raise BackendRequestError("sign out", str(error)) from error
