from __future__ import annotations

import logging
from typing import Optional

from recipeshare.app.domain.validation import AuthMode, parse_auth_mode, validate_credentials
from recipeshare.app.infra.auth.base import AuthGateway, AuthSession

logger = logging.getLogger(__name__)

AFTER_SIGN_IN_PATH = "/feed"
AFTER_SIGN_OUT_PATH = "/"


class AuthService:

    def __init__(self, gateway: AuthGateway):
        self._gateway = gateway

    @staticmethod
    def resolve_mode(raw: Optional[str]) -> AuthMode:
        return parse_auth_mode(raw)

    def authenticate(self, mode: AuthMode, email: Optional[str], password: Optional[str]) -> AuthSession:
        """
        Sign in or sign up with email and password.

        Raises:
            RecipeValidationError: If either credential is missing
            BackendRequestError: With the auth service's message when it refuses
        """
        email, password = validate_credentials(email, password)
        if mode == "signup":
            return self._gateway.sign_up(email, password)
        return self._gateway.sign_in(email, password)

    def sign_out(self, access_token: str) -> None:
        self._gateway.sign_out(access_token)
        logger.info("Session signed out")
