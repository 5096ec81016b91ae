from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from recipeshare.app.deps import CurrentUser, get_access_token, get_auth_service, get_current_user
from recipeshare.app.infra.auth.base import AuthSession
from recipeshare.app.routers.errors import ROUTE_ERRORS, to_http
from recipeshare.app.schemas.auth import AuthModeResponse, Credentials, SessionResponse, SignOutResponse
from recipeshare.app.services.auth_service import AFTER_SIGN_IN_PATH, AFTER_SIGN_OUT_PATH, AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        userId=session.user.id,
        email=session.user.email,
        accessToken=session.access_token,
        refreshToken=session.refresh_token,
        expiresAt=session.expires_at,
        redirectTo=AFTER_SIGN_IN_PATH,
    )


@router.get("", response_model=AuthModeResponse)
async def auth_mode(mode: Optional[str] = Query(default=None)) -> AuthModeResponse:
    return AuthModeResponse(mode=AuthService.resolve_mode(mode))


@router.post("/signin", response_model=SessionResponse)
async def sign_in(
    payload: Credentials,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    try:
        session = service.authenticate("signin", payload.email, payload.password)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return _session_response(session)


@router.post("/signup", response_model=SessionResponse)
async def sign_up(
    payload: Credentials,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    try:
        session = service.authenticate("signup", payload.email, payload.password)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return _session_response(session)


@router.post("/signout", response_model=SignOutResponse)
async def sign_out(
    user: CurrentUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service),
) -> SignOutResponse:
    try:
        service.sign_out(token)
    except ROUTE_ERRORS as exc:
        raise to_http(exc)
    return SignOutResponse(redirectTo=AFTER_SIGN_OUT_PATH)


@router.get("/me", response_model=CurrentUser)
async def me(user: CurrentUser = Depends(get_current_user)):
    return user
