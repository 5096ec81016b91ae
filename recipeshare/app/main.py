# recipeshare/app/main.py
from __future__ import annotations
import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from supabase import Client

from recipeshare.app.config import Settings, load_settings
from recipeshare.app.deps import ClientFactory, create_backend_client
from recipeshare.app.domain.errors import AuthRequiredError
from recipeshare.app.domain.view_state import ViewStateStore
from recipeshare.app.routers.auth import router as auth_router
from recipeshare.app.routers.feed import router as feed_router
from recipeshare.app.routers.profile import router as profile_router
from recipeshare.app.routers.recipes import router as recipes_router

SIGN_IN_PATH = "/auth?mode=signin"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    # plain stdout logging, fine for dev and containers
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


async def redirect_to_sign_in(request: Request, exc: AuthRequiredError) -> RedirectResponse:
    logger.debug("Unauthenticated request to %s: %s", request.url.path, exc)
    return RedirectResponse(url=SIGN_IN_PATH, status_code=303)


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[Client] = None,
    client_factory: Optional[ClientFactory] = None,
) -> FastAPI:
    """
    Build the API.

    Settings are read here, once; missing configuration raises
    ConfigurationError and the process does not start. The shared client
    only answers auth calls; table queries go through client_factory, which
    builds a client bound to the caller's access token on every request.
    """
    settings = settings or load_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="RecipeShare API", version="0.1.0")
    app.state.settings = settings
    app.state.supabase = client or create_backend_client(settings)
    app.state.client_factory = client_factory or (lambda token: create_backend_client(settings, token))
    app.state.view_states = ViewStateStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.FRONTEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthRequiredError, redirect_to_sign_in)

    app.include_router(auth_router)
    app.include_router(feed_router)
    app.include_router(recipes_router)
    app.include_router(profile_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    logger.info("RecipeShare API ready (env=%s)", settings.APP_ENV)
    return app


def run() -> None:
    import uvicorn

    uvicorn.run("recipeshare.app.main:create_app", factory=True, host="0.0.0.0", port=8000)
