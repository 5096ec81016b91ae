# recipeshare/app/deps.py (the shared client only does auth; table queries get a client per request)

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from supabase import Client, ClientOptions, create_client

from recipeshare.app.config import Settings
from recipeshare.app.domain.errors import AuthRequiredError
from recipeshare.app.domain.view_state import ViewStateStore
from recipeshare.app.infra.auth.base import AuthGateway
from recipeshare.app.infra.auth.supabase_auth import SupabaseAuthGateway
from recipeshare.app.infra.db.base import (
    CommentRepository,
    LikeRepository,
    ProfileRepository,
    RecipeRepository,
)
from recipeshare.app.infra.db.supabase_repo import (
    SupabaseCommentRepository,
    SupabaseLikeRepository,
    SupabaseProfileRepository,
    SupabaseRecipeRepository,
)
from recipeshare.app.services.auth_service import AuthService
from recipeshare.app.services.comment_service import CommentService
from recipeshare.app.services.feed_service import FeedService
from recipeshare.app.services.like_service import LikeService
from recipeshare.app.services.profile_service import ProfileService
from recipeshare.app.services.recipe_service import RecipeService
from recipeshare.app.services.saved_service import SavedService

ClientFactory = Callable[[Optional[str]], Client]


def create_backend_client(settings: Settings, access_token: Optional[str] = None) -> Client:
    """
    Build a Supabase client that never stores a session of its own.

    With an access token every table query carries that identity, so
    row-level security sees the caller; without one the client acts with
    the public key only.
    """
    options = ClientOptions(persist_session=False, auto_refresh_token=False)
    client = create_client(str(settings.SUPABASE_URL), settings.SUPABASE_KEY, options=options)
    if access_token:
        client.postgrest.auth(access_token)
    return client


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_supabase(request: Request) -> Client:
    return request.app.state.supabase


def get_client_factory(request: Request) -> ClientFactory:
    return request.app.state.client_factory


def get_view_states(request: Request) -> ViewStateStore:
    return request.app.state.view_states


def get_auth_gateway(
    supa: Client = Depends(get_supabase),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> AuthGateway:
    # sign-in/sign-up run on a throwaway client so the shared one keeps its headers
    return SupabaseAuthGateway(supa, session_client_factory=lambda: client_factory(None))


auth_scheme = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: str
    email: str | None = None


def get_access_token(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
) -> str:
    if cred is None or cred.scheme.lower() != "bearer" or not cred.credentials:
        raise AuthRequiredError("Missing token")
    return cred.credentials


def get_current_user(
    token: str = Depends(get_access_token),
    auth: AuthGateway = Depends(get_auth_gateway),
) -> CurrentUser:
    """
    Session guard for every protected route.

    Resolves the identity behind the bearer token on each request; when
    there is none the request is redirected to sign-in before any data is
    loaded.
    """
    user = auth.get_user(token)
    if user is None:
        raise AuthRequiredError("Invalid/expired token")
    return CurrentUser(id=user.id, email=user.email)


def get_user_client(
    user: CurrentUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> Client:
    """Data client for this request, acting as the signed-in caller."""
    return client_factory(token)


def get_profile_repository(supa: Client = Depends(get_user_client)) -> ProfileRepository:
    return SupabaseProfileRepository(supa)


def get_recipe_repository(supa: Client = Depends(get_user_client)) -> RecipeRepository:
    return SupabaseRecipeRepository(supa)


def get_like_repository(supa: Client = Depends(get_user_client)) -> LikeRepository:
    return SupabaseLikeRepository(supa)


def get_comment_repository(supa: Client = Depends(get_user_client)) -> CommentRepository:
    return SupabaseCommentRepository(supa)


def get_auth_service(auth: AuthGateway = Depends(get_auth_gateway)) -> AuthService:
    return AuthService(auth)


def get_feed_service(
    settings: Settings = Depends(get_settings),
    recipes: RecipeRepository = Depends(get_recipe_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> FeedService:
    return FeedService(recipes, profiles, limit=settings.FEED_LIMIT)


def get_saved_service(
    likes: LikeRepository = Depends(get_like_repository),
    recipes: RecipeRepository = Depends(get_recipe_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> SavedService:
    return SavedService(likes, recipes, profiles)


def get_like_service(
    likes: LikeRepository = Depends(get_like_repository),
    view_states: ViewStateStore = Depends(get_view_states),
) -> LikeService:
    return LikeService(likes, view_states)


def get_comment_service(
    comments: CommentRepository = Depends(get_comment_repository),
    recipes: RecipeRepository = Depends(get_recipe_repository),
    view_states: ViewStateStore = Depends(get_view_states),
) -> CommentService:
    return CommentService(comments, recipes, view_states)


def get_recipe_service(
    recipes: RecipeRepository = Depends(get_recipe_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
    like_service: LikeService = Depends(get_like_service),
    comment_service: CommentService = Depends(get_comment_service),
    view_states: ViewStateStore = Depends(get_view_states),
) -> RecipeService:
    return RecipeService(recipes, profiles, like_service, comment_service, view_states)


def get_profile_service(
    profiles: ProfileRepository = Depends(get_profile_repository),
    recipes: RecipeRepository = Depends(get_recipe_repository),
    likes: LikeRepository = Depends(get_like_repository),
    view_states: ViewStateStore = Depends(get_view_states),
) -> ProfileService:
    return ProfileService(profiles, recipes, likes, view_states)
