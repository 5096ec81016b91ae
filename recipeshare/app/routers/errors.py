from __future__ import annotations

from fastapi import HTTPException, status

from recipeshare.app.domain.errors import (
    ActionInFlightError,
    BackendRequestError,
    CommentNotFoundError,
    ConfirmationRequiredError,
    PermissionDeniedError,
    RecipeUnavailableError,
    RecipeValidationError,
)

# AuthRequiredError is left out on purpose: the app-wide handler turns it into a redirect
ROUTE_ERRORS = (
    RecipeValidationError,
    ConfirmationRequiredError,
    PermissionDeniedError,
    RecipeUnavailableError,
    CommentNotFoundError,
    ActionInFlightError,
    BackendRequestError,
)

_STATUS_BY_ERROR: dict[type[Exception], int] = {
    RecipeValidationError: status.HTTP_400_BAD_REQUEST,
    ConfirmationRequiredError: status.HTTP_400_BAD_REQUEST,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    RecipeUnavailableError: status.HTTP_404_NOT_FOUND,
    CommentNotFoundError: status.HTTP_404_NOT_FOUND,
    ActionInFlightError: status.HTTP_409_CONFLICT,
    BackendRequestError: status.HTTP_502_BAD_GATEWAY,
}


def to_http(exc: Exception) -> HTTPException:
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
