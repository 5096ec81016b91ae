from __future__ import annotations


class RecipeShareError(Exception):
    pass


class ConfigurationError(RecipeShareError):
    def __init__(self, missing: list[str]):
        super().__init__(f"Missing or invalid configuration: {', '.join(missing)}")
        self.missing = missing


class AuthRequiredError(RecipeShareError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class RecipeValidationError(RecipeShareError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class BackendRequestError(RecipeShareError):
    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.message = message


class RecipeUnavailableError(RecipeShareError):
    def __init__(self, recipe_id: str, message: str = "Recipe not found or you don't have permission to view it."):
        super().__init__(message)
        self.recipe_id = recipe_id


class CommentNotFoundError(RecipeShareError):
    def __init__(self, comment_id: str):
        super().__init__(f"Comment not found: {comment_id}")
        self.comment_id = comment_id


class PermissionDeniedError(RecipeShareError):
    pass


class ConfirmationRequiredError(RecipeShareError):
    def __init__(self, message: str = "This action requires confirmation."):
        super().__init__(message)


class ActionInFlightError(RecipeShareError):
    def __init__(self, action: str, key: str):
        super().__init__(f"{action} already in progress for {key}")
        self.action = action
        self.key = key
