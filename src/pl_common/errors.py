"""Unified error codes and custom exceptions.

Error categories (HTTP status):
  ValidationFailedError  422
  AuthorizationError     403
  NotFoundError          404
  ConflictError          409
  UnavailableError       503

Error code ranges:
  1xxx: Auth/User
  2xxx: Property
  3xxx: Favorite
  4xxx: Recommendation
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- Categories ---

class ValidationFailedError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 422)


class AuthorizationError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 403)


class NotFoundError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 404)


class ConflictError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 409)


class UnavailableError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 503)


# --- 1xxx: Auth/User ---

class EmailExistsError(ConflictError):
    def __init__(self) -> None:
        super().__init__(1001, "Email already exists")


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Invalid email or password", 401)


class AccountDisabledError(AuthorizationError):
    def __init__(self) -> None:
        super().__init__(1003, "Account is disabled")


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Refresh token is invalid or expired", 401)


class UserNotFoundError(NotFoundError):
    def __init__(self, detail: str) -> None:
        super().__init__(1005, f"User not found: {detail}")


# --- 2xxx: Property ---

class PropertyNotFoundError(NotFoundError):
    def __init__(self, property_id: str) -> None:
        super().__init__(2001, f"Property not found: {property_id}")


class PropertyOwnershipError(AuthorizationError):
    def __init__(self, property_id: str) -> None:
        super().__init__(2002, f"Not authorized to modify property {property_id}")


# --- 3xxx: Favorite ---

class FavoriteExistsError(ConflictError):
    def __init__(self, property_id: str) -> None:
        super().__init__(3001, f"Property already in favorites: {property_id}")


class FavoriteNotFoundError(NotFoundError):
    def __init__(self, property_id: str) -> None:
        super().__init__(3002, f"Favorite not found for property {property_id}")


# --- 4xxx: Recommendation ---

class SelfRecommendationError(ValidationFailedError):
    def __init__(self) -> None:
        super().__init__(4001, "Cannot recommend a property to yourself")


class RecommendationNotFoundError(NotFoundError):
    def __init__(self, recommendation_id: str) -> None:
        super().__init__(4002, f"Recommendation not found: {recommendation_id}")


# --- 9xxx: System ---

class RequestValidationFailedError(ValidationFailedError):
    def __init__(self) -> None:
        super().__init__(9001, "Request validation failed")


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class StoreUnavailableError(UnavailableError):
    def __init__(self) -> None:
        super().__init__(9003, "Service temporarily unavailable")


class CacheUnavailableError(UnavailableError):
    """Raised by the cache facade; always recovered by its callers."""

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(9004, f"Cache {operation} failed: {detail}")
        self.operation = operation
