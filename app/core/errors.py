# app/core/errors.py
from fastapi import HTTPException, status


class ServiceError(HTTPException):
    """Base for domain errors; FastAPI renders them as {"detail": message}."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"
    headers = None

    def __init__(self, message: str | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=self.headers,
        )


class InvalidInput(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidToken(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class StoreFailure(ServiceError):
    default_message = "Database error"
