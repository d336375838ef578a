"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict, Optional

from models.response import ErrorEnvelope


class AppError(Exception):
    """Base class for application errors."""

    kind = "ServerError"

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidInputError(AppError):
    """Raised when request fields are missing, malformed or out of range."""

    kind = "InvalidInput"

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=400)


class UnauthenticatedError(AppError):
    """Raised when no verified identity accompanies the request."""

    kind = "Unauthenticated"

    def __init__(self, message: str = "Missing or invalid auth context"):
        super().__init__(message, status_code=401)


class ForbiddenError(AppError):
    """Raised when the caller lacks the role an operation needs."""

    kind = "Forbidden"

    def __init__(self, message: str = "Agent role required"):
        super().__init__(message, status_code=403)


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    kind = "NotFound"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class IllegalTransitionError(AppError):
    """Raised when a status change is not allowed by the ticket workflow."""

    kind = "IllegalTransition"

    def __init__(self, current: str, requested: str):
        super().__init__(f"invalid transition {current} -> {requested}", status_code=400)
        self.current = current
        self.requested = requested


class ConcurrentModificationError(AppError):
    """Raised when a guarded write lost a race; safe to retry after a fresh read."""

    kind = "ConcurrentModification"

    def __init__(self, message: str = "Status update rejected (concurrent update)"):
        super().__init__(message, status_code=409)


class AlreadyExistsError(AppError):
    """Raised when a conditional create finds the key already taken."""

    kind = "AlreadyExists"

    def __init__(self, message: str = "Item already exists"):
        super().__init__(message, status_code=500)


class ServerError(AppError):
    """Raised for unexpected store failures and defects."""

    kind = "ServerError"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, status_code=500)


def json_response(status_code: int, body: Any) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def to_response(error: AppError, request_id: Optional[str] = None) -> Dict[str, Any]:
    """Convert an AppError into the uniform error envelope."""
    envelope = ErrorEnvelope(error=error.kind, message=error.message, request_id=request_id)
    return json_response(error.status_code, envelope.model_dump(by_alias=True))
