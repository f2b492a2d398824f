from typing import Any, List, Optional


class AppError(Exception):
    """Base error rendered as ``{success: false, error, details?}`` by the app handlers."""

    status_code = 500

    def __init__(self, message: str, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailure(AppError):
    status_code = 400

    def __init__(self, message: str = "Validation failed", details: Optional[List[Any]] = None):
        super().__init__(message, details)


class Unauthorized(AppError):
    status_code = 401

    def __init__(self, message: str = "Not authorized", details: Optional[List[Any]] = None):
        super().__init__(message, details)


class Forbidden(AppError):
    status_code = 403

    def __init__(self, message: str = "Forbidden", details: Optional[List[Any]] = None):
        super().__init__(message, details)


class NotFound(AppError):
    status_code = 404

    def __init__(self, message: str = "Resource not found", details: Optional[List[Any]] = None):
        super().__init__(message, details)


class ServerFault(AppError):
    status_code = 500

    def __init__(self, message: str = "Server Error", details: Optional[List[Any]] = None):
        super().__init__(message, details)


def field_error(field: str, message: str) -> dict:
    return {"field": field, "message": message}
