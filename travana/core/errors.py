from typing import Any, Dict, Optional

from fastapi import HTTPException, status

Details = Optional[Dict[str, Any]]


class APIError(HTTPException):
    """Base for errors rendered in the `{success: false, error: {...}}` envelope."""

    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Details = None):
        super().__init__(status_code=self.http_status, detail=message or self.default_message)
        self.details = details


class ValidationError(APIError):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_message = "The request is invalid."


class UnauthorizedError(APIError):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    default_message = "Not signed in"


class NotFoundError(APIError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Not found"


class ServiceError(APIError):
    pass


class AuthError(Exception):
    """Raised by the local auth service with a user-facing message."""


def error_content(code: str, message: str, details: Details = None) -> Dict[str, Any]:
    return {"success": False, "error": {"code": code, "message": message, "details": details}}
