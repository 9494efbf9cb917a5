"""
Error taxonomy for the catalog API.

Every failure a handler can report is a CatalogError. The app-level
exception handler in catalog.main renders it into the response envelope:

    {"success": false, "message": ..., "errors": [...], "error": ...}

where ``errors`` appears only for validation failures and ``error`` only
for internal failures.
"""

from typing import List, Optional

from fastapi import HTTPException, status


class CatalogError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[str]] = None,
        error: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        self.error = error
        super().__init__(status_code=type(self).status_code, detail=self.message)

    def envelope(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.errors is not None:
            body["errors"] = self.errors
        if self.error is not None:
            body["error"] = self.error
        return body


class InvalidId(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid movie ID"


class ValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation errors"

    def __init__(self, errors: List[str], message: Optional[str] = None):
        super().__init__(message, errors=list(errors))


class NotFound(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Movie not found"


class InternalError(CatalogError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
