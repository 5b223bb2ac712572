"""
Error taxonomy shared by the CRUD layer and the API.

Every error carries the HTTP status it maps to, a message safe to show to the
caller and, for validation failures, the full list of field-level problems.
"""

from typing import Any, Dict, List, Optional


class BookInventoryError(Exception):
    """Base class for errors that are rendered into the response envelope."""

    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(BookInventoryError):
    status_code = 400
    default_message = "Validation failed"


class ConflictError(BookInventoryError):
    # Duplicates are reported as 400, like any other rejected payload.
    status_code = 400
    default_message = "Resource already exists"


class UnauthenticatedError(BookInventoryError):
    status_code = 401
    default_message = "Not authorized, please log in again"


class ForbiddenError(BookInventoryError):
    status_code = 403
    default_message = "Not authorized to perform this action"


class NotFoundError(BookInventoryError):
    status_code = 404
    default_message = "Resource not found"


class LookupServiceError(BookInventoryError):
    status_code = 502
    default_message = "Error fetching book details"


class TransientStoreError(BookInventoryError):
    """The store timed out or dropped the connection; the request can be retried."""

    status_code = 503
    default_message = "Database temporarily unavailable, please retry"
