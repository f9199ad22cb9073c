"""
Error taxonomy for the catalog.

Every failure the catalog can report is a ``CatalogError`` carrying the
HTTP status it maps to. Client-caused errors (``ValidationError``,
``ConflictError``) expose their message in the response body; store
errors (``StoreError`` and subclasses) are logged with detail and only
surface as a generic internal error.

A lookup miss is not an error: ``CatalogService.get_by_id`` returns
``None`` and the router renders the empty view with a 404.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import status


class CatalogError(Exception):
    """Base class for catalog failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status_code={self.status_code})"
        )


class ValidationError(CatalogError):
    """Malformed client input (400)."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidIdentifierError(ValidationError):
    """Path identifier is not an integer token.

    ``errors`` holds the field error list returned to the client as
    ``{"errors": [...]}``.
    """

    def __init__(self, value: str, message: str = "Invalid ID parameter"):
        super().__init__(message)
        self.value = value
        self.errors: List[Dict[str, Any]] = [
            {
                "type": "field",
                "value": value,
                "msg": message,
                "path": "id",
                "location": "params",
            }
        ]


class ConflictError(CatalogError):
    """A book with the same id already exists.

    Reported as 400, not 409.
    """

    status_code = status.HTTP_400_BAD_REQUEST


class StoreError(CatalogError):
    """Backing document could not be read, decoded or written (500)."""


class CorruptStoreError(StoreError):
    """Backing document exists but is unreadable or not a JSON object."""


class InvalidStoreShapeError(StoreError):
    """Backing document decoded, but ``books`` is not a list."""


class PersistenceError(StoreError):
    """Writing the backing document failed."""
