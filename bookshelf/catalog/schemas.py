"""
Pydantic schema definitions for the catalog module.

The ``Book`` model only enforces the integer ``id``; every other field
supplied by the client is kept as-is and written back to the catalog
file untouched. The response models mirror the JSON bodies returned by
the ``/books`` endpoints.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, StrictInt
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

INVALID_BODY_MESSAGE = "Invalid request body."


class Book(BaseModel):
    """A single book record.

    ``id`` must be a real JSON integer: ``true``, ``1.0`` and ``"1"`` are
    rejected. Extra fields are allowed and preserved in ``model_dump()``.
    """

    model_config = ConfigDict(extra="allow")

    # JSON 1.0 is a float here and is rejected, unlike in JavaScript where it equals 1
    id: StrictInt


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


class FieldError(BaseModel):
    type: str = "field"
    value: Any = None
    msg: str
    path: str
    location: str


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]


def decode_book_payload(raw: bytes) -> Optional[Book]:
    """Decode a POST body into a ``Book``.

    Returns ``None`` for an absent payload (empty body, ``null`` or
    ``{}``) so the service can report it as missing. Anything that is
    not a JSON object with an integer ``id`` raises ``ValidationError``.
    """
    if not raw or not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except ValueError as exc:
        # JSONDecodeError, UnicodeDecodeError and oversized integer literals
        raise ValidationError(INVALID_BODY_MESSAGE) from exc

    if data is None or data == {}:
        return None
    if not isinstance(data, dict):
        raise ValidationError(INVALID_BODY_MESSAGE)

    try:
        return Book.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(INVALID_BODY_MESSAGE) from exc
