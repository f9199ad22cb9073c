"""
List/get/create rules over the catalog store.

Identifiers and payloads are validated before the store is touched;
the duplicate-id check runs after the load and before the save.
"""

from __future__ import annotations

import asyncio
import logging
import re
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

from .errors import ConflictError, InvalidIdentifierError, InvalidStoreShapeError, ValidationError
from .schemas import Book
from .store import CatalogStore

logger = logging.getLogger(__name__)

# Optional sign followed by digits; leading zeros are accepted
_INT_TOKEN = re.compile(r"[+-]?[0-9]+")

PAYLOAD_REQUIRED_MESSAGE = "Text is required in the request body."
ALREADY_EXISTS_MESSAGE = "Book already exists."


def parse_identifier(raw_id: str) -> int:
    if not _INT_TOKEN.fullmatch(raw_id or ""):
        raise InvalidIdentifierError(raw_id)
    try:
        return int(raw_id)
    except ValueError as exc:
        # Beyond the interpreter's integer string conversion limit
        raise InvalidIdentifierError(raw_id) from exc


def _has_id(book: Any, book_id: int) -> bool:
    if not isinstance(book, dict):
        return False
    value = book.get("id")
    # bool is an int subclass; ``true`` must not match id 1
    return type(value) is int and value == book_id


class CatalogService:
    """
    List/get/create over a ``CatalogStore``.

    Each call is a single load (and for ``create``, load-check-save)
    transaction. With ``serialize_writes`` enabled, concurrent creates
    are run one at a time; otherwise the last full rewrite wins.
    """

    def __init__(self, store: CatalogStore, serialize_writes: bool = False):
        self.store = store
        self.serialize_writes = serialize_writes
        self._write_lock = asyncio.Lock()

    async def _load_books(self) -> Tuple[Dict[str, Any], List[Any]]:
        catalog = await self.store.load()
        books = catalog.get("books")
        if not isinstance(books, list):
            logger.error(
                "Invalid catalog structure: books is %s, expected list", type(books).__name__
            )
            raise InvalidStoreShapeError(
                "Invalid books file structure: books property must be an array"
            )
        return catalog, books

    async def list_all(self) -> List[Any]:
        _, books = await self._load_books()
        logger.debug("Listing %d books", len(books))
        return books

    async def get_by_id(self, raw_id: str) -> Optional[Dict[str, Any]]:
        """Return the first book whose ``id`` equals ``raw_id``, or ``None``.

        ``raw_id`` is checked before the store is touched, so malformed
        input never costs a read.
        """
        book_id = parse_identifier(raw_id)
        _, books = await self._load_books()
        found = next((b for b in books if _has_id(b, book_id)), None)
        if found is None:
            logger.info("Book not found: %s", book_id)
        return found

    async def create(self, payload: Optional[Book]) -> Book:
        if payload is None:
            raise ValidationError(PAYLOAD_REQUIRED_MESSAGE)

        async with self._writer():
            catalog, books = await self._load_books()
            if any(_has_id(b, payload.id) for b in books):
                logger.warning("Book already exists: %s", payload.id)
                raise ConflictError(ALREADY_EXISTS_MESSAGE)

            books.append(payload.model_dump())
            await self.store.save(catalog)

        logger.info("Book created: %s", payload.id)
        return payload

    @asynccontextmanager
    async def _writer(self) -> AsyncIterator[None]:
        if not self.serialize_writes:
            yield
            return
        async with self._write_lock:
            yield
