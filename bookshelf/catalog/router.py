"""
Route definitions for the catalogue.

Endpoints:
- GET  /books            : render every book
- GET  /books/{book_id}  : render one book (404 renders the same view, empty)
- POST /books            : append a book if its id is not taken
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..config import settings
from .schemas import MessageResponse, decode_book_payload
from .service import CatalogService
from .store import JsonFileCatalogStore

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["books"])

# ----------------------------
# Service singleton
# ----------------------------

_catalog_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService(
            JsonFileCatalogStore(settings.books_file),
            serialize_writes=settings.serialize_writes,
        )
        logger.info("Catalog service using %s", settings.books_file)
    return _catalog_service


# ----------------------------
# Books
# ----------------------------

@router.get("/books", response_class=HTMLResponse)
async def list_books(
    request: Request,
    svc: CatalogService = Depends(get_catalog_service),
) -> HTMLResponse:
    books = await svc.list_all()
    return templates.TemplateResponse(request, "index.html", {"booksList": books})


@router.get("/books/{book_id}", response_class=HTMLResponse)
async def get_book(
    book_id: str,
    request: Request,
    svc: CatalogService = Depends(get_catalog_service),
) -> HTMLResponse:
    book = await svc.get_by_id(book_id)
    if book is None:
        # Not found renders the regular view with nothing in it
        return templates.TemplateResponse(
            request,
            "index.html",
            {"booksList": None},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return templates.TemplateResponse(request, "index.html", {"booksList": book})


@router.post(
    "/books",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_book(
    request: Request,
    svc: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    payload = decode_book_payload(await request.body())
    await svc.create(payload)
    return MessageResponse(message="Book created successfully")
