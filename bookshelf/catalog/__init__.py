"""
Catalog package for the book catalog service.

This package holds everything behind the ``/books`` endpoints: the
schemas for book payloads and responses, the file-backed store that
owns the single ``books.json`` document, the service applying the
list/get/create rules, and the router wiring them to HTTP. The store
is injected into the service so it can be replaced by an in-memory
implementation in tests.
"""

from .router import router as catalog_router  # noqa: F401
