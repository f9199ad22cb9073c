# bookshelf/main.py
import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .catalog import catalog_router
from .catalog.errors import CatalogError, InvalidIdentifierError
from .catalog.schemas import ErrorResponse, ValidationErrorResponse
from .config import settings
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    where = "%s %s" % (request.method, request.url.path)

    if exc.status_code >= 500:
        # Detail stays in the log, never in the response
        logger.error("%s failed: %r", where, exc, exc_info=exc)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=INTERNAL_ERROR_MESSAGE).model_dump(),
        )

    logger.warning("%s rejected: %s", where, exc.message)
    if isinstance(exc, InvalidIdentifierError):
        return JSONResponse(
            status_code=exc.status_code,
            content=ValidationErrorResponse(errors=exc.errors).model_dump(),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=INTERNAL_ERROR_MESSAGE).model_dump(),
    )


def create_app() -> FastAPI:
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.app_title,
        description="Book catalog backed by a single JSON document on disk.",
        version=settings.app_version,
    )
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(catalog_router)

    @app.get("/")
    def health_check():
        return {"status": "ok", "service": settings.app_title}

    logger.info(
        "%s %s ready, catalog at %s",
        settings.app_title,
        settings.app_version,
        settings.books_file,
    )
    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
