"""
    Centralized exception handling for the FastAPI application.
"""
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse
import logging

log = logging.getLogger(__name__)

class APIException(Exception):
    """Base class for API exceptions."""
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.detail)

class ImageNotFoundException(APIException):
    """Exception for when an image is not found."""
    def __init__(self, image_id: str):
        super().__init__(status_code=404, detail=f"Image with ID '{image_id}' not found.")

class BlobStoreException(APIException):
    """Exception for blob store failures."""
    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=detail)

class DatabaseException(APIException):
    """Exception for metadata store read failures."""
    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=detail)

class MetadataPersistenceException(DatabaseException):
    """The blob was written but its metadata row was not."""
    def __init__(self, image_id: str, detail: str):
        self.image_id = image_id
        super().__init__(detail=detail)

async def api_exception_handler(request: Request, exc: APIException):
    """Handles API exceptions."""
    log.error(f"API Exception: {exc.detail}", exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )

async def persistence_exception_handler(request: Request, exc: MetadataPersistenceException):
    """Uploaders only get a generic message when the metadata write fails."""
    log.error(f"Metadata Persistence Exception: {exc.detail}", exc_info=exc)
    return PlainTextResponse("Something went wrong", status_code=exc.status_code)

async def http_exception_handler(request: Request, exc: HTTPException):
    """Handles FastAPI HTTP exceptions."""
    log.error(f"HTTP Exception: {exc.detail}", exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )

async def generic_exception_handler(request: Request, exc: Exception):
    """Handles all other exceptions."""
    log.error(f"Unhandled Exception: {str(exc)}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred."},
    )

def add_exception_handlers(app):
    """Adds exception handlers to the FastAPI app."""
    app.add_exception_handler(MetadataPersistenceException, persistence_exception_handler)
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
