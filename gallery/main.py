from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import uvicorn
import logging

from gallery.storage.metadata import MetadataStore
from gallery.storage.s3 import S3Service
from gallery.settings import settings
from gallery.routers.gallery import router as gallery_router
from gallery.routers.api import router as api_router
from gallery.routers.files import router as files_router
from gallery.exceptions import add_exception_handlers

logging.basicConfig(level=settings.log_level)
log = logging.getLogger("image-gallery")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
        Async context manager for FastAPI application lifecycle events.
        Initializes and closes the blob store and metadata store.
    """
    # Initialize resources
    app.state.s3 = S3Service()
    app.state.db = MetadataStore()
    yield
    # Cleanup resources
    app.state.s3.close()
    app.state.db.close()

# Initialize App
app = FastAPI(
    title=settings.app_title,
    lifespan=lifespan,
    description="Tagged Image Gallery",
)

# Add exception handlers
add_exception_handlers(app)

# CORS - Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add the routers
app.include_router(gallery_router)
app.include_router(api_router)
app.include_router(files_router)

if __name__ == "__main__":
    uvicorn.run("gallery.main:app", host="0.0.0.0", port=8000, reload=True)
