from pathlib import Path
import logging
from fastapi import APIRouter, Depends, UploadFile, File, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from gallery.storage.metadata import MetadataStore
from gallery.storage.s3 import S3Service
from gallery.dependencies import get_s3_service, get_metadata_store
from gallery.security import require_basic_auth
from gallery.image_service.service import save_image_and_meta, fetch_images
from gallery.settings import settings

log = logging.getLogger(__name__)

templates = Jinja2Templates(directory=Path(__file__).resolve().parent.parent / "templates")

router = APIRouter(
    tags=["gallery"],
    dependencies=[Depends(require_basic_auth)],
)

@router.get("/", response_class=HTMLResponse)
def gallery_page(
    request: Request,
    db: MetadataStore = Depends(get_metadata_store),
):
    """Renders the upload form and every image, newest first."""
    images = fetch_images(db)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"title": settings.app_title, "images": images},
    )

@router.post("/")
async def upload_image(
    file: UploadFile = File(...),
    tag: str = Form(..., min_length=1),
    db: MetadataStore = Depends(get_metadata_store),
    s3: S3Service = Depends(get_s3_service),
):
    """Stores the uploaded image under a new ID and goes back to the gallery."""
    contents = await file.read()
    await run_in_threadpool(
        save_image_and_meta,
        db=db,
        s3=s3,
        data=contents,
        content_type=file.content_type,
        tag=tag,
    )
    return RedirectResponse(url="/", status_code=303)
