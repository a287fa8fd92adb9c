from typing import List
from fastapi import APIRouter, Depends, Query

from gallery.storage.metadata import MetadataStore
from gallery.dependencies import get_metadata_store
from gallery.image_service.service import fetch_images, pick_random_image
from gallery.image_service.models import ImageRecord

router = APIRouter(
    prefix="/api",
    tags=["api"]
)

@router.get("", response_model=List[ImageRecord])
def list_images_handler(db: MetadataStore = Depends(get_metadata_store)):
    """Lists every image, newest first."""
    return fetch_images(db)

@router.get("/random", response_model=List[ImageRecord])
def random_image_handler(
    tag: str = Query(..., min_length=1),
    db: MetadataStore = Depends(get_metadata_store),
):
    """Returns one random image with the given tag, or an empty list."""
    return pick_random_image(db, tag)
