from fastapi import APIRouter, Depends, Response

from gallery.storage.s3 import S3Service
from gallery.dependencies import get_s3_service
from gallery.image_service.service import get_image_file

router = APIRouter(
    prefix="/file",
    tags=["files"]
)

@router.get("/{file_name}")
def get_file(
    file_name: str,
    s3: S3Service = Depends(get_s3_service)
):
    blob = get_image_file(s3, file_name)
    return Response(content=blob.body, media_type=blob.content_type or "application/octet-stream")
