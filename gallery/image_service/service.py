from typing import List, Optional
import logging
from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.exc import SQLAlchemyError

from gallery.storage.metadata import MetadataStore
from gallery.storage.s3 import S3Service
from gallery.image_service.models import ImageRecord, StoredBlob, new_image_id
from gallery.exceptions import (
    BlobStoreException,
    DatabaseException,
    ImageNotFoundException,
    MetadataPersistenceException,
)

log = logging.getLogger(__name__)

def save_image_and_meta(
    db: MetadataStore,
    s3: S3Service,
    data: bytes,
    content_type: Optional[str],
    tag: str,
) -> ImageRecord:
    """
    Stores the blob under a fresh ID, then records its metadata row.

    The row is only written once the blob write has returned. If the row
    insert fails the blob stays in the bucket without a row.
    """
    image_id = new_image_id()

    try:
        s3.upload(data=data, key=image_id, content_type=content_type)
    except (BotoCoreError, ClientError) as e:
        log.error(f"S3 upload failed: {e}")
        raise BlobStoreException(f"Failed to upload image to S3: {e}")

    try:
        row = db.put_metadata(image_id, tag)
    except SQLAlchemyError as e:
        log.error(f"Metadata insert failed: {e}")
        log.warning("Blob %s has no metadata row", image_id)
        raise MetadataPersistenceException(image_id, f"Failed to save image metadata: {e}")

    log.info("%s is uploaded!", image_id)
    return ImageRecord.model_validate(row)

def fetch_images(db: MetadataStore) -> List[ImageRecord]:
    """Fetches every image record, newest first."""
    try:
        rows = db.list_metadata()
    except SQLAlchemyError as e:
        log.error(f"Metadata fetch_images failed: {e}")
        raise DatabaseException(f"Failed to fetch images: {e}")
    return [ImageRecord.model_validate(row) for row in rows]

def pick_random_image(db: MetadataStore, tag: str) -> List[ImageRecord]:
    """Returns at most one record carrying exactly this tag."""
    try:
        rows = db.random_metadata(tag)
    except SQLAlchemyError as e:
        log.error(f"Metadata pick_random_image failed: {e}")
        raise DatabaseException(f"Failed to pick a random image: {e}")
    return [ImageRecord.model_validate(row) for row in rows]

def get_image_file(s3: S3Service, image_id: str) -> StoredBlob:
    """Gets the stored bytes and content type of an image."""
    try:
        blob = s3.get(image_id)
    except (BotoCoreError, ClientError) as e:
        log.error(f"S3 get failed: {e}")
        raise BlobStoreException(f"Failed to read image from S3: {e}")
    if blob is None:
        raise ImageNotFoundException(image_id)
    return blob
