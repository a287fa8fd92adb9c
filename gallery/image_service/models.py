from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict
from uuid import uuid4

def new_image_id() -> str:
    """Generates a new unique image ID."""
    return str(uuid4())

class ImageRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tag: str
    created_at: datetime

class StoredBlob(BaseModel):
    key: str
    body: bytes
    content_type: Optional[str] = None
