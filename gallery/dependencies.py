from fastapi import Request
from gallery.storage.metadata import MetadataStore
from gallery.storage.s3 import S3Service

def get_s3_service(request: Request) -> S3Service:
    """Dependency provider for S3Service"""
    return request.app.state.s3

def get_metadata_store(request: Request) -> MetadataStore:
    """Dependency provider for MetadataStore"""
    return request.app.state.db
