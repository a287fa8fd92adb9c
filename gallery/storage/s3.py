import boto3
from typing import Optional
from botocore.exceptions import ClientError
from gallery.settings import settings
from gallery.image_service.models import StoredBlob
import logging

log = logging.getLogger(__name__)

MISSING_BUCKET_CODES = {"404", "NoSuchBucket"}
MISSING_KEY_CODES = {"404", "NoSuchKey"}

# -------------------------
# S3 Service
# -------------------------
class S3Service:
    def __init__(self):
        session = boto3.session.Session(region_name=settings.aws_region)
        kwargs = {
            "aws_access_key_id": settings.aws_access_key_id,
            "aws_secret_access_key": settings.aws_secret_access_key,
        }
        if settings.aws_endpoint_url:
            kwargs["endpoint_url"] = settings.aws_endpoint_url

        self.bucket = settings.s3_bucket
        self.client = session.client("s3", **kwargs)
        log.info("Initialized S3 client")

        # Ensure bucket exists at initialization
        self.ensure_bucket()

    def ensure_bucket(self):
        try:
            self.client.head_bucket(Bucket=self.bucket)
            log.debug("Bucket %s already exists", self.bucket)
        except ClientError as e:
            if e.response["Error"]["Code"] in MISSING_BUCKET_CODES:
                self.client.create_bucket(Bucket=self.bucket)
                log.info("Created bucket %s", self.bucket)
            else:
                log.error("Failed to check/create bucket: %s", e)
                raise

    def upload(self, data: bytes, key: str, content_type: Optional[str]) -> str:
        extra = {"ContentType": content_type} if content_type else {}
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data, **extra)
        log.debug("Uploaded %s to s3://%s/%s", key, self.bucket, key)
        return key

    def get(self, key: str) -> Optional[StoredBlob]:
        """Returns the object stored under key, or None when there is none."""
        try:
            resp = self.client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response["Error"]["Code"] in MISSING_KEY_CODES:
                return None
            raise
        body = resp["Body"]
        try:
            data = body.read()
        finally:
            body.close()
        return StoredBlob(key=key, body=data, content_type=resp.get("ContentType"))

    def close(self):
        self.client.close()
        log.info("Closed S3 client")
