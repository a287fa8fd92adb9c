from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr
from typing import Optional

class Settings(BaseSettings):
    app_title: str = Field("Image Gallery")
    log_level: str = Field("INFO")

    # Metadata store
    database_url: str = Field("sqlite:///./gallery.db")

    # Blob store (any S3 compatible endpoint)
    aws_region: str = Field("us-east-1")
    s3_bucket: str = Field("image-gallery-bucket")
    aws_endpoint_url: Optional[str] = Field(None)
    aws_access_key_id: str = Field("test")
    aws_secret_access_key: str = Field("test")

    # Shared credentials for the gallery page and uploads
    basic_auth_username: str
    basic_auth_password: SecretStr

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
