import os
import pytest
from moto import mock_aws
from fastapi.testclient import TestClient

# Set test environment BEFORE importing app modules
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["S3_BUCKET"] = "image-gallery-bucket"
os.environ["BASIC_AUTH_USERNAME"] = "admin"
os.environ["BASIC_AUTH_PASSWORD"] = "s3cret"
# Clear the AWS_ENDPOINT_URL so moto mocks are used instead of localstack
os.environ.pop("AWS_ENDPOINT_URL", None)

from gallery.main import app
from gallery.dependencies import get_s3_service, get_metadata_store
from gallery.storage.s3 import S3Service
from gallery.storage.metadata import MetadataStore

AUTH = ("admin", "s3cret")


@pytest.fixture(scope="function")
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"


@pytest.fixture(scope="function")
def s3_service(aws_credentials):
    with mock_aws():
        # The bucket is created by S3Service.ensure_bucket
        service = S3Service()
        yield service


@pytest.fixture(scope="function")
def metadata_store(tmp_path):
    store = MetadataStore(f"sqlite:///{tmp_path / 'gallery.db'}")
    yield store
    store.close()


@pytest.fixture(scope="function")
def test_client(s3_service, metadata_store):
    # Lifespan is not entered, the test stores are injected instead
    app.dependency_overrides[get_s3_service] = lambda: s3_service
    app.dependency_overrides[get_metadata_store] = lambda: metadata_store
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
