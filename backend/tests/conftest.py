"""
Test configuration and fixtures.
Storage calls go to a mocked boto3 client unless a test builds a real one;
real clients only sign URLs locally and never reach the network.
"""
import os

# Set test environment before any imports
os.environ["SPACES_ENDPOINT"] = "https://nyc3.digitaloceanspaces.com"
os.environ["SPACES_REGION"] = "nyc3"
os.environ["SPACES_KEY"] = "test-access-key"
os.environ["SPACES_SECRET"] = "test-secret-key"
os.environ["SPACES_BUCKET"] = "assets"
os.environ["SPACES_ENDPOINT_CDN"] = "https://cdn.example.com"

import pytest
from unittest.mock import MagicMock

from resource_access.config import Settings
from resource_access.storage.client import StorageClient, reset_storage_client
from resource_access.storage.facade import ResourceAccessFacade
from resource_access.utils.logging import reset_logging


STORAGE_ENDPOINT = "https://nyc3.digitaloceanspaces.com"
CDN_ENDPOINT = "https://cdn.example.com"
BUCKET = "assets"
SIGNED_QUERY = "X-Amz-Algorithm=AWS4-HMAC-SHA256&X-Amz-Expires=300&X-Amz-Signature=abc123"


def make_settings(**overrides) -> Settings:
    """Build settings independent of any .env file."""
    values = {
        "spaces_endpoint": STORAGE_ENDPOINT,
        "spaces_region": "nyc3",
        "spaces_key": "test-access-key",
        "spaces_secret": "test-secret-key",
        "spaces_bucket": BUCKET,
        "spaces_endpoint_cdn": CDN_ENDPOINT,
        "spaces_cdn_dont_include_bucket": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def storage_settings() -> Settings:
    return make_settings()


@pytest.fixture
def mock_s3():
    """Mock boto3 S3 client returning path-style signed URLs."""
    s3 = MagicMock()
    
    def presign(ClientMethod, Params, ExpiresIn, HttpMethod=None):
        return f"{STORAGE_ENDPOINT}/{Params['Bucket']}/{Params['Key']}?{SIGNED_QUERY}"
    
    s3.generate_presigned_url.side_effect = presign
    s3.delete_object.return_value = {"ResponseMetadata": {"HTTPStatusCode": 204}}
    return s3


@pytest.fixture
def storage_client(storage_settings: Settings, mock_s3) -> StorageClient:
    return StorageClient(storage_settings, client=mock_s3)


@pytest.fixture
def facade(storage_client: StorageClient) -> ResourceAccessFacade:
    return ResourceAccessFacade(storage_client)


@pytest.fixture
def real_facade(storage_settings: Settings) -> ResourceAccessFacade:
    """Façade over a real boto3 client (signing only, offline)."""
    return ResourceAccessFacade(StorageClient(storage_settings))


@pytest.fixture(autouse=True)
def clean_storage_singleton():
    reset_storage_client()
    yield
    reset_storage_client()
    reset_logging()
