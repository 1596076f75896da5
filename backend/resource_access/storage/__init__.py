"""
Storage module for S3-compatible object storage.

Clients upload and download directly against storage using presigned URLs;
the server never proxies file bytes.
"""
from resource_access.storage.client import (
    StorageClient,
    StorageOperation,
    get_storage_client,
    reset_storage_client,
)
from resource_access.storage.cdn import rewrite_to_cdn_url, cdn_rewriter_from_settings
from resource_access.storage.facade import ResourceAccessFacade, get_resource_facade

__all__ = [
    "StorageClient",
    "StorageOperation",
    "get_storage_client",
    "reset_storage_client",
    "rewrite_to_cdn_url",
    "cdn_rewriter_from_settings",
    "ResourceAccessFacade",
    "get_resource_facade",
]
