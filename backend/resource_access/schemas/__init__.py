"""
Pydantic schemas for resource descriptors and operation results.
"""
from resource_access.schemas.resource import (
    ResourceDescriptor,
    UploadRequest,
    DownloadRequest,
    DeleteRequest,
    DeleteResult,
)

__all__ = [
    "ResourceDescriptor",
    "UploadRequest",
    "DownloadRequest",
    "DeleteRequest",
    "DeleteResult",
]
