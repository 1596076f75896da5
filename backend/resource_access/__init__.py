"""
Signed-URL access to externally stored resources.
"""
from resource_access.exceptions import (
    StorageError,
    StorageConfigurationError,
    InvalidResourceError,
)
from resource_access.schemas import ResourceDescriptor, DeleteResult
from resource_access.storage import (
    ResourceAccessFacade,
    StorageClient,
    get_resource_facade,
    rewrite_to_cdn_url,
)

__version__ = "0.1.0"

__all__ = [
    "StorageError",
    "StorageConfigurationError",
    "InvalidResourceError",
    "ResourceDescriptor",
    "DeleteResult",
    "ResourceAccessFacade",
    "StorageClient",
    "get_resource_facade",
    "rewrite_to_cdn_url",
]
