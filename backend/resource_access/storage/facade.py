"""
Resource access façade.

Issues signed, time-bounded URLs for uploads, downloads and deletes, and
deletes objects on behalf of the server. Each operation is independent and
stateless; the only shared piece is the read-only StorageClient.

Flow for uploads:
1. Server calls issue_upload_url with the resource descriptor
2. Façade signs a PUT for bucket/key/content-type (public-read ACL if asked)
3. Client PUTs the bytes directly to storage before the URL expires
"""
import asyncio
import logging
import time
from typing import Any, Callable, Mapping, Optional, Union

from botocore.exceptions import ClientError

from resource_access.config import Settings
from resource_access.schemas.resource import (
    DeleteRequest,
    DeleteResult,
    DownloadRequest,
    ResourceDescriptor,
    UploadRequest,
)
from resource_access.storage.cdn import cdn_rewriter_from_settings
from resource_access.storage.client import (
    StorageClient,
    StorageOperation,
    get_storage_client,
)
from resource_access.utils.logging import (
    log_resource_delete_failed,
    log_resource_delete_requested,
    log_resource_deleted,
    log_url_issued,
)

logger = logging.getLogger(__name__)

PUBLIC_READ_ACL = "public-read"
DOWNLOAD_CACHE_CONTROL = "no-cache, no-store"

ResourceInput = Union[ResourceDescriptor, Mapping[str, Any]]


def _as_descriptor(resource: Any, operation: str) -> ResourceDescriptor:
    if isinstance(resource, ResourceDescriptor):
        return resource
    if isinstance(resource, (UploadRequest, DownloadRequest, DeleteRequest)):
        return ResourceDescriptor(**resource.model_dump())
    return ResourceDescriptor.from_input(resource, operation)


class ResourceAccessFacade:
    """
    Signed URL issuance and deletion for externally stored resources.
    
    Responsibilities:
    - Validate descriptors before anything reaches the provider
    - Sign PUT/GET/DELETE URLs with a fixed lifetime
    - Rewrite download URLs to the CDN origin
    - Delete objects, reporting a DeleteResult instead of raising
    """
    
    def __init__(self, client: StorageClient, settings: Optional[Settings] = None):
        self._client = client
        self._settings = settings or client.settings
        self._rewrite: Callable[[str], str] = cdn_rewriter_from_settings(self._settings)
    
    @property
    def expires_in(self) -> int:
        return self._settings.presign_expiration
    
    def rewrite_to_cdn_url(self, url: str) -> str:
        """Swap the storage origin for the configured CDN origin, if present."""
        return self._rewrite(url)
    
    def convention_key(self, resource_id: str) -> str:
        """Key under which SDK artifacts for `resource_id` are stored."""
        return f"{self._settings.convention_delete_prefix}{resource_id}"
    
    async def _sign(
        self,
        operation: StorageOperation,
        bucket: str,
        key: str,
        extra_params: Optional[dict] = None
    ) -> str:
        url = await asyncio.to_thread(
            self._client.issue_presigned_url,
            operation,
            bucket,
            key,
            extra_params,
            self.expires_in
        )
        log_url_issued(logger, operation.value, bucket, key, self.expires_in)
        return url
    
    async def issue_upload_url(self, resource: ResourceInput) -> str:
        """
        Sign a PUT URL for uploading a resource.
        
        Args:
            resource: Descriptor with bucket, resource_id and content_type;
                is_public adds a public-read ACL
            
        Returns:
            Presigned PUT URL
            
        Raises:
            InvalidResourceError: a required field is missing
            botocore errors when signing fails
        """
        request = _as_descriptor(resource, "upload").to_upload()
        
        params = {'ContentType': request.content_type}
        # Only set ACL if resource is public
        if request.is_public:
            params['ACL'] = PUBLIC_READ_ACL
        
        return await self._sign(StorageOperation.PUT, request.bucket, request.resource_id, params)
    
    async def issue_download_url(self, resource: ResourceInput) -> str:
        """
        Sign a GET URL for a resource and point it at the CDN.
        
        The response is marked no-cache, no-store so intermediaries do not
        keep the signed content.
        """
        request = _as_descriptor(resource, "download").to_download()
        url = await self._sign(
            StorageOperation.GET,
            request.bucket,
            request.resource_id,
            {'ResponseCacheControl': DOWNLOAD_CACHE_CONTROL}
        )
        return self.rewrite_to_cdn_url(url)
    
    async def issue_delete_url(self, resource: ResourceInput) -> str:
        """Sign a DELETE URL for a resource."""
        request = _as_descriptor(resource, "delete").to_delete()
        return await self._sign(StorageOperation.DELETE, request.bucket, request.resource_id)
    
    async def _delete(self, bucket: str, key: str) -> DeleteResult:
        log_resource_delete_requested(logger, bucket, key)
        start = time.perf_counter()
        try:
            await asyncio.to_thread(self._client.execute_delete, bucket, key)
        except Exception as e:
            result = DeleteResult.failure(key, e)
            log_resource_delete_failed(
                logger,
                bucket,
                key,
                error=result.error,
                error_code=result.error_code,
                duration_ms=(time.perf_counter() - start) * 1000,
                include_traceback=not isinstance(e, ClientError)
            )
            return result
        
        log_resource_deleted(logger, bucket, key, duration_ms=(time.perf_counter() - start) * 1000)
        return DeleteResult.success(key)
    
    async def delete_immediate(self, resource: ResourceInput) -> DeleteResult:
        """
        Delete the object stored under exactly `resource_id`.
        
        Returns:
            DeleteResult; falsy when the provider rejected the delete
            
        Raises:
            InvalidResourceError: bucket or resource_id is missing
        """
        request = _as_descriptor(resource, "delete").to_delete()
        return await self._delete(request.bucket, request.resource_id)
    
    async def delete_by_convention(self, resource: ResourceInput) -> DeleteResult:
        """
        Delete the SDK artifact for `resource_id`.
        
        Unlike delete_immediate, the key is `convention_delete_prefix +
        resource_id` (by default "/public-download/sdk/<resource_id>"), never
        the raw resource_id.
        """
        request = _as_descriptor(resource, "delete").to_delete()
        return await self._delete(request.bucket, self.convention_key(request.resource_id))


def get_resource_facade() -> ResourceAccessFacade:
    """Build a façade over the process-wide storage client."""
    return ResourceAccessFacade(get_storage_client())
