"""
S3-compatible storage client.

Uses boto3 with the S3 API against DigitalOcean Spaces, Cloudflare R2 or any
other S3-compatible provider. Signing happens locally: issuing a URL never
touches the object itself. Deletes are the only calls that reach the network.
"""
import enum
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from resource_access.config import Settings, settings as default_settings
from resource_access.exceptions import StorageConfigurationError
from resource_access.utils.logging import configure_logging

logger = logging.getLogger(__name__)


class StorageOperation(str, enum.Enum):
    """Operations a signed URL can grant."""
    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"
    
    @property
    def client_method(self) -> str:
        return _CLIENT_METHODS[self]


_CLIENT_METHODS = {
    StorageOperation.GET: "get_object",
    StorageOperation.PUT: "put_object",
    StorageOperation.DELETE: "delete_object",
}


class StorageClient:
    """
    Configured connection to the object storage provider.
    
    Built once from Settings and read-only afterwards, so a single instance
    can be shared across concurrent operations.
    """
    
    def __init__(self, settings: Settings, client: Any = None):
        """
        Initialize the storage client with boto3.
        
        Args:
            settings: Connection parameters
            client: Pre-built boto3 S3 client (tests); built from settings when omitted
            
        Raises:
            StorageConfigurationError: endpoint or credentials are missing
        """
        missing = settings.missing_storage_fields()
        if missing:
            logger.error(f"Object storage not configured, missing: {', '.join(missing)}")
            raise StorageConfigurationError(missing)
        
        self._settings = settings
        
        if client is None:
            addressing_style = 'path' if settings.spaces_force_path_style else 'auto'
            client = boto3.client(
                's3',
                endpoint_url=settings.spaces_endpoint,
                aws_access_key_id=settings.spaces_key,
                aws_secret_access_key=settings.spaces_secret,
                region_name=settings.spaces_region,
                config=Config(
                    signature_version='s3v4',
                    s3={'addressing_style': addressing_style}
                )
            )
        self._client = client
        logger.info(f"Storage client initialized for endpoint: {settings.spaces_endpoint}")
    
    @property
    def settings(self) -> Settings:
        return self._settings
    
    def issue_presigned_url(
        self,
        operation: StorageOperation,
        bucket: str,
        key: str,
        extra_params: Optional[Dict[str, Any]] = None,
        ttl_seconds: int = 300
    ) -> str:
        """
        Sign a URL granting `operation` on one object until it expires.
        
        Args:
            operation: GET, PUT or DELETE
            bucket: Bucket name
            key: Object key
            extra_params: Additional request parameters to sign (ContentType, ACL, ...)
            ttl_seconds: Expiry in seconds
            
        Returns:
            Presigned URL string
            
        Raises:
            botocore errors, unmodified, when the request cannot be signed
        """
        params = {
            'Bucket': bucket,
            'Key': key,
        }
        if extra_params:
            params.update(extra_params)
        
        op = StorageOperation(operation)
        url = self._client.generate_presigned_url(
            ClientMethod=op.client_method,
            Params=params,
            ExpiresIn=ttl_seconds,
            HttpMethod=op.value
        )
        logger.debug(f"Generated presigned {op.value} URL for {bucket}/{key} (expires in {ttl_seconds}s)")
        return url
    
    def execute_delete(self, bucket: str, key: str) -> Dict[str, Any]:
        """
        Delete one object.
        
        Returns:
            The provider's response
            
        Raises:
            botocore errors when the provider rejects the request
        """
        return self._client.delete_object(Bucket=bucket, Key=key)


# Singleton instance
_storage_client: Optional[StorageClient] = None


def get_storage_client() -> StorageClient:
    """
    Get the process-wide storage client, built from the global settings.
    
    Raises:
        StorageConfigurationError: storage settings are incomplete
    """
    global _storage_client
    if _storage_client is None:
        configure_logging(settings=default_settings)
        _storage_client = StorageClient(default_settings)
    return _storage_client


def reset_storage_client() -> None:
    """Drop the process-wide client so the next call rebuilds it."""
    global _storage_client
    _storage_client = None
