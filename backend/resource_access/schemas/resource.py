"""
Pydantic schemas for resource access operations.

ResourceDescriptor is what callers hand in (possibly partial; snake_case and
camelCase keys are both accepted). Each operation converts it into its own
strict request model before any provider call is made.
"""
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from resource_access.exceptions import InvalidResourceError

RequestT = TypeVar("RequestT", bound=BaseModel)


class ResourceDescriptor(BaseModel):
    """Externally stored resource, as described by a caller."""
    bucket: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("bucket", "resourceBucket"),
        description="Storage bucket"
    )
    resource_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("resource_id", "resourceId"),
        description="Object key within the bucket"
    )
    content_type: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("content_type", "contentType", "resourceType"),
        description="MIME type (uploads only)"
    )
    is_public: Optional[bool] = Field(
        None,
        validation_alias=AliasChoices("is_public", "isPublic"),
        description="Upload with public-read ACL"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "bucket": "assets",
                "resourceId": "img/1.png",
                "contentType": "image/png",
                "isPublic": True
            }
        }
    )

    @classmethod
    def from_input(cls, data: Any, operation: str) -> "ResourceDescriptor":
        """Validate a raw mapping, raising InvalidResourceError on bad input."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise InvalidResourceError(operation, _error_fields(e)) from e

    def to_upload(self) -> "UploadRequest":
        return _build(UploadRequest, "upload", {
            "bucket": self.bucket,
            "resource_id": self.resource_id,
            "content_type": self.content_type,
            "is_public": bool(self.is_public),
        })
    
    def to_download(self) -> "DownloadRequest":
        return _build(DownloadRequest, "download", {
            "bucket": self.bucket,
            "resource_id": self.resource_id,
        })
    
    def to_delete(self) -> "DeleteRequest":
        return _build(DeleteRequest, "delete", {
            "bucket": self.bucket,
            "resource_id": self.resource_id,
        })


class DownloadRequest(BaseModel):
    """Strict input for signed GET URLs."""
    bucket: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)


class DeleteRequest(BaseModel):
    """Strict input for delete operations."""
    bucket: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)


class UploadRequest(BaseModel):
    """Strict input for signed PUT URLs."""
    bucket: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)
    content_type: str = Field(..., min_length=1, description="Content-Type the PUT must declare")
    is_public: bool = False


class DeleteResult(BaseModel):
    """
    Outcome of a delete operation.
    
    Truthiness follows `ok`, so callers that only need a boolean can use the
    result directly; `error` and `error_code` keep the provider's cause.
    """
    ok: bool
    key: str
    error: Optional[str] = None
    error_code: Optional[str] = None
    
    def __bool__(self) -> bool:
        return self.ok
    
    @property
    def status(self) -> str:
        """'ok' or 'error', the string form of the result."""
        return "ok" if self.ok else "error"
    
    @classmethod
    def success(cls, key: str) -> "DeleteResult":
        return cls(ok=True, key=key)
    
    @classmethod
    def failure(cls, key: str, exc: BaseException) -> "DeleteResult":
        error_code = None
        response = getattr(exc, "response", None)
        if isinstance(response, dict):
            error_code = response.get("Error", {}).get("Code")
        return cls(ok=False, key=key, error=str(exc), error_code=error_code)


def _error_fields(error: ValidationError) -> List[str]:
    return [".".join(str(part) for part in err["loc"]) or "descriptor" for err in error.errors()]


def _build(model: Type[RequestT], operation: str, data: Dict[str, Any]) -> RequestT:
    try:
        return model(**data)
    except ValidationError as e:
        raise InvalidResourceError(operation, _error_fields(e)) from e
