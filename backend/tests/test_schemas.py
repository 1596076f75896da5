"""
Tests for resource descriptor schemas.
"""
import pytest
from botocore.exceptions import ClientError

from resource_access.exceptions import InvalidResourceError
from resource_access.schemas.resource import (
    DeleteResult,
    ResourceDescriptor,
    UploadRequest,
)


class TestResourceDescriptor:
    """Tests for the permissive boundary descriptor."""
    
    def test_all_fields_optional(self):
        descriptor = ResourceDescriptor()
        assert descriptor.bucket is None
        assert descriptor.is_public is None
    
    def test_camel_case_aliases(self):
        descriptor = ResourceDescriptor.model_validate({
            "resourceBucket": "assets",
            "resourceId": "img/1.png",
            "resourceType": "image/png",
            "isPublic": True,
        })
        assert descriptor.bucket == "assets"
        assert descriptor.resource_id == "img/1.png"
        assert descriptor.content_type == "image/png"
        assert descriptor.is_public is True
    
    def test_content_type_key(self):
        descriptor = ResourceDescriptor.model_validate({
            "bucket": "assets",
            "resourceId": "img/1.png",
            "contentType": "image/png",
        })
        request = descriptor.to_upload()
        assert request.bucket == "assets"
        assert request.content_type == "image/png"

    def test_resource_id_is_not_normalized(self):
        descriptor = ResourceDescriptor(bucket="assets", resource_id="/a//b/../c.txt")
        assert descriptor.to_download().resource_id == "/a//b/../c.txt"
    
    def test_to_upload_defaults_private(self):
        request = ResourceDescriptor(
            bucket="assets",
            resource_id="img/1.png",
            content_type="image/png"
        ).to_upload()
        assert isinstance(request, UploadRequest)
        assert request.is_public is False
    
    def test_to_upload_reports_missing_fields(self):
        with pytest.raises(InvalidResourceError) as exc_info:
            ResourceDescriptor(bucket="assets").to_upload()
        
        assert exc_info.value.operation == "upload"
        assert sorted(exc_info.value.fields) == ["content_type", "resource_id"]
    
    def test_empty_strings_are_rejected(self):
        with pytest.raises(InvalidResourceError) as exc_info:
            ResourceDescriptor(bucket="", resource_id="img/1.png").to_delete()
        
        assert exc_info.value.fields == ["bucket"]
    
    def test_invalid_input_is_typed_error(self):
        with pytest.raises(InvalidResourceError) as exc_info:
            ResourceDescriptor.from_input(None, "download")
        
        assert exc_info.value.operation == "download"
        assert isinstance(exc_info.value, ValueError)
    
    def test_download_ignores_upload_fields(self):
        request = ResourceDescriptor(bucket="assets", resource_id="k").to_download()
        assert request.bucket == "assets"


class TestDeleteResult:
    """Tests for delete outcomes."""
    
    def test_success(self):
        result = DeleteResult.success("img/1.png")
        assert result
        assert result.status == "ok"
        assert result.error is None
    
    def test_failure_keeps_provider_code(self):
        error = ClientError({"Error": {"Code": "NoSuchKey", "Message": "Not Found"}}, "DeleteObject")
        result = DeleteResult.failure("img/1.png", error)
        
        assert not result
        assert result.status == "error"
        assert result.error_code == "NoSuchKey"
        assert "NoSuchKey" in result.error
    
    def test_failure_without_response(self):
        result = DeleteResult.failure("img/1.png", TimeoutError("timed out"))
        
        assert result.error_code is None
        assert result.error == "timed out"
