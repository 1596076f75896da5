"""
Application configuration using Pydantic Settings.
Storage connection parameters are loaded here once, at process start.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Settings for the resource access layer, loaded from environment variables."""
    
    # S3-compatible object storage (DigitalOcean Spaces, Cloudflare R2, ...)
    spaces_endpoint: Optional[str] = None  # e.g., https://nyc3.digitaloceanspaces.com
    spaces_region: str = "auto"  # e.g., nyc3; R2 uses "auto"
    spaces_key: Optional[str] = None  # Access key ID
    spaces_secret: Optional[str] = None  # Secret access key
    spaces_bucket: Optional[str] = None  # Bucket the CDN is scoped to
    spaces_force_path_style: bool = True  # Non-AWS providers need path-style addressing
    
    # CDN fronting the storage endpoint
    spaces_endpoint_cdn: Optional[str] = None  # e.g., https://cdn.example.com
    spaces_cdn_dont_include_bucket: bool = False  # True for R2 custom domains
    
    # Signed URL lifetime in seconds (5 min)
    presign_expiration: int = 300
    
    # Namespace the SDK artifacts live under
    convention_delete_prefix: str = "/public-download/sdk/"
    
    # Logging
    log_level: str = "INFO"
    service_name: str = "resource-access"
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    def missing_storage_fields(self) -> List[str]:
        """Return env names of required storage values that are not set."""
        required = {
            "SPACES_ENDPOINT": self.spaces_endpoint,
            "SPACES_KEY": self.spaces_key,
            "SPACES_SECRET": self.spaces_secret,
        }
        return [name for name, value in required.items() if not value]


# Global settings instance
settings = Settings()
